#!/usr/bin/env python3
"""Storm cell detection runner.

Usage:
    python scripts/run_storm_pipeline.py scripts/user_config.py --image radar.png
    python scripts/run_storm_pipeline.py scripts/user_config.py --fetch --base-image base.png
    python scripts/run_storm_pipeline.py --image radar.png --no-render

Note: User config in scripts/user_config.py, expert config in src/stormcell/schemas/param.py
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from stormcell.cli.run_storms import main


if __name__ == "__main__":
    sys.exit(main())
