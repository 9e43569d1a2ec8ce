"""Command-line interface modules for storm detection.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from stormcell.cli.run_storms import run_storm_pipeline, main

__all__ = ['run_storm_pipeline', 'main']
