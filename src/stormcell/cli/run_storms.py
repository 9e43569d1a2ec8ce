"""Core storm detection runner.

This module contains the actual pipeline runner, separated from argument parsing.
Scripts are thin wrappers; this is the real implementation.
"""

import sys
import json
import logging
import argparse
import importlib.util
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any, List

from stormcell.setup_directories import setup_output_directories
from stormcell.pipeline.processor import StormProcessor
from stormcell.pipeline.report import format_storm_report
from stormcell.radar.downloader import RadarImageDownloader
from stormcell.radar.pixel import StormCell
from stormcell.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig, InternalConfig


logger = logging.getLogger(__name__)


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load config module from {path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def build_config(user_config_path: Optional[str] = None,
                 cli_args: Optional[Dict[str, Any]] = None,
                 verbose: bool = False) -> InternalConfig:
    """Resolve runtime configuration (Param < User < CLI)."""
    param_cfg = ParamConfig()

    user_cfg = None
    if user_config_path:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_args = dict(cli_args or {})
    if verbose and cli_args.get("log_level") is None:
        cli_args["log_level"] = "DEBUG"

    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    return resolve_config(param_cfg, user_cfg, cli_cfg)


def setup_logging(config: InternalConfig, output_dirs: Dict[str, Path]) -> Path:
    """Configure the root logger with a file and a console handler.

    Returns the log file path.
    """
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    log_dir = Path(output_dirs["logs"])
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"storms_{config.station.name}.log"

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    fh = logging.FileHandler(log_path)
    fh.setLevel(log_level)
    fh.setFormatter(formatter)
    root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    logger.info("Logging: level=%s, file=%s", logging.getLevelName(log_level), log_path)
    return log_path


def persist_runtime_config(config: InternalConfig, output_dirs: Dict[str, Path],
                           run_id: Optional[str] = None) -> Path:
    """Save the resolved configuration next to the outputs for reproducibility."""
    run_id = run_id or datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    config_file = Path(output_dirs["base"]) / f"runtime_config_{run_id}.json"

    config_dict = config.model_dump()
    config_dict["run_id"] = run_id
    config_dict["created_at"] = datetime.now(timezone.utc).isoformat()

    with open(config_file, 'w') as f:
        json.dump(config_dict, f, indent=2, default=str)

    logger.info("Runtime config saved: %s", config_file)
    return config_file


def run_storm_pipeline(
    user_config_path: Optional[str] = None,
    image_path: Optional[str] = None,
    base_image_path: Optional[str] = None,
    fetch: bool = False,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> List[StormCell]:
    """Execute storm detection on one radar image.

    The image is either given directly or, with ``fetch=True``, the newest
    published product is downloaded into the ``images`` output directory.

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict).
    image_path : str, optional
        Local radar product image.
    base_image_path : str, optional
        Clean base map for the result image.
    fetch : bool, optional
        Download the latest image instead of reading ``image_path``.
    cli_args : dict, optional
        CLI argument overrides. Keys: base_dir, station_name, log_level,
        render. All optional.
    verbose : bool, optional
        If True, enable DEBUG logging and print full resolved config.

    Returns
    -------
    list of StormCell
        Ranked storm cells.

    Raises
    ------
    ValueError
        If neither an image nor ``fetch`` is given, or configuration
        validation fails.
    requests.HTTPError
        If the download fails.
    """
    if image_path is None and not fetch:
        raise ValueError("Either an image path or fetch=True is required")

    config = build_config(user_config_path, cli_args, verbose)
    output_dirs = setup_output_directories(config.base_dir)
    setup_logging(config, output_dirs)
    persist_runtime_config(config, output_dirs)

    print(f"\n{'='*60}")
    print("Storm Cell Detection")
    print('='*60)
    print(f"Config:  {user_config_path or '(defaults)'}")
    print(f"Station: {config.station.name}")
    print(f"Output:  {output_dirs['base']}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2, default=str))
        print('='*60)

    if fetch:
        downloader = RadarImageDownloader(config)
        url = downloader.build_url()
        image_path = downloader.download(url, Path(output_dirs["images"]) / url.rsplit("/", 1)[-1])

    processor = StormProcessor(config, output_dirs)
    result = processor.process(image_path, base_image_path)

    print(format_storm_report(result.storms, config.station.name))
    return result.storms


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Detect storm cells in a radar product image")
    parser.add_argument("config", nargs="?", help="Path to user config file")
    parser.add_argument("--image", help="Radar product image to analyse")
    parser.add_argument("--base-image", help="Clean base map for the result image")
    parser.add_argument("--fetch", action="store_true", help="Download the latest product image")
    parser.add_argument("--base-dir", help="Output directory")
    parser.add_argument("--station", help="Override station name")
    parser.add_argument("--no-render", action="store_true", help="Skip the result image")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    if args.image is None and not args.fetch:
        parser.error("one of --image or --fetch is required")

    cli_args = {
        "base_dir": args.base_dir,
        "station_name": args.station,
        "render": False if args.no_render else None,
    }

    try:
        run_storm_pipeline(
            user_config_path=args.config,
            image_path=args.image,
            base_image_path=args.base_image,
            fetch=args.fetch,
            cli_args=cli_args,
            verbose=args.verbose,
        )
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except Exception as e:
        logger.exception("Storm detection failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
