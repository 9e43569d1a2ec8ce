"""
Output tree of the storm detector.

Everything a run produces goes under one base directory:
- images: downloaded radar product images
- analysis: per-image storm tables (CSV)
- plots: annotated result images
- logs: run log files

The resolved runtime config JSON is written to the base directory itself.
"""

from pathlib import Path


def setup_output_directories(base_output_dir=None):
    """
    Create the output tree and return its paths.

    Parameters
    ----------
    base_output_dir : str or Path, optional
        Root of the tree. Defaults to ``./output`` under the current
        working directory; ``~`` is expanded.

    Returns
    -------
    dict
        Absolute paths keyed 'base', 'images', 'analysis', 'plots', 'logs'.
        Calling twice with the same base returns equal dicts.
    """
    base = Path(base_output_dir) if base_output_dir is not None else Path.cwd() / "output"
    base = base.expanduser().resolve()

    directories = {"base": base}
    for name in ("images", "analysis", "plots", "logs"):
        directories[name] = base / name

    for path in directories.values():
        path.mkdir(parents=True, exist_ok=True)

    return directories


def get_analysis_path(output_dirs, image_name):
    """CSV path for the storm table of one image."""
    return Path(output_dirs["analysis"]) / f"{Path(image_name).stem}_storms.csv"


def get_plot_path(output_dirs, image_name):
    """PNG path for the annotated result of one image."""
    return Path(output_dirs["plots"]) / f"{Path(image_name).stem}_result.png"
