"""Command-line layer of the settings stack.

Only the knobs an operator flips from one invocation to the next live
here; everything else belongs in the user config file.
"""

from typing import Literal, Optional
from stormcell.schemas.base import StormBaseModel


class CLIConfig(StormBaseModel):
    """Overrides taken from argparse; highest precedence in resolve_config.

    Example::

        cli_cfg = CLIConfig(base_dir="/scratch/storms", render=False)
        config = resolve_config(ParamConfig(), user_cfg, cli_cfg)
    """

    base_dir: Optional[str] = None
    station_name: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    render: Optional[bool] = None

    def to_internal_overrides(self) -> dict:
        """Nested override dict holding only the options that were given."""
        sections = {
            "station": {"name": self.station_name},
            "logging": {"level": self.log_level},
            "renderer": {"enabled": self.render},
        }

        overrides = {}
        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)
        for section, values in sections.items():
            values = {k: v for k, v in values.items() if v is not None}
            if values:
                overrides[section] = values
        return overrides
