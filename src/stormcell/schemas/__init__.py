"""Pydantic configuration schemas for the stormcell pipeline.

This module provides strictly typed configuration models for the storm
cell detector. All configuration validation, coercion, and normalization
happens at schema validation time via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from stormcell.schemas.resolve import resolve_config
from stormcell.schemas.internal import InternalConfig
from stormcell.schemas.param import ParamConfig
from stormcell.schemas.user import UserConfig
from stormcell.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
