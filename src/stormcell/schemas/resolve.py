"""Layering of the three settings sources into one InternalConfig.

Sources, lowest precedence first:

1. ParamConfig: tuned defaults for the GuangZhou PPI product
2. UserConfig: the ``CONFIG`` dict of a user config file
3. CLIConfig: command-line flags

Each layer contributes a nested override dict; the dicts are merged
section by section and the result is validated once, as InternalConfig.
"""

from typing import Optional, Type, TypeVar, Union

from stormcell.schemas.base import StormBaseModel
from stormcell.schemas.param import ParamConfig
from stormcell.schemas.user import UserConfig
from stormcell.schemas.cli import CLIConfig
from stormcell.schemas.internal import InternalConfig

_Layer = TypeVar("_Layer", bound=StormBaseModel)


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Merge override dicts into a copy of base, recursing into sub-dicts.

    Non-dict values, lists such as the palette included, are replaced
    wholesale. The inputs are not modified.

    Examples
    --------
    >>> deep_merge({"clusterer": {"min_size": 40, "min_intensity": 45}},
    ...            {"clusterer": {"min_size": 3}})
    {'clusterer': {'min_size': 3, 'min_intensity': 45}}
    """
    merged = dict(base)
    for override in overrides:
        for key, value in override.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[key] = deep_merge(current, value)
            else:
                merged[key] = value
    return merged


def _as_layer(value, model: Type[_Layer]) -> _Layer:
    """Accept a model instance, a raw dict, or None (empty layer)."""
    if isinstance(value, model):
        return value
    if not value:
        return model()
    return model.model_validate(value)


def resolve_config(
    param_cfg: Union[dict, ParamConfig],
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Build the frozen runtime configuration.

    Parameters
    ----------
    param_cfg : dict or ParamConfig
        Complete defaults.
    user_cfg : dict or UserConfig, optional
        User overrides; flat uppercase aliases are accepted.
    cli_cfg : dict or CLIConfig, optional
        Command-line overrides.

    Returns
    -------
    InternalConfig

    Raises
    ------
    pydantic.ValidationError
        On any invalid value, e.g. a radar centre outside the radar area
        or an unknown clustering method.

    Examples
    --------
    >>> config = resolve_config(ParamConfig(), UserConfig(MIN_SIZE=30))
    >>> config.clusterer.min_size
    30
    """
    param = _as_layer(param_cfg, ParamConfig)
    user = _as_layer(user_cfg, UserConfig)
    cli = _as_layer(cli_cfg, CLIConfig)

    merged = deep_merge(
        param.model_dump(),
        user.to_internal_overrides(),
        cli.to_internal_overrides(),
    )
    return InternalConfig.model_validate(merged)
