"""Shared pydantic base for every stormcell settings layer."""

from pydantic import BaseModel, ConfigDict


class StormBaseModel(BaseModel):
    """Strict base model for detector settings.

    Unknown keys are errors and assignments are re-validated, so a typo
    in a section name or field fails when the config is resolved, not
    halfway through a frame. UserConfig relaxes ``extra`` for legacy keys;
    InternalConfig adds ``frozen``.
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
