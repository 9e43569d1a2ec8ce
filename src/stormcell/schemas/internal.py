"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that processing code depends on.

All .get() calls, fallback defaults, and validation logic are FORBIDDEN in
runtime code - everything is explicit here.
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict, field_validator, model_validator
from stormcell.schemas.base import StormBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

def _check_rgba(v):
    if any(c < 0 or c > 255 for c in v):
        raise ValueError(f"colour channels must be in 0..255, got {v}")
    return v


class InternalPaletteEntry(StormBaseModel):
    """Runtime palette entry."""
    color: tuple[int, int, int, int]
    tier: int = Field(ge=0)

    @field_validator("color")
    @classmethod
    def check_color(cls, v):
        """Each RGBA channel must be a byte."""
        return _check_rgba(v)


class InternalStationConfig(StormBaseModel):
    """Runtime radar site configuration."""
    name: str
    radar_center: tuple[float, float]
    radar_area: tuple[int, int]
    distance_ratio: float = Field(gt=0)

    @model_validator(mode="after")
    def center_inside_area(self):
        """The radar origin must lie inside the analysed image area."""
        cx, cy = self.radar_center
        width, height = self.radar_area
        if not (0 <= cx < width and 0 <= cy < height):
            raise ValueError(
                f"radar_center {self.radar_center} lies outside radar_area {self.radar_area}"
            )
        return self


class InternalFetcherConfig(StormBaseModel):
    """Runtime download configuration."""
    url_head: str
    url_middle: str
    url_end: str
    step_minutes: int = Field(ge=1, le=60)
    delay_minutes: int = Field(ge=0)
    timeout_sec: float = Field(gt=0)
    min_file_size: int = Field(ge=1)


class InternalClassifierConfig(StormBaseModel):
    """Runtime classifier configuration."""
    delta: int = Field(ge=0, le=255)
    palette: list[InternalPaletteEntry] = Field(min_length=1)


class InternalClustererConfig(StormBaseModel):
    """Runtime clustering configuration."""
    adjacent_threshold: int = Field(ge=1)
    min_size: int = Field(ge=0)
    min_intensity: int = Field(ge=0)
    method: Literal["scan", "kdtree"]


class InternalShapeConfig(StormBaseModel):
    """Runtime shape analysis configuration."""
    strong_intensity: int = Field(ge=0)
    major_pixel_threshold: int = Field(ge=0)
    type_threshold: float = Field(ge=0, le=1.0)


class InternalRendererConfig(StormBaseModel):
    """Runtime renderer settings."""
    enabled: bool
    dpi: int = Field(ge=50)
    centroid_color: tuple[int, int, int, int]
    line_color: tuple[int, int, int, int]
    ellipse_color: tuple[int, int, int, int]
    label_color: tuple[int, int, int, int]
    label_offset: tuple[int, int]
    font_size: float = Field(gt=0)

    @field_validator("centroid_color", "line_color", "ellipse_color", "label_color")
    @classmethod
    def check_colors(cls, v):
        """Each RGBA channel must be a byte."""
        return _check_rgba(v)


class InternalLoggingConfig(StormBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(StormBaseModel):
    """Authoritative runtime configuration.

    This is the ONLY configuration schema that processing code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters (no None for fields that runtime depends on).

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.min_size = config.clusterer.min_size  # NOT .get()
            self.radar_center = config.station.radar_center

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO type checking
    - NO validation

    All of that happens during config resolution, not in runtime code.
    """

    base_dir: Optional[str]
    station: InternalStationConfig
    fetcher: InternalFetcherConfig
    classifier: InternalClassifierConfig
    clusterer: InternalClustererConfig
    shape: InternalShapeConfig
    renderer: InternalRendererConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
