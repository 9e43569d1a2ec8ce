"""ParamConfig: Expert defaults for the stormcell pipeline.

This module defines the complete default configuration. The values match
the Guangzhou S-band PPI product the detector was tuned on. ALL pipeline
parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from stormcell.schemas.base import StormBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class PaletteEntry(StormBaseModel):
    """One reference colour of the reflectivity legend and its tier (dBZ)."""
    color: tuple[int, int, int, int]
    tier: int = Field(ge=0)

    @field_validator("color")
    @classmethod
    def check_channel_range(cls, v):
        """Each RGBA channel must be a byte."""
        if any(c < 0 or c > 255 for c in v):
            raise ValueError(f"palette colour channels must be in 0..255, got {v}")
        return v


def default_palette() -> list[PaletteEntry]:
    """Reflectivity legend of the PPI product, weakest tier first."""
    return [
        PaletteEntry(color=(0, 0, 246, 255), tier=15),
        PaletteEntry(color=(0, 254, 0, 255), tier=20),
        PaletteEntry(color=(0, 200, 0, 255), tier=25),
        PaletteEntry(color=(0, 144, 0, 255), tier=30),
        PaletteEntry(color=(254, 254, 0, 255), tier=35),
        PaletteEntry(color=(230, 192, 0, 255), tier=40),
        PaletteEntry(color=(254, 144, 0, 255), tier=45),
        PaletteEntry(color=(254, 0, 0, 255), tier=50),
        PaletteEntry(color=(166, 0, 0, 255), tier=55),
        PaletteEntry(color=(100, 0, 0, 255), tier=60),
        PaletteEntry(color=(254, 0, 254, 255), tier=65),
        PaletteEntry(color=(152, 84, 200, 255), tier=70),
    ]


class StationConfig(StormBaseModel):
    """Radar site and image geometry."""
    name: str = "GuangZhou"
    radar_center: tuple[float, float] = (300.0, 300.0)
    radar_area: tuple[int, int] = (599, 599)
    distance_ratio: float = Field(200.0 / (300.0 - 65.0), gt=0, description="km per pixel")


class FetcherConfig(StormBaseModel):
    """Latest-image download settings."""
    url_head: str = "http://tqyb.com.cn/data/radar/gz/19/"
    url_middle: str = "/Z9200_"
    url_end: str = "Z_PPI_02_19.png"
    step_minutes: int = Field(6, ge=1, le=60, description="Product interval in minutes")
    delay_minutes: int = Field(12, ge=0, description="Publication delay in minutes")
    timeout_sec: float = Field(30.0, gt=0)
    min_file_size: int = Field(1024, ge=1, description="Minimum file size in bytes to consider valid")


class ClassifierConfig(StormBaseModel):
    """Colour to intensity tier classification."""
    delta: int = Field(10, ge=0, le=255, description="Per-channel colour tolerance")
    palette: list[PaletteEntry] = Field(default_factory=default_palette)


class ClustererConfig(StormBaseModel):
    """Pixel clustering and cluster acceptance."""
    adjacent_threshold: int = Field(2, ge=1, description="Chebyshev neighbourhood radius in pixels")
    min_size: int = Field(40, ge=0, description="Clusters must have MORE pixels than this")
    min_intensity: int = Field(45, ge=0, description="Clusters must reach this tier (dBZ)")
    method: Literal["scan", "kdtree"] = "scan"

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method_name(cls, v):
        """Normalize method names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class ShapeConfig(StormBaseModel):
    """Axis fitting and morphology classification."""
    strong_intensity: int = Field(45, ge=0, description="Tier floor for axis-fitting pixels")
    major_pixel_threshold: int = Field(50, ge=0, description="Strong pixels needed to draw the ellipse")
    type_threshold: float = Field(0.88, ge=0, le=1.0, description="Eccentricity for multi-cell")


class RendererConfig(StormBaseModel):
    """Result image settings."""
    enabled: bool = True
    dpi: int = Field(100, ge=50)
    centroid_color: tuple[int, int, int, int] = (0, 255, 0, 255)
    line_color: tuple[int, int, int, int] = (105, 131, 255, 255)
    ellipse_color: tuple[int, int, int, int] = (118, 95, 255, 255)
    label_color: tuple[int, int, int, int] = (255, 255, 255, 255)
    label_offset: tuple[int, int] = (15, -15)
    font_size: float = Field(18.0, gt=0)


class LoggingConfig(StormBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(StormBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all pipeline parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    base_dir: Optional[str] = None
    station: StationConfig = Field(default_factory=StationConfig)
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    clusterer: ClustererConfig = Field(default_factory=ClustererConfig)
    shape: ShapeConfig = Field(default_factory=ShapeConfig)
    renderer: RendererConfig = Field(default_factory=RendererConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
