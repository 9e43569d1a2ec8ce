"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., MIN_SIZE → min_size, BASE_DIR → base_dir).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient to accept
both uppercase and lowercase keys, integers where floats are expected, etc.
"""

from typing import Any, Optional
from pydantic import Field, field_validator
from stormcell.schemas.base import StormBaseModel


class UserStationConfig(StormBaseModel):
    """User-facing station config."""
    name: Optional[str] = None
    radar_center: Optional[tuple[float, float]] = None
    radar_area: Optional[tuple[int, int]] = None
    distance_ratio: Optional[float] = None


class UserFetcherConfig(StormBaseModel):
    """User-facing download config."""
    url_head: Optional[str] = None
    url_middle: Optional[str] = None
    url_end: Optional[str] = None
    step_minutes: Optional[int] = None
    delay_minutes: Optional[int] = None
    timeout_sec: Optional[float] = None
    min_file_size: Optional[int] = None


class UserClassifierConfig(StormBaseModel):
    """User-facing classifier config."""
    delta: Optional[int] = None
    palette: Optional[list[dict[str, Any]]] = None


class UserClustererConfig(StormBaseModel):
    """User-facing clustering config with aliases."""
    adjacent_threshold: Optional[int] = None
    min_size: Optional[int] = None
    min_intensity: Optional[int] = None
    method: Optional[str] = None

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v):
        """Normalize method names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserShapeConfig(StormBaseModel):
    """User-facing shape analysis config."""
    strong_intensity: Optional[int] = None
    major_pixel_threshold: Optional[int] = None
    type_threshold: Optional[float] = None


class UserRendererConfig(StormBaseModel):
    """User-facing renderer config."""
    enabled: Optional[bool] = None
    dpi: Optional[int] = None
    centroid_color: Optional[tuple[int, int, int, int]] = None
    line_color: Optional[tuple[int, int, int, int]] = None
    ellipse_color: Optional[tuple[int, int, int, int]] = None
    label_color: Optional[tuple[int, int, int, int]] = None
    label_offset: Optional[tuple[int, int]] = None
    font_size: Optional[float] = None


class UserConfig(StormBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    This config is converted to internal overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            base_dir="/data/storms",
            min_size=30,
            radar_center=(320, 310),
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Top-level operational settings
    base_dir: Optional[str] = Field(None, alias="BASE_DIR")
    station_name: Optional[str] = Field(None, alias="STATION_NAME")
    log_level: Optional[str] = Field(None, alias="LOG_LEVEL")

    # Station geometry (flat aliases)
    radar_center: Optional[tuple[float, float]] = Field(None, alias="RADAR_CENTER")
    radar_area: Optional[tuple[int, int]] = Field(None, alias="RADAR_AREA")
    distance_ratio: Optional[float] = Field(None, alias="DISTANCE_RATIO")

    # Classification (flat aliases)
    delta: Optional[int] = Field(None, alias="DELTA")

    # Clustering (flat aliases)
    adjacent_threshold: Optional[int] = Field(None, alias="ADJACENT_THRESHOLD")
    min_size: Optional[int] = Field(None, alias="MIN_SIZE")
    min_intensity: Optional[int] = Field(None, alias="MIN_INTENSITY")
    cluster_method: Optional[str] = Field(None, alias="CLUSTER_METHOD")

    # Shape (flat aliases)
    strong_intensity: Optional[int] = Field(None, alias="STRONG_INTENSITY")
    major_pixel_threshold: Optional[int] = Field(None, alias="MAJOR_PIXEL_THRESHOLD")
    type_threshold: Optional[float] = Field(None, alias="TYPE_THRESHOLD")

    # Rendering (flat aliases)
    render: Optional[bool] = Field(None, alias="RENDER")

    # Nested overrides (advanced users)
    station: Optional[UserStationConfig] = None
    fetcher: Optional[UserFetcherConfig] = None
    classifier: Optional[UserClassifierConfig] = None
    clusterer: Optional[UserClustererConfig] = None
    shape: Optional[UserShapeConfig] = None
    renderer: Optional[UserRendererConfig] = None

    model_config = StormBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("distance_ratio", "type_threshold", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    @field_validator("cluster_method", mode="before")
    @classmethod
    def normalize_method_names(cls, v):
        """Normalize method names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept 'debug' as well as 'DEBUG'."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @staticmethod
    def _section(flat: dict, nested: Optional[StormBaseModel]) -> dict:
        """Flat aliases first, explicit nested section wins."""
        section = {k: v for k, v in flat.items() if v is not None}
        if nested is not None:
            section.update(nested.model_dump(exclude_none=True))
        return section

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        sections = {
            "station": self._section({
                "name": self.station_name,
                "radar_center": self.radar_center,
                "radar_area": self.radar_area,
                "distance_ratio": self.distance_ratio,
            }, self.station),
            "fetcher": self._section({}, self.fetcher),
            "classifier": self._section({"delta": self.delta}, self.classifier),
            "clusterer": self._section({
                "adjacent_threshold": self.adjacent_threshold,
                "min_size": self.min_size,
                "min_intensity": self.min_intensity,
                "method": self.cluster_method,
            }, self.clusterer),
            "shape": self._section({
                "strong_intensity": self.strong_intensity,
                "major_pixel_threshold": self.major_pixel_threshold,
                "type_threshold": self.type_threshold,
            }, self.shape),
            "renderer": self._section({"enabled": self.render}, self.renderer),
        }

        for name, section in sections.items():
            if section:
                overrides[name] = section

        return overrides
