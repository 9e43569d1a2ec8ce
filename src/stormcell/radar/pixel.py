"""Value types shared by the clustering and geometry stages.

- Pixel: one classified sample of the radar image
- ShapeFit: principal-axis fit of a cell's strong pixels
- StormCell: one ranked storm cell, the output unit of the detector
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from stormcell.radar.compass import bearing_to_compass

__all__ = ['Pixel', 'ShapeType', 'ShapeFit', 'StormCell']


@dataclass(frozen=True)
class Pixel:
    """Classified radar image sample.

    Pixels are immutable and compare by value, so two samples with the same
    coordinates, colour and tier are interchangeable in sets.

    Attributes
    ----------
    x, y : int
        Image coordinates (y grows downward).
    color : tuple of int
        RGBA colour read from the image.
    intensity : int
        Reflectivity tier in dBZ (15, 20, ..., 70), or 0 if unclassified.
    """
    x: int
    y: int
    color: Tuple[int, int, int, int]
    intensity: int


class ShapeType(str, Enum):
    """Cell morphology derived from the axis eccentricity."""
    SINGLE_CELL = "single-cell"
    MULTI_CELL = "multi-cell"


@dataclass(frozen=True)
class ShapeFit:
    """Oriented-ellipse proxy for a cell.

    Attributes
    ----------
    major_axis_end : tuple of int
        Strong pixel farthest from the centroid (centroid itself when the
        fit is degenerate).
    major_axis_length : float
        Centroid to major_axis_end distance (semi-major axis, pixels).
    minor_axis_length : float
        Largest perpendicular distance of a strong pixel from the major axis.
    axis_angle : float
        Major axis orientation in radians, math convention (atan2).
    eccentricity : float
        sqrt(1 - (minor/major)**2), 0.0 when the major axis is zero.
    strong_pixel_count : int
        Number of pixels that took part in the fit.
    drawable : bool
        True when enough strong pixels support drawing the ellipse.
    """
    major_axis_end: Tuple[int, int]
    major_axis_length: float
    minor_axis_length: float
    axis_angle: float
    eccentricity: float
    strong_pixel_count: int
    drawable: bool


@dataclass(frozen=True)
class StormCell:
    """Storm cell record produced by StormAssembler.

    ``storm_id`` is 0 until the assembler ranks the cells by distance;
    afterwards ids form the dense sequence 1..N.
    """
    storm_id: int
    centroid: Tuple[int, int]
    distance: float
    bearing: float
    max_intensity: int
    shape_type: ShapeType
    pixels: Tuple[Pixel, ...]
    shape: ShapeFit

    @property
    def compass(self) -> str:
        """Eight-point compass label of the bearing."""
        return bearing_to_compass(self.bearing)

    @property
    def size(self) -> int:
        return len(self.pixels)
