# src/stormcell/radar/shape_analyzer.py
"""Principal-axis fit and morphology classification of storm cells.

The fit is an oriented-ellipse proxy built from a cell's strong pixels:

- Major axis: from the centroid to the strong pixel farthest from it
- Minor axis: the largest perpendicular distance of a strong pixel from
  the major-axis line
- Eccentricity: sqrt(1 - (minor / major)**2)

A cell whose eccentricity falls in [type_threshold, 1) is elongated
enough to be a multi-cell line or cluster; anything else (including a
degenerate zero-length fit and a perfectly collinear one, e == 1) is a
single cell.

"Strong" uses its own tier floor (``shape.strong_intensity``), which is
independent from the cluster acceptance floor even though both default
to 45 dBZ.
"""

import math
import logging
from typing import TYPE_CHECKING, Iterable, Tuple

from stormcell.radar.pixel import Pixel, ShapeFit, ShapeType
from stormcell.radar.radar_utils import compute_axis_angle

if TYPE_CHECKING:
    from stormcell.schemas import InternalConfig

__all__ = ['RadarShapeAnalyzer', 'eccentricity', 'point_line_distance']

logger = logging.getLogger(__name__)


def eccentricity(major_axis: float, minor_axis: float) -> float:
    """Eccentricity of an axis pair; 0.0 when the major axis is zero.

    The ratio is clamped so rounding error can never produce a NaN.
    """
    if major_axis <= 0:
        return 0.0
    ratio = minor_axis / major_axis
    return math.sqrt(max(0.0, 1.0 - ratio * ratio))


def point_line_distance(point: Tuple[float, float], start: Tuple[float, float],
                        end: Tuple[float, float]) -> float:
    """Perpendicular distance from point to the line through start and end.

    Returns 0.0 when start and end coincide (no line).
    """
    x0, y0 = start
    x1, y1 = end
    x, y = point
    line_length = math.sqrt((y1 - y0) ** 2 + (x1 - x0) ** 2)
    if line_length == 0:
        return 0.0
    return abs((y1 - y0) * x - (x1 - x0) * y + x1 * y0 - y1 * x0) / line_length


class RadarShapeAnalyzer:
    """Fit major/minor axes to a cell and classify its morphology.

    Parameters are read from the ``shape`` section of InternalConfig:

    - `strong_intensity` : tier floor for pixels used by the fit
    - `major_pixel_threshold` : strong pixels required before the fitted
      ellipse is considered reliable enough to draw
    - `type_threshold` : eccentricity at which a cell becomes multi-cell

    Examples
    --------
    >>> analyzer = RadarShapeAnalyzer(config)
    >>> fit = analyzer.fit(centroid, cell_pixels)
    >>> analyzer.classify(fit)
    <ShapeType.SINGLE_CELL: 'single-cell'>
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.strong_intensity = config.shape.strong_intensity
        self.major_pixel_threshold = config.shape.major_pixel_threshold
        self.type_threshold = config.shape.type_threshold

    def fit(self, centroid: Tuple[int, int], pixels: Iterable[Pixel]) -> ShapeFit:
        """Fit the axis pair of a cell around its centroid.

        Parameters
        ----------
        centroid : tuple of int
            Intensity-weighted centroid (x, y) of the cell.
        pixels : iterable of Pixel
            All cell members; only strong ones are used.

        Returns
        -------
        ShapeFit
            Zero-length axes when fewer than two strong pixels exist.
        """
        strong = [(p.x, p.y) for p in pixels if p.intensity >= self.strong_intensity]
        drawable = len(strong) >= self.major_pixel_threshold

        if len(strong) < 2:
            return ShapeFit(
                major_axis_end=tuple(centroid),
                major_axis_length=0.0,
                minor_axis_length=0.0,
                axis_angle=0.0,
                eccentricity=0.0,
                strong_pixel_count=len(strong),
                drawable=drawable,
            )

        cx, cy = centroid
        major_length = 0.0
        major_end = (cx, cy)
        for x, y in strong:
            dist = math.hypot(x - cx, y - cy)
            if dist > major_length:
                major_length = dist
                major_end = (x, y)

        minor_length = max(point_line_distance(pt, (cx, cy), major_end) for pt in strong)

        return ShapeFit(
            major_axis_end=major_end,
            major_axis_length=major_length,
            minor_axis_length=minor_length,
            axis_angle=compute_axis_angle((cx, cy), major_end),
            eccentricity=eccentricity(major_length, minor_length),
            strong_pixel_count=len(strong),
            drawable=drawable,
        )

    def classify(self, fit: ShapeFit) -> ShapeType:
        """Multi-cell when type_threshold <= eccentricity < 1, else single-cell."""
        if fit.major_axis_length > 0 and self.type_threshold <= fit.eccentricity < 1.0:
            return ShapeType.MULTI_CELL
        return ShapeType.SINGLE_CELL
