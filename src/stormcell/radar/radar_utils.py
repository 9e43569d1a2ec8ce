#!/usr/bin/env python3
"""Utility functions for storm cell location and geometry.

Centralized helper functions for:
- Intensity-weighted cell centroids
- Polar position of a centroid relative to the radar origin
- Compass labelling of bearings
- Axis orientation angles

These utilities support the assembler and shape analyzer, providing
consistent definitions of "centroid" and "bearing" across the pipeline.
"""

import math
import logging
from typing import Iterable, Tuple

import numpy as np

from stormcell.radar.compass import bearing_to_compass
from stormcell.radar.pixel import Pixel

__all__ = [
    'compute_intensity_centroid',
    'compute_distance',
    'compute_bearing',
    'bearing_to_compass',
    'compute_axis_angle',
    'max_intensity',
]

logger = logging.getLogger(__name__)


# ============================================================================
# CENTROID
# ============================================================================

def compute_intensity_centroid(pixels: Iterable[Pixel], min_intensity: int) -> Tuple[int, int]:
    """Compute the intensity-weighted centroid (x, y) of a cell.

    Only pixels with ``intensity >= min_intensity`` contribute; the weight
    of each is its tier value. Weaker pixels still count towards the cell
    size but never move the centroid.

    Parameters
    ----------
    pixels : iterable of Pixel
        Cell members.
    min_intensity : int
        Tier floor (dBZ) for contributing pixels.

    Returns
    -------
    tuple of (int, int)
        Centroid rounded to the nearest pixel. ``(0, 0)`` when no pixel
        qualifies (zero weight sum).

    Notes
    -----
    - Rounding uses ``np.round`` (halves go to the even neighbour)
    - The result always lies inside the bounding box of the qualifying
      pixels, since both box edges are integers

    Examples
    --------
    >>> compute_intensity_centroid(cell_pixels, min_intensity=45)
    (212, 148)
    """
    coords = np.array(
        [(p.x, p.y, p.intensity) for p in pixels if p.intensity >= min_intensity],
        dtype=float,
    ).reshape(-1, 3)

    weights = coords[:, 2]
    sum_weight = weights.sum()
    if sum_weight == 0:
        return 0, 0

    x_center = float(np.dot(coords[:, 0], weights) / sum_weight)
    y_center = float(np.dot(coords[:, 1], weights) / sum_weight)
    return int(np.round(x_center)), int(np.round(y_center))


def max_intensity(pixels: Iterable[Pixel]) -> int:
    """Highest tier among the pixels, 0 for an empty collection."""
    return max((p.intensity for p in pixels), default=0)


# ============================================================================
# POLAR POSITION
# ============================================================================

def compute_distance(centroid: Tuple[float, float], origin: Tuple[float, float],
                     distance_ratio: float) -> float:
    """Distance from the radar origin in physical units (km).

    Euclidean pixel distance multiplied by ``distance_ratio`` (km per pixel).
    """
    dx = centroid[0] - origin[0]
    dy = centroid[1] - origin[1]
    return math.sqrt(dx * dx + dy * dy) * distance_ratio


def compute_bearing(centroid: Tuple[float, float], origin: Tuple[float, float]) -> float:
    """Compass bearing (degrees) from the radar origin to a centroid.

    0 deg is North (up in the image, decreasing y) and angles increase
    clockwise. Each quadrant is resolved with ``asin`` of the vertical
    component, and the axis-aligned cases are returned exactly.

    Parameters
    ----------
    centroid : tuple of float
        Cell position (x, y) in image coordinates.
    origin : tuple of float
        Radar position (x, y) in image coordinates.

    Returns
    -------
    float
        Bearing in [0, 360). A centroid that coincides with the origin has
        no direction; 0.0 is returned for it.

    Examples
    --------
    >>> compute_bearing((300, 250), (300, 300))
    0.0
    >>> compute_bearing((350, 300), (300, 300))
    90.0
    """
    x = centroid[0] - origin[0]
    y = origin[1] - centroid[1]  # image y grows downward
    length = math.sqrt(x * x + y * y)

    if x > 0 and y > 0:
        bearing = 90.0 - math.degrees(math.asin(y / length))
    elif x < 0 and y > 0:
        bearing = 270.0 + math.degrees(math.asin(y / length))
    elif x < 0 and y < 0:
        bearing = 270.0 - math.degrees(math.asin(-y / length))
    elif x > 0 and y < 0:
        bearing = 90.0 + math.degrees(math.asin(-y / length))
    elif x == 0 and y > 0:
        bearing = 0.0
    elif x == 0 and y < 0:
        bearing = 180.0
    elif x > 0 and y == 0:
        bearing = 90.0
    elif x < 0 and y == 0:
        bearing = 270.0
    else:
        logger.debug("Centroid %s coincides with radar origin; bearing set to 0", centroid)
        return 0.0

    # asin rounding can land a near-north bearing on exactly 360
    return bearing % 360.0


def compute_axis_angle(center: Tuple[float, float], point: Tuple[float, float]) -> float:
    """Orientation (radians) of the center->point direction, math convention."""
    return math.atan2(point[1] - center[1], point[0] - center[0])
