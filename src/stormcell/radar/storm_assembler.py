# src/stormcell/radar/storm_assembler.py
"""Assemble ranked storm cells from classified radar pixels.

This module runs the per-cluster analysis (centroid, polar position, shape)
and ranks the resulting cells by distance from the radar. Output is a list
of StormCell records; ``to_dataframe`` flattens it to a Pandas DataFrame
with one row per cell for reporting and CSV export.

The assembler handles:
- Intensity-weighted centroids in pixel coordinates
- Distance (km) and compass bearing from the radar origin
- Principal-axis fit and single-/multi-cell classification
- Stable distance ranking with dense ids 1..N
"""

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Sequence

import pandas as pd

from stormcell.radar.pixel import Pixel, StormCell
from stormcell.radar.cell_clusterer import RadarCellClusterer
from stormcell.radar.shape_analyzer import RadarShapeAnalyzer
from stormcell.radar.radar_utils import (
    compute_intensity_centroid,
    compute_distance,
    compute_bearing,
    max_intensity,
)

if TYPE_CHECKING:
    from stormcell.schemas import InternalConfig

__all__ = ['StormAssembler', 'STORM_COLUMNS']

logger = logging.getLogger(__name__)

STORM_COLUMNS = [
    "storm_id",
    "centroid_x",
    "centroid_y",
    "distance_km",
    "bearing_deg",
    "compass",
    "max_intensity_dbz",
    "storm_type",
    "cell_npixels",
    "strong_npixels",
    "major_axis_px",
    "minor_axis_px",
    "eccentricity",
]


class StormAssembler:
    """Turn classified pixels into an ordered list of storm cells.

    Pipeline per frame:

    1. **Clustering**: connected components of adjacent pixels, filtered
       by size and peak intensity (RadarCellClusterer).
    2. **Centroid**: intensity-weighted over pixels reaching the cluster
       intensity floor.
    3. **Polar position**: distance (km) and bearing from the radar origin.
    4. **Shape**: axis fit and morphology (RadarShapeAnalyzer).
    5. **Ranking**: stable sort by distance, ids assigned 1..N.

    Notes
    -----
    - Each call owns its own clustering state; an instance can be reused
      across frames
    - Returns an empty list when no cluster survives
    - Ties in distance keep cluster discovery order

    Examples
    --------
    >>> assembler = StormAssembler(config)
    >>> storms = assembler.assemble(pixels)
    >>> [s.storm_id for s in storms]
    [1, 2, 3]
    """

    def __init__(self, config: "InternalConfig"):
        """Initialize assembler with validated configuration.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        """
        self.config = config
        self.radar_center = config.station.radar_center
        self.distance_ratio = config.station.distance_ratio
        self.min_intensity = config.clusterer.min_intensity
        self.clusterer = RadarCellClusterer(config)
        self.shape_analyzer = RadarShapeAnalyzer(config)

    def assemble(self, pixels: Sequence[Pixel]) -> List[StormCell]:
        """Cluster pixels and build the ranked storm list."""
        return self.assemble_clusters(self.clusterer.cluster(pixels))

    def assemble_clusters(self, clusters: Sequence[Sequence[Pixel]]) -> List[StormCell]:
        """Build ranked storm cells from already accepted clusters."""
        storms = [self._build_cell(cluster) for cluster in clusters]

        # sorted() is stable: equal distances keep discovery order
        storms = sorted(storms, key=lambda s: s.distance)
        storms = [replace(storm, storm_id=rank + 1) for rank, storm in enumerate(storms)]

        logger.info("Assembled %d storm cells", len(storms))
        return storms

    def _build_cell(self, cluster: Sequence[Pixel]) -> StormCell:
        """Compute location, intensity and shape of one cluster."""
        centroid = compute_intensity_centroid(cluster, self.min_intensity)
        fit = self.shape_analyzer.fit(centroid, cluster)

        return StormCell(
            storm_id=0,
            centroid=centroid,
            distance=compute_distance(centroid, self.radar_center, self.distance_ratio),
            bearing=compute_bearing(centroid, self.radar_center),
            max_intensity=max_intensity(cluster),
            shape_type=self.shape_analyzer.classify(fit),
            pixels=tuple(cluster),
            shape=fit,
        )

    @staticmethod
    def to_dataframe(storms: Sequence[StormCell]) -> pd.DataFrame:
        """Flatten storm cells to a DataFrame (one row per cell).

        Columns are listed in ``STORM_COLUMNS``; an empty input gives an
        empty frame with the same columns.
        """
        rows = [
            {
                "storm_id": s.storm_id,
                "centroid_x": s.centroid[0],
                "centroid_y": s.centroid[1],
                "distance_km": float(s.distance),
                "bearing_deg": float(s.bearing),
                "compass": s.compass,
                "max_intensity_dbz": s.max_intensity,
                "storm_type": s.shape_type.value,
                "cell_npixels": s.size,
                "strong_npixels": s.shape.strong_pixel_count,
                "major_axis_px": float(s.shape.major_axis_length),
                "minor_axis_px": float(s.shape.minor_axis_length),
                "eccentricity": float(s.shape.eccentricity),
            }
            for s in storms
        ]
        return pd.DataFrame(rows, columns=STORM_COLUMNS)
