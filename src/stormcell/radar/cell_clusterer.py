import logging
from typing import List, Sequence, Set

import numpy as np

from stormcell.radar.pixel import Pixel
from stormcell.radar.radar_utils import max_intensity

logger = logging.getLogger(__name__)


class RadarCellClusterer:
    """Config-driven grouping of classified pixels into storm clusters."""

    def __init__(self, config):
        """Store config.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration; reads the
            ``clusterer`` section.
        """
        self.config = config
        self.method = config.clusterer.method
        self.adjacent_threshold = config.clusterer.adjacent_threshold
        self.min_size = config.clusterer.min_size
        self.min_intensity = config.clusterer.min_intensity

        logger.info("RadarCellClusterer initialized: method=%s, adjacent_threshold=%s",
                    self.method, self.adjacent_threshold)

    def cluster(self, pixels: Sequence[Pixel]) -> List[List[Pixel]]:
        """Partition pixels and keep the clusters that qualify as storms."""
        return self.accept(self.partition(pixels))

    def partition(self, pixels: Sequence[Pixel]) -> List[List[Pixel]]:
        """Split pixels into maximal connected components.

        Two pixels are adjacent when both |dx| and |dy| are within
        ``adjacent_threshold``. Every distinct input pixel ends up in
        exactly one component; components come out in the order their
        first pixel appears in the input.
        """
        pixels = list(pixels)
        if not pixels:
            return []

        coords = np.array([(p.x, p.y) for p in pixels], dtype=np.int64)
        find_neighbors = self._neighbor_finder(coords)

        visited: Set[Pixel] = set()
        components = []
        for idx, pixel in enumerate(pixels):
            if pixel in visited:
                continue
            components.append(self._grow_component(idx, pixels, find_neighbors, visited))

        logger.debug(f"Partitioned {len(pixels)} pixels into {len(components)} components")
        return components

    def accept(self, components: Sequence[List[Pixel]]) -> List[List[Pixel]]:
        """Keep components with more than min_size pixels reaching min_intensity."""
        kept = [
            comp for comp in components
            if len(comp) > self.min_size and max_intensity(comp) >= self.min_intensity
        ]

        num_removed = len(components) - len(kept)
        if num_removed > 0:
            logger.debug(f"Kept {len(kept)}, removed {num_removed} "
                         f"(size <= {self.min_size} or max < {self.min_intensity} dBZ)")
        return kept

    @staticmethod
    def _grow_component(seed: int, pixels: List[Pixel], find_neighbors,
                        visited: Set[Pixel]) -> List[Pixel]:
        """Stack flood fill from pixels[seed]; marks members in ``visited``."""
        seed_pixel = pixels[seed]
        visited.add(seed_pixel)
        component = [seed_pixel]
        stack = [seed]

        while stack:
            current = stack.pop()
            for idx in find_neighbors(current):
                neighbor = pixels[idx]
                if neighbor not in visited:
                    visited.add(neighbor)
                    component.append(neighbor)
                    stack.append(idx)

        return component

    def _neighbor_finder(self, coords: np.ndarray):
        """Return idx -> sorted neighbour indices for the configured method."""
        threshold = self.adjacent_threshold

        if self.method == "kdtree":
            from scipy.spatial import cKDTree

            tree = cKDTree(coords)

            def find_neighbors(idx):
                return sorted(tree.query_ball_point(coords[idx], r=threshold, p=np.inf))

            return find_neighbors

        xs = coords[:, 0]
        ys = coords[:, 1]

        def find_neighbors(idx):
            near = (np.abs(xs - xs[idx]) <= threshold) & (np.abs(ys - ys[idx]) <= threshold)
            return np.flatnonzero(near)

        return find_neighbors
