"""Colour to reflectivity tier classification.

Maps each image pixel inside the radar area to a discrete intensity tier
by comparing its RGBA colour against the product legend. A colour matches
a legend entry when every channel lies within ``delta`` of the reference
(clamped to 0..255); entries are tried in palette order and the first
match wins.

The classified frame is kept as an xarray Dataset so the grid contract
can check it like any other stage output:

- `intensity` (y, x) : int32 tier, 0 where nothing matched
- `rgba` (y, x, channel) : uint8 source colours
"""

import logging
from typing import TYPE_CHECKING, List, Sequence, Tuple

import numpy as np
import xarray as xr

from stormcell.radar.pixel import Pixel

if TYPE_CHECKING:
    from stormcell.schemas import InternalConfig

__all__ = ['PixelClassifier']

logger = logging.getLogger(__name__)


class PixelClassifier:
    """Classify radar image colours into reflectivity tiers.

    Example usage::

        classifier = PixelClassifier(config)
        ds = classifier.classify(rgba)
        pixels = classifier.extract_pixels(ds)
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.delta = config.classifier.delta
        self.palette = [(tuple(e.color), e.tier) for e in config.classifier.palette]
        self.radar_area = config.station.radar_area
        self.intensity_name = "intensity"

    def _color_bounds(self, color: Sequence[int]) -> Tuple[np.ndarray, np.ndarray]:
        ref = np.asarray(color, dtype=np.int16)
        return np.clip(ref - self.delta, 0, 255), np.clip(ref + self.delta, 0, 255)

    def match_tier(self, color: Sequence[int]) -> int:
        """Tier of a single RGBA colour, 0 when no legend entry matches."""
        value = np.asarray(color, dtype=np.int16)
        for ref, tier in self.palette:
            low, high = self._color_bounds(ref)
            if np.all((low <= value) & (value <= high)):
                return tier
        return 0

    def classify(self, rgba: np.ndarray) -> xr.Dataset:
        """Classify the radar area of an (H, W, 4) image.

        Parameters
        ----------
        rgba : np.ndarray
            uint8 image array as returned by RadarImageLoader.

        Returns
        -------
        xr.Dataset
            Tier grid cropped to the radar area (width, height).
        """
        area_width, area_height = self.radar_area
        crop = rgba[:area_height, :area_width, :4].astype(np.int16)

        tiers = np.zeros(crop.shape[:2], dtype=np.int32)
        unassigned = np.ones(crop.shape[:2], dtype=bool)
        for ref, tier in self.palette:
            low, high = self._color_bounds(ref)
            match = np.all((crop >= low) & (crop <= high), axis=-1) & unassigned
            tiers[match] = tier
            unassigned &= ~match

        logger.debug(f"Classified {int((~unassigned).sum())} of {tiers.size} pixels")

        return xr.Dataset(
            {
                self.intensity_name: (("y", "x"), tiers, {"long_name": "Reflectivity tier", "units": "dBZ"}),
                "rgba": (("y", "x", "channel"), crop.astype(np.uint8)),
            },
            coords={
                "y": np.arange(crop.shape[0]),
                "x": np.arange(crop.shape[1]),
                "channel": ["r", "g", "b", "a"],
            },
            attrs={
                "delta": self.delta,
                "palette_size": len(self.palette),
            },
        )

    def extract_pixels(self, ds: xr.Dataset) -> List[Pixel]:
        """Classified pixels of a tier grid, ordered by x then y."""
        tiers = ds[self.intensity_name].values
        rgba = ds["rgba"].values

        # transpose so nonzero walks columns first
        xs, ys = np.nonzero(tiers.T > 0)
        pixels = [
            Pixel(int(x), int(y), tuple(int(c) for c in rgba[y, x]), int(tiers[y, x]))
            for x, y in zip(xs, ys)
        ]
        logger.debug("Extracted %d classified pixels", len(pixels))
        return pixels
