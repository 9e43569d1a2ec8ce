"""Radar image file reading.

Reads PPI product images (PNG/GIF/JPEG) into RGBA arrays and checks that
the configured radar area fits inside the image.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Union

import numpy as np
from skimage import io as skio

if TYPE_CHECKING:
    from stormcell.schemas import InternalConfig

__all__ = ['RadarImageLoader', 'to_rgba']

logger = logging.getLogger(__name__)


def to_rgba(image: np.ndarray) -> np.ndarray:
    """Return an (H, W, 4) uint8 copy of an RGB or RGBA image array.

    Raises
    ------
    ValueError
        If the array is not a colour image.
    """
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"Expected an RGB or RGBA image, got array of shape {image.shape}")

    image = np.asarray(image)
    if image.dtype != np.uint8:
        # float images from some readers are in [0, 1]
        if np.issubdtype(image.dtype, np.floating):
            image = np.clip(np.round(image * 255), 0, 255)
        image = image.astype(np.uint8)

    if image.shape[2] == 3:
        alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
        image = np.concatenate([image, alpha], axis=2)
    return image.copy()


class RadarImageLoader:
    """Load radar product images for classification.

    Example usage::

        loader = RadarImageLoader(config)
        rgba = loader.load("Z_RADR_I_Z9200_202404241348_P_DOR_SA_R_10_230_15.200.png")
        rgba.shape  # (height, width, 4)
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.radar_area = config.station.radar_area

    def load(self, path: Union[str, Path]) -> np.ndarray:
        """Read an image file as an (H, W, 4) uint8 array.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        ValueError
            If the image is not colour or is smaller than the radar area.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Radar image not found: {path}")

        rgba = to_rgba(skio.imread(str(path)))
        self.check_radar_area(rgba)

        logger.debug("Loaded %s: shape=%s", path.name, rgba.shape)
        return rgba

    def check_radar_area(self, rgba: np.ndarray) -> None:
        """Raise ValueError when the radar area exceeds the image."""
        height, width = rgba.shape[:2]
        area_width, area_height = self.radar_area
        if area_width > width or area_height > height:
            raise ValueError(
                f"Radar area {self.radar_area} exceeds image dimensions ({width}, {height})"
            )
