import numpy as np

from stormcell.radar.pixel import Pixel

# legend colours of the default palette
TIER_COLORS = {
    15: (0, 0, 246, 255),
    20: (0, 254, 0, 255),
    30: (0, 144, 0, 255),
    45: (254, 144, 0, 255),
    50: (254, 0, 0, 255),
    55: (166, 0, 0, 255),
}

BACKGROUND = (0, 0, 0, 255)


def make_pixel(x, y, intensity=50):
    """Pixel with the legend colour of its tier (grey when unknown)."""
    return Pixel(x, y, TIER_COLORS.get(intensity, (128, 128, 128, 255)), intensity)


def make_block(x0, y0, width, height, intensity=50):
    """Solid rectangle of pixels, x-major order."""
    return [
        make_pixel(x, y, intensity)
        for x in range(x0, x0 + width)
        for y in range(y0, y0 + height)
    ]


def make_radar_image(shape=(64, 80), blocks=()):
    """
    Synthetic RGBA radar product.

    ``blocks`` is a sequence of (x0, y0, width, height, tier) rectangles
    painted in the legend colour of ``tier`` on a black background.
    """
    height, width = shape
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[...] = BACKGROUND
    for x0, y0, w, h, tier in blocks:
        img[y0:y0 + h, x0:x0 + w] = TIER_COLORS[tier]
    return img
