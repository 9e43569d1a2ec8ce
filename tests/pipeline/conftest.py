import pytest
from skimage import io as skio

from tests.helpers.fake_images import make_radar_image


@pytest.fixture
def pipeline_config(make_config, temp_dir):
    """Small 64x64 radar area with the origin in the middle."""
    return make_config(
        BASE_DIR=str(temp_dir),
        MIN_SIZE=3,
        RADAR_CENTER=(32, 32),
        RADAR_AREA=(64, 64),
    )


@pytest.fixture
def radar_png(temp_dir):
    """Radar product with a near strong cell, a far strong cell and a weak cell."""
    img = make_radar_image(shape=(64, 80), blocks=[
        (40, 10, 6, 6, 55),   # far, north-east
        (36, 34, 4, 4, 50),   # near, south-east
        (5, 50, 6, 6, 30),    # weak, rejected
        (70, 0, 10, 64, 20),  # legend strip, outside radar area
    ])
    path = temp_dir / "Z9200_202404241348Z_PPI_02_19.png"
    skio.imsave(str(path), img, check_contrast=False)
    return path
