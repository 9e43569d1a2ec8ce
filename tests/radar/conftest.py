import pytest

from tests.helpers.fake_images import make_block, make_pixel


@pytest.fixture
def square_cluster():
    """Four adjacent strong pixels plus one isolated pixel far away."""
    return [
        make_pixel(10, 10),
        make_pixel(10, 11),
        make_pixel(11, 10),
        make_pixel(11, 11),
        make_pixel(100, 100),
    ]


@pytest.fixture
def two_blocks():
    """Two 7x7 strong blocks, 20 px apart, the far one listed first."""
    far = make_block(60, 60, 7, 7, intensity=55)
    near = make_block(20, 20, 7, 7, intensity=50)
    return far + near


@pytest.fixture
def small_config(make_config):
    """Config that accepts clusters of more than 3 pixels."""
    return make_config(MIN_SIZE=3, RADAR_CENTER=(30, 30), RADAR_AREA=(128, 128))
