import math

import pytest

from stormcell.contracts import assert_storm_output
from stormcell.radar.pixel import ShapeType
from stormcell.radar.storm_assembler import STORM_COLUMNS, StormAssembler
from tests.helpers.fake_images import make_block, make_pixel

pytestmark = pytest.mark.unit


def test_empty_input_gives_empty_list(internal_config):
    assembler = StormAssembler(internal_config)

    assert assembler.assemble([]) == []
    assert assembler.assemble_clusters([]) == []


def test_storms_ranked_by_distance(small_config, two_blocks):
    storms = StormAssembler(small_config).assemble(two_blocks)

    assert [s.storm_id for s in storms] == [1, 2]
    assert storms[0].centroid == (23, 23)
    assert storms[1].centroid == (63, 63)
    assert storms[0].distance < storms[1].distance
    assert_storm_output(storms, small_config.clusterer.min_size, small_config.clusterer.min_intensity)


def test_storm_fields(small_config, two_blocks):
    near = StormAssembler(small_config).assemble(two_blocks)[0]
    ratio = small_config.station.distance_ratio

    assert near.distance == pytest.approx(math.hypot(7, 7) * ratio)
    assert near.bearing == pytest.approx(315.0)
    assert near.compass == "NW"
    assert near.max_intensity == 50
    assert near.size == 49
    assert near.shape_type == ShapeType.SINGLE_CELL
    assert set(near.pixels) == set(two_blocks[49:])


def test_equal_distances_keep_discovery_order(small_config):
    lower_right = make_block(34, 34, 7, 7, intensity=55)
    upper_left = make_block(20, 20, 7, 7, intensity=50)

    storms = StormAssembler(small_config).assemble(lower_right + upper_left)

    assert storms[0].distance == pytest.approx(storms[1].distance)
    assert storms[0].centroid == (37, 37)
    assert storms[0].max_intensity == 55


def test_ranking_is_deterministic(small_config, two_blocks):
    assembler = StormAssembler(small_config)

    first = assembler.assemble(two_blocks)
    second = assembler.assemble(two_blocks)

    assert [(s.storm_id, s.centroid) for s in first] == [(s.storm_id, s.centroid) for s in second]


def test_four_pixel_scenario(make_config):
    config = make_config(MIN_SIZE=3)
    pixels = make_block(10, 10, 2, 2) + [make_pixel(100, 100)]

    storms = StormAssembler(config).assemble(pixels)

    assert len(storms) == 1
    storm = storms[0]
    assert storm.storm_id == 1
    assert storm.centroid[0] in (10, 11)
    assert storm.centroid[1] in (10, 11)
    assert storm.size == 4
    assert storm.shape_type == ShapeType.SINGLE_CELL


def test_to_dataframe(small_config, two_blocks):
    storms = StormAssembler(small_config).assemble(two_blocks)

    df = StormAssembler.to_dataframe(storms)

    assert list(df.columns) == STORM_COLUMNS
    assert len(df) == 2
    assert df["storm_id"].tolist() == [1, 2]
    assert df["cell_npixels"].tolist() == [49, 49]
    assert df["storm_type"].tolist() == ["single-cell", "single-cell"]
    assert df["compass"].tolist() == ["NW", "SE"]


def test_to_dataframe_empty():
    df = StormAssembler.to_dataframe([])

    assert df.empty
    assert list(df.columns) == STORM_COLUMNS
