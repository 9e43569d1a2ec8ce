"""Tests for pipeline contracts.

These tests verify that contracts are enforced at stage boundaries.
They test contract violations directly, without defensive logic downstream.
"""

from dataclasses import replace

import numpy as np
import pytest
import xarray as xr

pytestmark = pytest.mark.unit

from stormcell.contracts import (
    ContractViolation,
    require,
    assert_classified,
    assert_partitioned,
    assert_storm_output,
)
from stormcell.radar.storm_assembler import StormAssembler
from tests.helpers.fake_images import make_block, make_pixel


def _tier_ds(values, dims=("y", "x"), coords=("x", "y")):
    values = np.asarray(values)
    ds = xr.Dataset({"intensity": (dims, values)})
    for name in coords:
        ds = ds.assign_coords({name: np.arange(values.shape[dims.index(name)])})
    return ds


class TestRequire:

    def test_require_passes(self):
        require(True, "never raised")

    def test_require_raises_contract_violation(self):
        with pytest.raises(ContractViolation, match="broken"):
            require(False, "broken")

    def test_contract_violation_is_runtime_error(self):
        assert issubclass(ContractViolation, RuntimeError)


class TestClassifiedContract:
    """Test classification stage contract."""

    def test_passes_with_valid_dataset(self):
        assert_classified(_tier_ds(np.zeros((4, 4), dtype=np.int32)))

    def test_fails_without_x(self):
        with pytest.raises(ContractViolation, match="missing 'x'"):
            assert_classified(_tier_ds(np.zeros((4, 4), dtype=np.int32), coords=("y",)))

    def test_fails_without_y(self):
        with pytest.raises(ContractViolation, match="missing 'y'"):
            assert_classified(_tier_ds(np.zeros((4, 4), dtype=np.int32), coords=("x",)))

    def test_fails_without_variable(self):
        ds = xr.Dataset(coords={"x": range(4), "y": range(4)})
        with pytest.raises(ContractViolation, match="missing 'intensity'"):
            assert_classified(ds)

    def test_fails_on_float_tiers(self):
        with pytest.raises(ContractViolation, match="expected integer"):
            assert_classified(_tier_ds(np.zeros((4, 4), dtype=np.float32)))

    def test_fails_on_3d_grid(self):
        ds = _tier_ds(np.zeros((2, 4, 4), dtype=np.int32), dims=("z", "y", "x"))
        with pytest.raises(ContractViolation, match="expected 2"):
            assert_classified(ds)

    def test_fails_on_negative_tiers(self):
        values = np.zeros((4, 4), dtype=np.int32)
        values[1, 1] = -5
        with pytest.raises(ContractViolation, match="negative"):
            assert_classified(_tier_ds(values))


class TestPartitionContract:
    """Test clustering stage contract."""

    def test_passes_on_exact_partition(self):
        pixels = [make_pixel(0, 0), make_pixel(1, 0), make_pixel(9, 9)]
        assert_partitioned([pixels[:2], pixels[2:]], pixels)

    def test_passes_on_empty_input(self):
        assert_partitioned([], [])

    def test_fails_on_missing_pixel(self):
        pixels = [make_pixel(0, 0), make_pixel(9, 9)]
        with pytest.raises(ContractViolation, match="cover 1 pixels"):
            assert_partitioned([pixels[:1]], pixels)

    def test_fails_on_overlap(self):
        pixels = [make_pixel(0, 0), make_pixel(1, 0)]
        with pytest.raises(ContractViolation, match="overlaps"):
            assert_partitioned([pixels, pixels[1:]], pixels)

    def test_fails_on_empty_component(self):
        pixels = [make_pixel(0, 0)]
        with pytest.raises(ContractViolation, match="empty"):
            assert_partitioned([pixels, []], pixels)


class TestStormContract:
    """Test assembly stage contract."""

    @pytest.fixture
    def storms(self, make_config):
        config = make_config(MIN_SIZE=3)
        pixels = make_block(250, 250, 4, 4) + make_block(320, 320, 5, 5)
        return StormAssembler(config).assemble(pixels)

    def test_passes_on_assembled_storms(self, storms):
        assert len(storms) == 2
        assert_storm_output(storms, 3, 45)

    def test_passes_on_empty_list(self):
        assert_storm_output([], 40, 45)

    def test_fails_on_gap_in_ids(self, storms):
        broken = [storms[0], replace(storms[1], storm_id=3)]
        with pytest.raises(ContractViolation, match="expected 2"):
            assert_storm_output(broken, 3, 45)

    def test_fails_on_small_storm(self, storms):
        with pytest.raises(ContractViolation, match="pixels"):
            assert_storm_output(storms, 20, 45)

    def test_fails_on_weak_storm(self, storms):
        with pytest.raises(ContractViolation, match="dBZ"):
            assert_storm_output(storms, 3, 60)

    def test_fails_on_bearing_out_of_range(self, storms):
        broken = [replace(storms[0], bearing=360.0), storms[1]]
        with pytest.raises(ContractViolation, match="bearing"):
            assert_storm_output(broken, 3, 45)

    def test_fails_on_unsorted_distances(self, storms):
        swapped = [
            replace(storms[1], storm_id=1),
            replace(storms[0], storm_id=2),
        ]
        with pytest.raises(ContractViolation, match="closer"):
            assert_storm_output(swapped, 3, 45)
