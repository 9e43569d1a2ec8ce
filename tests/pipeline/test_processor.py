import numpy as np
import pandas as pd
import pytest
from skimage import io as skio

from stormcell.contracts import ContractViolation
from stormcell.pipeline.processor import StormProcessor
from stormcell.radar.storm_assembler import STORM_COLUMNS

pytestmark = pytest.mark.pipeline


def test_process_detects_ranked_storms(pipeline_config, output_dirs, radar_png):
    result = StormProcessor(pipeline_config, output_dirs).process(radar_png)

    assert [s.storm_id for s in result.storms] == [1, 2]
    near, far = result.storms
    assert near.centroid == (38, 36)
    assert near.compass == "SE"
    assert far.max_intensity == 55
    assert far.compass == "NE"


def test_process_writes_storm_table(pipeline_config, output_dirs, radar_png):
    result = StormProcessor(pipeline_config, output_dirs).process(radar_png)

    assert result.analysis_path == output_dirs["analysis"] / "Z9200_202404241348Z_PPI_02_19_storms.csv"
    df = pd.read_csv(result.analysis_path)
    assert list(df.columns) == STORM_COLUMNS
    assert df["storm_id"].tolist() == [1, 2]


def test_process_renders_result(pipeline_config, output_dirs, radar_png):
    result = StormProcessor(pipeline_config, output_dirs).process(radar_png)

    assert result.plot_path is not None
    assert result.plot_path.exists()
    assert skio.imread(str(result.plot_path)).shape[:2] == (64, 80)


def test_process_with_base_image(pipeline_config, output_dirs, radar_png, temp_dir):
    base_png = temp_dir / "base.png"
    skio.imsave(str(base_png), np.full((64, 80, 4), 255, dtype=np.uint8), check_contrast=False)

    result = StormProcessor(pipeline_config, output_dirs).process(radar_png, base_png)

    assert result.plot_path.exists()


def test_process_without_rendering(make_config, output_dirs, radar_png):
    config = make_config(MIN_SIZE=3, RADAR_CENTER=(32, 32), RADAR_AREA=(64, 64), RENDER=False)
    processor = StormProcessor(config, output_dirs)

    result = processor.process(radar_png)

    assert processor.plotter is None
    assert result.plot_path is None
    assert len(result.storms) == 2


def test_process_empty_frame(pipeline_config, output_dirs, temp_dir):
    path = temp_dir / "clear.png"
    skio.imsave(str(path), np.zeros((64, 64, 4), dtype=np.uint8), check_contrast=False)

    result = StormProcessor(pipeline_config, output_dirs).process(path)

    assert result.storms == []
    assert pd.read_csv(result.analysis_path).empty


def test_contract_violation_propagates(pipeline_config, output_dirs, radar_png, monkeypatch):
    processor = StormProcessor(pipeline_config, output_dirs)
    monkeypatch.setattr(processor.assembler.clusterer, "partition", lambda pixels: [])

    with pytest.raises(ContractViolation, match="Cluster contract violated"):
        processor.process(radar_png)
