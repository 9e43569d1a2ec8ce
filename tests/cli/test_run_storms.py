import json
import logging

import pytest
from skimage import io as skio

from stormcell.cli.run_storms import (
    build_config,
    load_user_config_dict,
    main,
    run_storm_pipeline,
)
from tests.helpers.fake_images import make_radar_image

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def user_config_file(tmp_path):
    path = tmp_path / "user_config.py"
    path.write_text(
        "CONFIG = {\n"
        f"    'BASE_DIR': {str(tmp_path / 'out')!r},\n"
        "    'MIN_SIZE': 3,\n"
        "    'RADAR_CENTER': (32, 32),\n"
        "    'RADAR_AREA': (64, 64),\n"
        "}\n"
    )
    return path


@pytest.fixture
def radar_png(tmp_path):
    img = make_radar_image(shape=(64, 64), blocks=[(40, 10, 6, 6, 55)])
    path = tmp_path / "radar.png"
    skio.imsave(str(path), img, check_contrast=False)
    return path


def test_load_user_config_dict(user_config_file):
    cfg = load_user_config_dict(str(user_config_file))

    assert cfg["MIN_SIZE"] == 3


def test_load_user_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_user_config_dict(str(tmp_path / "missing.py"))


def test_load_user_config_without_dict(tmp_path):
    path = tmp_path / "empty_config.py"
    path.write_text("SETTINGS = 1\n")

    with pytest.raises(ValueError, match="No CONFIG dict"):
        load_user_config_dict(str(path))


def test_build_config_precedence(user_config_file):
    config = build_config(str(user_config_file), {"station_name": "Shenzhen", "base_dir": None}, verbose=True)

    assert config.clusterer.min_size == 3
    assert config.station.name == "Shenzhen"
    assert config.logging.level == "DEBUG"


def test_build_config_defaults_without_file():
    config = build_config()

    assert config.clusterer.min_size == 40
    assert config.logging.level == "INFO"


def test_run_storm_pipeline(user_config_file, radar_png, tmp_path, capsys):
    storms = run_storm_pipeline(str(user_config_file), image_path=str(radar_png))

    assert len(storms) == 1
    out_dir = tmp_path / "out"
    assert (out_dir / "analysis" / "radar_storms.csv").exists()
    assert (out_dir / "plots" / "radar_result.png").exists()
    assert list((out_dir / "logs").glob("storms_*.log"))

    saved = list(out_dir.glob("runtime_config_*.json"))
    assert len(saved) == 1
    assert json.loads(saved[0].read_text())["clusterer"]["min_size"] == 3

    assert "Storm number in active: 1" in capsys.readouterr().out


def test_run_storm_pipeline_requires_input():
    with pytest.raises(ValueError, match="image path or fetch"):
        run_storm_pipeline()


def test_main_success(user_config_file, radar_png, tmp_path):
    code = main([str(user_config_file), "--image", str(radar_png), "--no-render"])

    assert code == 0
    assert (tmp_path / "out" / "analysis" / "radar_storms.csv").exists()
    assert not (tmp_path / "out" / "plots" / "radar_result.png").exists()


def test_main_base_dir_override(user_config_file, radar_png, tmp_path):
    code = main([str(user_config_file), "--image", str(radar_png), "--base-dir", str(tmp_path / "cli")])

    assert code == 0
    assert (tmp_path / "cli" / "analysis" / "radar_storms.csv").exists()


def test_main_missing_image_returns_error(user_config_file, tmp_path, capsys):
    code = main([str(user_config_file), "--image", str(tmp_path / "missing.png")])

    assert code == 1
    assert "Radar image not found" in capsys.readouterr().err


def test_main_requires_image_or_fetch(user_config_file):
    with pytest.raises(SystemExit):
        main([str(user_config_file)])
