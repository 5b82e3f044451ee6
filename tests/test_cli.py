import logging

import pytest

from quakegeo import cli
from quakegeo.config import QuakeGeoConfig


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    # drop the console handlers installed by setup_logging
    for handler in list(root.handlers):
        if handler not in before and type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


def test_config_defaults():
    config = QuakeGeoConfig()
    assert config.log_level == "WARNING"
    assert config.depth_range is None
    assert config.precision == 5


def test_config_from_args():
    parser = cli.create_argument_parser()
    args = parser.parse_args(
        ["--max-depth", "30", "--log-level", "DEBUG", "distance", "0,0,0", "1,0,0"]
    )
    config = cli.config_from_args(args)
    assert config.log_level == "DEBUG"
    assert config.depth_range == (float("-inf"), 30.0)

    args = parser.parse_args(["distance", "0,0,0", "1,0,0"])
    assert cli.config_from_args(args).depth_range is None


def test_distance_command(capsys):
    cli.main(["distance", "0,0,0", "1,0,0"])
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("horizontal: 111.19")
    assert out[2] == "vertical: 0.00000 km"
    assert out[4] == "azimuth: 90.00000 deg"


def test_distance_command_precision(capsys):
    cli.main(["--precision", "1", "distance", "0,0,0", "0,0,10"])
    out = capsys.readouterr().out.splitlines()
    assert "vertical: 10.0 km" in out
    assert "linear: 10.0 km" in out


def test_resample_command(capsys):
    cli.main(["resample", "50", "0,0,0", "1,0,0"])
    lines = capsys.readouterr().out.split()
    assert lines[0] == "0.00000,0.00000,0.00000"
    assert lines[-1] == "1.00000,0.00000,0.00000"
    # 111.2 km at 50 km spacing gives three gaps
    assert len(lines) == 4


def test_partition_command(capsys):
    cli.main(["partition", "60", "0,0,0", "1,0,0"])
    blocks = capsys.readouterr().out.strip().split("\n\n")
    assert len(blocks) == 2
    assert blocks[0].splitlines()[-1] == blocks[1].splitlines()[0]


def test_invalid_point_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["distance", "1,2", "0,0,0"])
    assert excinfo.value.code == 1


def test_depth_range_enforced():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--max-depth", "10", "distance", "0,0,0", "0,0,20"])
    assert excinfo.value.code == 1


def test_invalid_spacing_exits():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["resample", "0", "0,0,0", "1,0,0"])
    assert excinfo.value.code == 1
