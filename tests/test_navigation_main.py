#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
演示主程序测试
"""

import json
import sys

import pytest
import yaml
from loguru import logger

from navgrid.common.constants import REASON_NO_ROUTE, REASON_OK
from navgrid.config import default_scenario
from navgrid.navigation_main import main, run_scenario


@pytest.fixture(autouse=True)
def restore_logger():
    """main() 会替换 loguru 输出，测试后恢复一个普通的 stderr 输出"""
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_run_default_scenario():
    pathfinding_map, results = run_scenario(default_scenario())
    assert pathfinding_map.obstacles_baked == 2
    assert len(results) == 1
    assert results[0].ok
    assert results[0].reason == REASON_OK
    assert results[0].path[0] == (4.0, 3.0)
    assert results[0].path[-1] == (16.0, 17.0)


def test_main_writes_outputs(tmp_path, capsys):
    image_path = tmp_path / "map.png"
    snapshot_path = tmp_path / "snapshots" / "map.json"
    code = main(["--image", str(image_path), "--save", str(snapshot_path), "--log-level", "warning"])
    assert code == 0
    assert image_path.exists()
    snapshot = json.loads(snapshot_path.read_text(encoding="utf-8"))
    assert snapshot["obstacles_baked"] == 2
    output = capsys.readouterr().out
    assert REASON_OK in output
    assert "S" in output and "G" in output


def test_main_reports_failed_query(tmp_path, capsys):
    scenario = {
        "map": {"size": [10, 10], "navigator_radius": 1.0, "resolution": 1},
        "obstacles": [{"position": [3, 3], "corners": [[0, 0], [4, 0], [4, 4], [0, 4]]}],
        "queries": [
            {"start": [1, 1], "end": [9, 9]},
            {"start": [0, 0], "end": [5, 5]},
        ],
        "log": {"level": "ERROR"},
    }
    config_path = tmp_path / "scenario.yaml"
    config_path.write_text(yaml.safe_dump(scenario), encoding="utf-8")

    assert main(["--config", str(config_path)]) == 1
    output = capsys.readouterr().out
    assert REASON_OK in output
    assert REASON_NO_ROUTE in output


def test_out_of_bounds_obstacle_is_skipped(tmp_path):
    scenario = {
        "map": {"size": [10, 10], "navigator_radius": 1.0, "resolution": 1},
        "obstacles": [{"position": [8, 8], "corners": [[0, 0], [4, 0], [4, 4]]}],
        "queries": [{"start": [1, 1], "end": [9, 9]}],
    }
    config_path = tmp_path / "scenario.yaml"
    config_path.write_text(yaml.safe_dump(scenario), encoding="utf-8")
    assert main(["--config", str(config_path), "--log-level", "ERROR"]) == 0


def test_unknown_log_level_rejected(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--log-level", "foo"])
    assert exc_info.value.code == 2
    assert "--log-level" in capsys.readouterr().err


def test_log_level_case_insensitive(capsys):
    assert main(["--log-level", "error"]) == 0
