#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
地图 ASCII 与图像渲染测试
"""

import numpy as np
import pytest

from navgrid.common.constants import COLOR_FREE, COLOR_GOAL, COLOR_OBSTACLE, COLOR_START
from navgrid.visual_debugger import VisualDebugger


@pytest.fixture
def debugger():
    return VisualDebugger()


class TestRenderAscii:

    def test_open_map_all_free(self, debugger, open_map):
        lines = debugger.RenderAscii(open_map).split("\n")
        assert len(lines) == open_map.count_y
        assert all(line == "." * open_map.count_x for line in lines)

    def test_rows_run_top_down(self, debugger, square_map):
        lines = debugger.RenderAscii(square_map).split("\n")
        # index_y=3 is printed on line count_y - 1 - 3
        assert lines[6][5] == "#"
        assert lines[4][5] == "."
        assert lines[9][0] == "."

    def test_start_and_goal_marks(self, debugger, square_map):
        square_map.GetPath((1, 1), (9, 9))
        text = debugger.RenderAscii(square_map, start=(1, 1), end=(9, 9))
        lines = text.split("\n")
        assert lines[8][1] == "S"
        assert lines[0][9] == "G"
        assert text.count("S") == 1 and text.count("G") == 1
        assert "*" in text

    def test_off_map_marks_ignored(self, debugger, open_map):
        text = debugger.RenderAscii(open_map, start=(-20, -20), end=(50, 50))
        assert "S" not in text and "G" not in text

    def test_disabled(self, open_map):
        assert VisualDebugger(enabled=False).RenderAscii(open_map) == ""


class TestDrawMap:

    def test_image_shape(self, debugger, open_map):
        image = debugger.DrawMap(open_map, cell_px=4)
        assert image.shape == (40, 40, 3)
        assert image.dtype == np.uint8
        assert (image == np.array(COLOR_FREE, dtype=np.uint8)).all()

    def test_obstacle_cells(self, debugger, square_map):
        image = debugger.DrawMap(square_map, cell_px=4)
        # node (5, 3) covers pixel rows 24-27 and columns 20-23
        assert tuple(image[25, 21]) == COLOR_OBSTACLE
        assert tuple(image[1, 1]) == COLOR_FREE

    def test_path_endpoints(self, debugger, square_map):
        path = square_map.GetPath((1, 1), (9, 9))
        image = debugger.DrawMap(square_map, path, cell_px=4)
        assert tuple(image[34, 6]) == COLOR_START
        assert tuple(image[2, 38]) == COLOR_GOAL

    def test_invalid_cell_size(self, debugger, open_map):
        with pytest.raises(ValueError):
            debugger.DrawMap(open_map, cell_px=0)

    def test_disabled(self, open_map):
        assert VisualDebugger(enabled=False).DrawMap(open_map) is None


class TestSaveImage:

    def test_writes_png(self, debugger, square_map, tmp_path):
        output = tmp_path / "out" / "map.png"
        assert debugger.SaveImage(debugger.DrawMap(square_map), output)
        assert output.exists() and output.stat().st_size > 0

    def test_none_image(self, debugger, tmp_path):
        assert not debugger.SaveImage(None, tmp_path / "map.png")
