#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
JSON 地图快照测试
"""

import json

import pytest

from navgrid.common.constants import SNAPSHOT_FORMAT_VERSION
from navgrid.common.exceptions import MapConstructionError, SerializationError
from navgrid.core.map_baker import MapBaker
from navgrid.core.map_serializer import deserialize_map, map_to_dict, serialize_map
from navgrid.core.pathfinding_map import PathfindingMap


class TestSnapshot:
    """地图导出与恢复"""

    def test_dict_layout(self, square_map):
        data = map_to_dict(square_map)
        assert data["format_version"] == SNAPSHOT_FORMAT_VERSION
        assert data["origin"] == [0.0, 0.0]
        assert data["size"] == [10.0, 10.0]
        assert data["resolution"] == 1
        assert data["navigator_radius"] == 1.0
        assert data["obstacles_baked"] == 1
        assert len(data["obstacle_columns"]) == 10
        # column index_x=5 crosses the bottom and top edges of the square
        assert data["obstacle_columns"][5][3] == "1"
        assert data["obstacle_columns"][5][5] == "0"
        assert data["obstacle_columns"][0] == "0" * 10

    def test_restore_preserves_grid(self, demo_map):
        restored = PathfindingMap.Deserialize(demo_map.Serialize())
        assert (restored.count_x, restored.count_y) == (demo_map.count_x, demo_map.count_y)
        assert restored.origin == demo_map.origin
        assert restored.upper_bound == demo_map.upper_bound
        assert restored.navigator_radius == demo_map.navigator_radius
        assert restored.resolution == demo_map.resolution
        assert restored.obstacles_baked == 2
        assert (restored.ObstacleMask() == demo_map.ObstacleMask()).all()

    def test_restored_map_plans_same_path(self, demo_map):
        restored = deserialize_map(serialize_map(demo_map))
        assert restored.GetPath((4, 3), (16, 17)) == demo_map.GetPath((4, 3), (16, 17))

    def test_search_state_not_saved(self, square_map):
        square_map.GetPath((1, 1), (9, 9))
        restored = deserialize_map(serialize_map(square_map))
        assert not restored.PathMask().any()

    def test_custom_baker(self, square_map):
        baker = MapBaker()
        restored = deserialize_map(serialize_map(square_map), baker=baker)
        assert restored.baker is baker
        assert isinstance(PathfindingMap.Deserialize(serialize_map(square_map)).baker, MapBaker)


class TestBadSnapshots:
    """被拒绝的快照文本"""

    def test_not_json(self):
        with pytest.raises(SerializationError):
            deserialize_map("{not json")

    def test_not_an_object(self):
        with pytest.raises(SerializationError):
            deserialize_map("[1, 2, 3]")

    @pytest.mark.parametrize("key", ["origin", "resolution", "obstacle_columns", "format_version"])
    def test_missing_key(self, open_map, key):
        data = map_to_dict(open_map)
        del data[key]
        with pytest.raises(SerializationError):
            deserialize_map(json.dumps(data))

    def test_unsupported_version(self, open_map):
        data = map_to_dict(open_map)
        data["format_version"] = SNAPSHOT_FORMAT_VERSION + 1
        with pytest.raises(SerializationError):
            deserialize_map(json.dumps(data))

    def test_column_count_mismatch(self, open_map):
        data = map_to_dict(open_map)
        data["obstacle_columns"] = data["obstacle_columns"][:-1]
        with pytest.raises(SerializationError):
            deserialize_map(json.dumps(data))

    def test_column_length_mismatch(self, open_map):
        data = map_to_dict(open_map)
        data["obstacle_columns"][2] += "0"
        with pytest.raises(SerializationError):
            deserialize_map(json.dumps(data))

    def test_bad_flag(self, open_map):
        data = map_to_dict(open_map)
        data["obstacle_columns"][4] = "0000x00000"
        with pytest.raises(SerializationError):
            deserialize_map(json.dumps(data))

    @pytest.mark.parametrize("key, value", [
        ("obstacle_columns", 5),
        ("obstacle_columns", [0] * 10),
        ("obstacle_columns", None),
        ("origin", "ab"),
        ("origin", 3),
        ("size", [10]),
        ("resolution", "x"),
        ("resolution", 0),
        ("navigator_radius", None),
        ("obstacles_baked", -1),
        ("obstacles_baked", "2"),
    ])
    def test_bad_value_types(self, open_map, key, value):
        """字段类型或取值非法时统一抛 SerializationError"""
        data = map_to_dict(open_map)
        data[key] = value
        with pytest.raises(SerializationError):
            deserialize_map(json.dumps(data))

    def test_parameter_error_is_chained(self, open_map):
        data = map_to_dict(open_map)
        data["resolution"] = 0
        with pytest.raises(SerializationError) as exc_info:
            deserialize_map(json.dumps(data))
        assert isinstance(exc_info.value.__cause__, MapConstructionError)


class TestRestoreObstaclesBaked:
    """已烘焙计数恢复"""

    def test_sets_counter(self, open_map):
        open_map.RestoreObstaclesBaked(3)
        assert open_map.obstacles_baked == 3

    def test_negative_rejected(self, open_map):
        with pytest.raises(ValueError):
            open_map.RestoreObstaclesBaked(-1)
        assert open_map.obstacles_baked == 0
