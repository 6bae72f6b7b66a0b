#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
地图快照：寻路地图与 JSON 文本之间的转换

只保存构建参数、障碍标记和已烘焙计数，不保存搜索草稿状态。
"""

import json
from typing import Any, Dict, Optional

from loguru import logger

from ..common.constants import SNAPSHOT_FORMAT_VERSION
from ..common.exceptions import NavigationError, SerializationError
from .interfaces import IMapBaker
from .map_baker import MapBaker
from .pathfinding_map import PathfindingMap

_REQUIRED_KEYS = (
    "format_version",
    "origin",
    "size",
    "navigator_radius",
    "resolution",
    "obstacles_baked",
    "obstacle_columns",
)


def map_to_dict(pathfinding_map: PathfindingMap) -> Dict[str, Any]:
    """
    导出快照字典

    obstacle_columns 每个 index_x 一列，列内按 index_y 递增，'1'=障碍
    """
    origin = pathfinding_map.origin
    upper = pathfinding_map.upper_bound
    columns = [
        "".join("1" if node.is_obstacle else "0" for node in column)
        for column in pathfinding_map.nodes
    ]
    return {
        "format_version": SNAPSHOT_FORMAT_VERSION,
        "origin": [origin[0], origin[1]],
        "size": [upper[0] - origin[0], upper[1] - origin[1]],
        "navigator_radius": pathfinding_map.navigator_radius,
        "resolution": pathfinding_map.resolution,
        "obstacles_baked": pathfinding_map.obstacles_baked,
        "obstacle_columns": columns,
    }


def serialize_map(pathfinding_map: PathfindingMap) -> str:
    return json.dumps(map_to_dict(pathfinding_map))


def _serialization_error(error_msg: str) -> SerializationError:
    """记录错误并返回待抛出的异常"""
    logger.error(error_msg)
    return SerializationError(error_msg)


def deserialize_map(text: str, baker: Optional[IMapBaker] = None) -> PathfindingMap:
    """
    从 JSON 快照重建地图

    Args:
        text: serialize_map 输出的文本
        baker: 新地图使用的烘焙器，默认 MapBaker

    Returns:
        恢复了障碍标记和烘焙计数的新地图

    Raises:
        SerializationError: JSON 格式错误、缺少字段、字段类型或取值非法、版本不支持或列形状不匹配
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise _serialization_error(f"地图快照不是合法 JSON: {e}") from e

    if not isinstance(data, dict):
        raise _serialization_error(f"地图快照顶层必须是对象: {type(data).__name__}")

    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise _serialization_error(f"地图快照缺少字段: {missing}")

    if data["format_version"] != SNAPSHOT_FORMAT_VERSION:
        raise _serialization_error(f"不支持的快照版本: {data['format_version']}")

    try:
        origin = (float(data["origin"][0]), float(data["origin"][1]))
        size = (float(data["size"][0]), float(data["size"][1]))
        navigator_radius = float(data["navigator_radius"])
        resolution = int(data["resolution"])
        pathfinding_map = PathfindingMap(
            baker if baker is not None else MapBaker(),
            origin,
            size,
            navigator_radius,
            resolution,
        )
    except (TypeError, ValueError, IndexError, KeyError, NavigationError) as e:
        raise _serialization_error(f"地图快照参数非法: {e}") from e

    obstacles_baked = data["obstacles_baked"]
    if isinstance(obstacles_baked, bool) or not isinstance(obstacles_baked, int) or obstacles_baked < 0:
        raise _serialization_error(f"已烘焙障碍数必须是非负整数: {obstacles_baked!r}")

    columns = data["obstacle_columns"]
    if not isinstance(columns, list) or not all(isinstance(column, str) for column in columns):
        raise _serialization_error("obstacle_columns 必须是字符串列表")

    if len(columns) != pathfinding_map.count_x or \
            any(len(column) != pathfinding_map.count_y for column in columns):
        raise _serialization_error(
            f"快照栅格形状不匹配: 期望 {pathfinding_map.count_x}x{pathfinding_map.count_y}, "
            f"实际 {len(columns)} 列"
        )

    for index_x, column in enumerate(columns):
        for index_y, flag in enumerate(column):
            if flag == "1":
                pathfinding_map.GetNode(index_x, index_y).is_obstacle = True
            elif flag != "0":
                raise _serialization_error(f"非法障碍标记 {flag!r}: ({index_x}, {index_y})")

    pathfinding_map.RestoreObstaclesBaked(obstacles_baked)
    logger.info(f"地图快照恢复完成: {pathfinding_map}")
    return pathfinding_map
