#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
导航核心模块：栅格地图、障碍烘焙、A* 路径搜索
"""

from .interfaces import IMapBaker, IObstacle, IPathfindingMap, Point
from .map_node import MapNode
from .polygon_obstacle import PolygonObstacle
from .map_baker import MapBaker
from .astar_search import GridAStar, PlanResult
from .pathfinding_map import PathfindingMap
from .map_serializer import serialize_map, deserialize_map

__all__ = [
    'IMapBaker',
    'IObstacle',
    'IPathfindingMap',
    'Point',
    'MapNode',
    'PolygonObstacle',
    'MapBaker',
    'GridAStar',
    'PlanResult',
    'PathfindingMap',
    'serialize_map',
    'deserialize_map',
]
