#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
navgrid 主包

面向固定半径圆形导航体的栅格寻路：多边形障碍烘焙 + A* 路径搜索。
"""

__version__ = "0.1.0"

from .core import (
    IMapBaker,
    IObstacle,
    IPathfindingMap,
    MapBaker,
    MapNode,
    PathfindingMap,
    PolygonObstacle,
    GridAStar,
    PlanResult,
)

__all__ = [
    'IMapBaker',
    'IObstacle',
    'IPathfindingMap',
    'MapBaker',
    'MapNode',
    'PathfindingMap',
    'PolygonObstacle',
    'GridAStar',
    'PlanResult',
]
