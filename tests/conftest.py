#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
navgrid 测试共用的 pytest 夹具与辅助函数
"""

import math

import pytest

from navgrid.core.map_baker import MapBaker
from navgrid.core.pathfinding_map import PathfindingMap
from navgrid.core.polygon_obstacle import PolygonObstacle

SQUARE_CORNERS = [(0, 0), (4, 0), (4, 4), (0, 4)]

HEXAGON_A = [(0, 0), (-2, 4), (0, 7), (-6, 5), (4, -4), (7, 2)]
HEXAGON_B = [(0, 0), (7, 4), (-1, 9), (-4, 5), (0, 7), (4, 4)]


@pytest.fixture
def open_map():
    """10x10 个节点，位于整数坐标 0..9，未烘焙障碍"""
    return PathfindingMap(MapBaker(), (0, 0), (10, 10), 0.5, 1)


@pytest.fixture
def square_map():
    """10x10 地图，半径 1，已烘焙 (3,3)-(7,7) 的正方形轮廓"""
    pathfinding_map = PathfindingMap(MapBaker(), (0, 0), (10, 10), 1.0, 1)
    assert pathfinding_map.BakeObstacle(PolygonObstacle((3, 3), SQUARE_CORNERS))
    return pathfinding_map


@pytest.fixture
def demo_map():
    """25x25 地图，分辨率 5，已烘焙两个六边形障碍"""
    pathfinding_map = PathfindingMap(MapBaker(), (0, 0), (25, 25), 0.5, 5)
    assert pathfinding_map.BakeObstacle(PolygonObstacle((15, 13), HEXAGON_A))
    assert pathfinding_map.BakeObstacle(PolygonObstacle((9, 4), HEXAGON_B))
    return pathfinding_map


def squared_segment_distance(point, a, b):
    """点到闭线段 a-b 的距离平方"""
    px, py = point
    ax, ay = a
    bx, by = b
    ex, ey = bx - ax, by - ay
    length_sq = ex * ex + ey * ey
    if length_sq == 0:
        return (px - ax) ** 2 + (py - ay) ** 2
    t = ((px - ax) * ex + (py - ay) * ey) / length_sq
    t = max(0.0, min(1.0, t))
    cx, cy = ax + t * ex, ay + t * ey
    return (px - cx) ** 2 + (py - cy) ** 2


def min_squared_outline_distance(point, position, corners):
    """点到闭合多边形轮廓的距离平方"""
    world = [(c[0] + position[0], c[1] + position[1]) for c in corners]
    best = math.inf
    for i, a in enumerate(world):
        b = world[(i + 1) % len(world)]
        best = min(best, squared_segment_distance(point, a, b))
    return best


def walk_parent_chain(pathfinding_map, target):
    """沿 parent 链从终点回到起点的节点列表"""
    chain = [target]
    node = target
    while node.parent is not None:
        node = pathfinding_map.NodeAt(node.parent)
        chain.append(node)
    return chain
