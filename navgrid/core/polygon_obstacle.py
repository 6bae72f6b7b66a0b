#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
多边形障碍：障碍接口的简单多边形实现
"""

from typing import List, Sequence, Tuple

import numpy as np

from .interfaces import IObstacle, Point

Edge = Tuple[Point, Point]


class PolygonObstacle(IObstacle):
    """
    多边形障碍

    示例:
        ```python
        obstacle = PolygonObstacle((15, 13), [(0, 0), (-2, 4), (0, 7)])
        pathfinding_map.BakeObstacle(obstacle)
        ```
    """

    def __init__(self, position: Sequence[float], corners: Sequence[Sequence[float]]):
        """
        Args:
            position: 放置位置 (x, y)，会加到所有角点上
            corners: 局部坐标角点，按顺序；少于 3 个点时几何退化但不报错
        """
        self.position_: Point = (float(position[0]), float(position[1]))
        self.corners_: List[Point] = [(float(c[0]), float(c[1])) for c in corners]

    @property
    def position(self) -> Point:
        return self.position_

    @property
    def corners(self) -> List[Point]:
        return list(self.corners_)

    def __repr__(self) -> str:
        return f"PolygonObstacle(position={self.position_}, corners={self.corners_})"


def world_corners(obstacle: IObstacle) -> np.ndarray:
    """
    把障碍角点变换到地图坐标

    Returns:
        (N, 2) float64 数组
    """
    corners = np.asarray(obstacle.corners, dtype=np.float64).reshape(-1, 2)
    return corners + np.asarray(obstacle.position, dtype=np.float64)


def bounding_box(corners: np.ndarray) -> Tuple[Point, Point]:
    """角点的轴对齐包围盒 (左下, 右上)，角点不能为空"""
    lower = corners.min(axis=0)
    upper = corners.max(axis=0)
    return (float(lower[0]), float(lower[1])), (float(upper[0]), float(upper[1]))


def polygon_edges(corners: np.ndarray) -> List[Edge]:
    """按顺序连接相邻角点，最后一个连回第一个"""
    edges: List[Edge] = []
    count = len(corners)
    for i in range(count):
        a = corners[i]
        b = corners[(i + 1) % count]
        edges.append(((float(a[0]), float(a[1])), (float(b[0]), float(b[1]))))
    return edges
