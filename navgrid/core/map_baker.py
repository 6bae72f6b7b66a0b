#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
障碍烘焙模块：把多边形障碍按导航半径膨胀后写入栅格

功能：
- 包围盒按导航半径膨胀，超出地图则整体拒绝（不裁剪、不修改地图）
- 角点圆盘 + 边的跑道形区域，即多边形边界与半径圆盘的 Minkowski 和
- 只描边界，多边形内部离边界超过半径的节点保持可通行
"""

from typing import Tuple

import numpy as np
from loguru import logger

from .interfaces import IMapBaker, IObstacle, IPathfindingMap, Point
from .polygon_obstacle import bounding_box, polygon_edges, world_corners


def is_within_box_inclusive(point: Point, box_lower: Point, box_upper: Point) -> bool:
    """判断点是否在包围盒内（含边界）"""
    if point[0] > box_upper[0] or point[1] > box_upper[1]:
        return False
    if point[0] < box_lower[0] or point[1] < box_lower[1]:
        return False
    return True


def cross_2d(ax, ay, bx, by):
    """二维叉积 a × b，支持 numpy 广播"""
    return ax * by - ay * bx


def squared_distance_to_line(point_a: Point, point_b: Point, points: np.ndarray) -> np.ndarray:
    """
    点到线段所在直线的垂直距离平方

    距离平方 = (边向量 × 点向量)^2 / |边向量|^2

    Args:
        point_a: 线段起点
        point_b: 线段终点（不能与起点重合）
        points: (N, 2) 点数组

    Returns:
        (N,) 距离平方
    """
    ex = point_b[0] - point_a[0]
    ey = point_b[1] - point_a[1]
    cross = cross_2d(ex, ey, points[:, 0] - point_a[0], points[:, 1] - point_a[1])
    return cross * cross / (ex * ex + ey * ey)


def foot_within_segment(point_a: Point, point_b: Point, points: np.ndarray) -> np.ndarray:
    """
    垂足是否落在线段两端点之间（切线判定）

    用边的法向量分别与指向两个端点的向量做叉积，两者异号（或为零）时垂足在线段内，
    这样不会标记到线段延长线附近的节点。

    Returns:
        (N,) bool
    """
    # 法向量 (-ey, ex)
    nx = -(point_b[1] - point_a[1])
    ny = point_b[0] - point_a[0]
    side_a = cross_2d(nx, ny, point_a[0] - points[:, 0], point_a[1] - points[:, 1])
    side_b = cross_2d(nx, ny, point_b[0] - points[:, 0], point_b[1] - points[:, 1])
    return side_a * side_b <= 0


class MapBaker(IMapBaker):
    """默认烘焙器"""

    def BakeObstacle(self, obstacle: IObstacle, pathfinding_map: IPathfindingMap) -> bool:
        """
        烘焙障碍

        Args:
            obstacle: 要烘焙的障碍
            pathfinding_map: 目标地图

        Returns:
            是否烘焙成功；失败时地图完全不变
        """
        corners = world_corners(obstacle)
        if len(corners) == 0:
            logger.warning(f"障碍没有角点，跳过烘焙: {obstacle}")
            return False

        radius = float(pathfinding_map.navigator_radius)
        lower, upper = self._DilatedBoundingBox(corners, radius)

        # 膨胀后的包围盒必须完全在地图内，否则拒绝
        origin = pathfinding_map.origin
        upper_bound = pathfinding_map.upper_bound
        if not is_within_box_inclusive(lower, origin, upper_bound) or \
                not is_within_box_inclusive(upper, origin, upper_bound):
            logger.warning(
                f"障碍超出地图范围，拒绝烘焙: 膨胀包围盒={lower}-{upper}, "
                f"地图范围={origin}-{upper_bound}"
            )
            return False

        # 包围盒预筛选候选节点
        positions = pathfinding_map.GetNodePositions()
        candidate_mask = (
            (positions[:, 0] >= lower[0]) & (positions[:, 0] <= upper[0]) &
            (positions[:, 1] >= lower[1]) & (positions[:, 1] <= upper[1])
        )
        candidate_indices = np.flatnonzero(candidate_mask)
        if candidate_indices.size == 0:
            logger.debug("包围盒内没有节点，无需标记")
            return True

        candidates = positions[candidate_indices]
        hit = self._StrokeMask(corners, candidates, radius)

        marked = 0
        for flat_index in candidate_indices[hit]:
            node = pathfinding_map.NodeAt(int(flat_index))
            if not node.is_obstacle:
                node.is_obstacle = True
                marked += 1

        logger.debug(
            f"障碍烘焙完成: 候选节点={candidate_indices.size}, 命中={int(hit.sum())}, 新增障碍节点={marked}"
        )
        return True

    @staticmethod
    def _DilatedBoundingBox(corners: np.ndarray, radius: float) -> Tuple[Point, Point]:
        """角点包围盒按半径向外膨胀"""
        lower, upper = bounding_box(corners)
        return (lower[0] - radius, lower[1] - radius), (upper[0] + radius, upper[1] + radius)

    @staticmethod
    def _StrokeMask(corners: np.ndarray, points: np.ndarray, radius: float) -> np.ndarray:
        """
        计算落在 “边界描边” 内的点

        Args:
            corners: (M, 2) 地图坐标角点
            points: (N, 2) 候选节点位置
            radius: 导航半径

        Returns:
            (N,) bool
        """
        radius_sq = radius * radius
        hit = np.zeros(len(points), dtype=bool)

        # 1) 角点圆盘
        for corner in corners:
            dx = points[:, 0] - corner[0]
            dy = points[:, 1] - corner[1]
            hit |= (dx * dx + dy * dy) <= radius_sq

        # 2) 每条边的跑道形区域（只看垂足在线段内的部分）
        for point_a, point_b in polygon_edges(corners):
            if point_a == point_b:
                continue
            in_segment = foot_within_segment(point_a, point_b, points)
            hit |= in_segment & (squared_distance_to_line(point_a, point_b, points) <= radius_sq)

        return hit
