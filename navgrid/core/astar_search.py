#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径搜索模块：在已烘焙的寻路地图上做 A* 并精简路径点

功能：
- 8 邻接移动，直行代价 1，斜向代价 √2
- 启发函数为栅格索引空间的欧氏距离平方（不可采纳，可能得到次优路径）
- 回溯时只保留终点、起点和紧挨障碍的节点作为路径点
"""

import heapq
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Set, Tuple

from loguru import logger

from ..common.constants import (
    REASON_END_IN_OBSTACLE,
    REASON_NO_ROUTE,
    REASON_NOT_ON_MAP,
    REASON_OK,
    REASON_SAME_NODE,
    REASON_START_IN_OBSTACLE,
    ROOT_TWO,
)
from .interfaces import Point
from .map_node import MapNode

if TYPE_CHECKING:
    from .pathfinding_map import PathfindingMap


@dataclass
class PlanResult:
    ok: bool
    path: List[Point] = field(default_factory=list)
    reason: str = ""
    nodes_explored: int = 0


def squared_index_distance(node: MapNode, target: MapNode) -> float:
    """栅格索引空间的欧氏距离平方"""
    dx = target.index_x - node.index_x
    dy = target.index_y - node.index_y
    return float(dx * dx + dy * dy)


class GridAStar:
    """
    栅格 A* 搜索器

    搜索草稿状态存放在地图节点上，每次 Search 开始时全部重置，
    因此同一张地图上的搜索必须串行执行。

    开放集是以 (cost, index_x, index_y) 为键的小顶堆：代价相同时取 index_x 最小、
    其次 index_y 最小的节点。节点被松弛后旧的堆条目作废，弹出时跳过。
    """

    def __init__(self, pathfinding_map: "PathfindingMap"):
        self.map_ = pathfinding_map

    def Search(self, start_point: Sequence[float], end_point: Sequence[float]) -> PlanResult:
        """
        搜索路径

        Args:
            start_point: 起点坐标 (x, y)
            end_point: 终点坐标 (x, y)

        Returns:
            PlanResult，失败时 ok=False、path 为空、reason 说明原因
        """
        self._ResetNodes()

        start = self.map_.SnapToNode(start_point)
        target = self.map_.SnapToNode(end_point)
        logger.debug(f"[A*] 吸附结果: start={start_point}->{_Describe(start)}, end={end_point}->{_Describe(target)}")

        reason = self._Reject(start, target)
        if reason is not None:
            logger.warning(f"[A*] 拒绝规划: reason={reason}, start={start_point}, end={end_point}")
            return PlanResult(ok=False, reason=reason)

        reached, nodes_explored = self._Expand(start, target)
        if not reached:
            logger.warning(
                f"[A*] 规划失败: 无法找到从{start_point}到{end_point}的路径, 探索节点数={nodes_explored}"
            )
            return PlanResult(ok=False, reason=REASON_NO_ROUTE, nodes_explored=nodes_explored)

        path = self._Reconstruct(start, target)
        logger.info(f"[A*] 路径规划成功: 路径点数={len(path)}, 探索节点数={nodes_explored}")
        return PlanResult(ok=True, path=path, reason=REASON_OK, nodes_explored=nodes_explored)

    def _ResetNodes(self) -> None:
        for node in self.map_.IterNodes():
            node.ResetSearchState()

    @staticmethod
    def _Reject(start: Optional[MapNode], target: Optional[MapNode]) -> Optional[str]:
        if start is None or target is None:
            return REASON_NOT_ON_MAP
        if start is target:
            return REASON_SAME_NODE
        if start.is_obstacle:
            return REASON_START_IN_OBSTACLE
        if target.is_obstacle:
            return REASON_END_IN_OBSTACLE
        return None

    def _Expand(self, start: MapNode, target: MapNode) -> Tuple[bool, int]:
        """
        A* 主循环

        Returns:
            (是否到达终点, 探索节点数)
        """
        flat = self.map_.FlatIndex

        start.distance_from_start = 0.0
        start.heuristic = squared_index_distance(start, target)
        start.cost = start.distance_from_start + start.heuristic

        open_heap: List[Tuple[float, int, int]] = [(start.cost, start.index_x, start.index_y)]
        open_set: Set[int] = {flat(start.index_x, start.index_y)}
        closed_set: Set[int] = set()
        nodes_explored = 0

        while open_heap:
            cost, index_x, index_y = heapq.heappop(open_heap)
            current_index = flat(index_x, index_y)
            current = self.map_.NodeAt(current_index)

            # 作废条目
            if current_index in closed_set or cost != current.cost:
                continue

            if current is target:
                return True, nodes_explored

            open_set.discard(current_index)
            closed_set.add(current_index)
            nodes_explored += 1

            for i, adj in enumerate(self.map_.GetAdjacentNodes(index_x, index_y)):
                if adj is None or adj.is_obstacle:
                    continue
                adj_index = flat(adj.index_x, adj.index_y)
                if adj_index in closed_set:
                    continue

                # 奇数方向为斜向
                step = ROOT_TWO if i % 2 == 1 else 1.0
                tentative = current.distance_from_start + step

                if adj_index not in open_set:
                    adj.parent = current_index
                    adj.distance_from_start = tentative
                    adj.heuristic = squared_index_distance(adj, target)
                    adj.cost = adj.distance_from_start + adj.heuristic
                    open_set.add(adj_index)
                    heapq.heappush(open_heap, (adj.cost, adj.index_x, adj.index_y))
                elif tentative < adj.distance_from_start:
                    # 经当前节点更近，改道
                    adj.parent = current_index
                    adj.distance_from_start = tentative
                    adj.cost = adj.distance_from_start + adj.heuristic
                    heapq.heappush(open_heap, (adj.cost, adj.index_x, adj.index_y))

        return False, nodes_explored

    def _Reconstruct(self, start: MapNode, target: MapNode) -> List[Point]:
        """沿 parent 链从终点回溯，只保留终点、起点和紧挨障碍的节点"""
        waypoints: List[Point] = []
        node: Optional[MapNode] = target
        while node is not None and node is not start:
            if node is target or self.map_.HasAdjacentObstacle(node):
                waypoints.append(node.position)
                node.is_path = True
            node = self.map_.NodeAt(node.parent) if node.parent is not None else None

        waypoints.append(start.position)
        start.is_path = True
        waypoints.reverse()
        return waypoints


def _Describe(node: Optional[MapNode]) -> str:
    if node is None:
        return "None"
    return f"({node.index_x}, {node.index_y})"
