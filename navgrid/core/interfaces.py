#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
核心接口定义：定义障碍、烘焙器和寻路地图的抽象接口
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterator, List, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:
    from .map_node import MapNode

Point = Tuple[float, float]  # (x, y)


class IObstacle(ABC):
    """障碍接口：放置位置 + 按顺序排列的多边形角点（局部坐标）"""

    @property
    @abstractmethod
    def position(self) -> Point:
        """障碍在平面上的放置位置"""
        pass

    @property
    @abstractmethod
    def corners(self) -> List[Point]:
        """
        多边形角点（局部坐标，按顺序）

        最后一个角点与第一个角点相连。
        """
        pass


class IMapBaker(ABC):
    """烘焙器接口：把障碍烘焙进寻路地图"""

    @abstractmethod
    def BakeObstacle(self, obstacle: IObstacle, pathfinding_map: "IPathfindingMap") -> bool:
        """
        把障碍烘焙进地图

        Args:
            obstacle: 要烘焙的障碍
            pathfinding_map: 目标地图

        Returns:
            是否烘焙成功，False 表示障碍（含导航半径膨胀）超出地图范围，地图未被修改
        """
        pass


class IPathfindingMap(ABC):
    """寻路地图接口：已烘焙障碍的栅格地图，为固定半径的导航体生成路线"""

    @property
    @abstractmethod
    def baker(self) -> IMapBaker:
        pass

    @property
    @abstractmethod
    def origin(self) -> Point:
        """左下角边界（x、y 最小的点）"""
        pass

    @property
    @abstractmethod
    def upper_bound(self) -> Point:
        """右上角边界（x、y 最大的点）"""
        pass

    @property
    @abstractmethod
    def navigator_radius(self) -> float:
        """导航体半径，烘焙时永久写入地图"""
        pass

    @property
    @abstractmethod
    def resolution(self) -> int:
        """每单位长度的节点数（单轴）"""
        pass

    @property
    @abstractmethod
    def obstacles_baked(self) -> int:
        """已成功烘焙的障碍数量"""
        pass

    @abstractmethod
    def IterNodes(self) -> Iterator["MapNode"]:
        """按 index_x 优先、index_y 其次的顺序遍历所有节点"""
        pass

    @abstractmethod
    def NodeAt(self, flat_index: int) -> "MapNode":
        """按扁平索引取节点"""
        pass

    @abstractmethod
    def GetNodePositions(self) -> np.ndarray:
        """
        所有节点位置

        Returns:
            (N, 2) float64 数组，行顺序与 IterNodes 一致
        """
        pass

    @abstractmethod
    def BakeObstacle(self, obstacle: IObstacle) -> bool:
        """用当前烘焙器烘焙障碍，成功时累加计数"""
        pass

    @abstractmethod
    def GetPath(self, start_point: Sequence[float], end_point: Sequence[float]) -> List[Point]:
        """
        计算路径

        Returns:
            按顺序排列的路径点，无法规划时返回空列表
        """
        pass
