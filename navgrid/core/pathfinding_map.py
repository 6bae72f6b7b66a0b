#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
寻路地图：固定边界、分辨率和导航半径的栅格

节点在构建时一次性创建，按 index_x 优先、index_y 其次存放在扁平列表中，
扁平索引 = index_x * count_y + index_y。之后只有 is_obstacle 和搜索草稿字段会变化。
"""

import math
from typing import Iterator, List, Optional, Sequence

import numpy as np
from loguru import logger

from ..common.constants import (
    DIRECTIONS_8WAY,
    NODE_COUNT_ROUND_DIGITS,
    SNAP_TOLERANCE_FACTOR,
)
from ..common.exceptions import GridIndexError, MapConstructionError
from .astar_search import GridAStar
from .interfaces import IMapBaker, IObstacle, IPathfindingMap, Point
from .map_node import MapNode


def axis_node_count(lower: float, upper: float, resolution: int) -> int:
    """
    单轴节点数：满足 lower + k / resolution < upper 的 k（k >= 0）的个数

    extent * resolution 先舍入到 9 位小数，避免浮点误差多出或少掉最后一个节点；
    不足一个格距的尾段不产生节点。
    """
    scaled = round((upper - lower) * resolution, NODE_COUNT_ROUND_DIGITS)
    if scaled <= 0:
        return 0
    return int(math.ceil(scaled))


class PathfindingMap(IPathfindingMap):
    """
    寻路地图

    示例:
        ```python
        pathfinding_map = PathfindingMap(MapBaker(), (0, 0), (25, 25), 0.5, 5)
        pathfinding_map.BakeObstacle(PolygonObstacle((15, 13), corners))
        path = pathfinding_map.GetPath((4, 3), (16, 17))
        ```

    非线程安全：烘焙和搜索都会修改节点，调用方需要串行化。
    """

    def __init__(
        self,
        baker: IMapBaker,
        origin: Sequence[float],
        size: Sequence[float],
        navigator_radius: float,
        resolution: int,
    ):
        """
        Args:
            baker: 烘焙器
            origin: 左下角坐标
            size: 地图尺寸 (width, height)，右上角 = origin + size
            navigator_radius: 导航体半径
            resolution: 每单位长度的节点数（单轴），必须 > 0

        Raises:
            MapConstructionError: resolution <= 0
        """
        if resolution <= 0:
            raise MapConstructionError(
                f"分辨率必须大于0，无法创建寻路地图: resolution={resolution}"
            )

        self.baker_ = baker
        self.origin_: Point = (float(origin[0]), float(origin[1]))
        self.upper_bound_: Point = (self.origin_[0] + float(size[0]), self.origin_[1] + float(size[1]))
        self.navigator_radius_ = float(navigator_radius)
        self.resolution_ = resolution
        self.obstacles_baked_ = 0

        self.count_x_ = axis_node_count(self.origin_[0], self.upper_bound_[0], resolution)
        self.count_y_ = axis_node_count(self.origin_[1], self.upper_bound_[1], resolution)
        if self.count_x_ == 0 or self.count_y_ == 0:
            self.count_x_ = self.count_y_ = 0

        self.nodes_: List[MapNode] = []
        self.positions_ = np.zeros((self.count_x_ * self.count_y_, 2), dtype=np.float64)
        self._InitializeNodes()

        logger.info(
            f"寻路地图创建完成: 范围={self.origin_}-{self.upper_bound_}, 分辨率={resolution}, "
            f"导航半径={self.navigator_radius_}, 节点={self.count_x_}x{self.count_y_}"
        )

    def _InitializeNodes(self) -> None:
        for index_x in range(self.count_x_):
            x = self.origin_[0] + index_x / self.resolution_
            for index_y in range(self.count_y_):
                y = self.origin_[1] + index_y / self.resolution_
                self.positions_[len(self.nodes_)] = (x, y)
                self.nodes_.append(MapNode(position=(x, y), index_x=index_x, index_y=index_y))
        # 位置只读
        self.positions_.setflags(write=False)

    # -------------------------------------------------------------------------
    # 属性

    @property
    def baker(self) -> IMapBaker:
        return self.baker_

    @property
    def origin(self) -> Point:
        return self.origin_

    @property
    def upper_bound(self) -> Point:
        return self.upper_bound_

    @property
    def navigator_radius(self) -> float:
        return self.navigator_radius_

    @property
    def resolution(self) -> int:
        return self.resolution_

    @property
    def spacing(self) -> float:
        """相邻节点间距 = 1 / resolution"""
        return 1.0 / self.resolution_

    @property
    def obstacles_baked(self) -> int:
        return self.obstacles_baked_

    @property
    def count_x(self) -> int:
        return self.count_x_

    @property
    def count_y(self) -> int:
        return self.count_y_

    @property
    def nodes(self) -> List[List[MapNode]]:
        """二维视图 nodes[index_x][index_y]"""
        return [
            self.nodes_[x * self.count_y_:(x + 1) * self.count_y_]
            for x in range(self.count_x_)
        ]

    # -------------------------------------------------------------------------
    # 节点访问

    def __len__(self) -> int:
        return len(self.nodes_)

    def IterNodes(self) -> Iterator[MapNode]:
        return iter(self.nodes_)

    def FlatIndex(self, index_x: int, index_y: int) -> int:
        return index_x * self.count_y_ + index_y

    def NodeAt(self, flat_index: int) -> MapNode:
        return self.nodes_[flat_index]

    def GetNode(self, index_x: int, index_y: int) -> MapNode:
        """
        Raises:
            GridIndexError: 索引越界
        """
        if not self.IsValidIndex(index_x, index_y):
            raise GridIndexError(f"节点索引越界: ({index_x}, {index_y}), 栅格={self.count_x_}x{self.count_y_}")
        return self.nodes_[self.FlatIndex(index_x, index_y)]

    def IsValidIndex(self, index_x: int, index_y: int) -> bool:
        return 0 <= index_x < self.count_x_ and 0 <= index_y < self.count_y_

    def GetNodePositions(self) -> np.ndarray:
        return self.positions_

    def GetAdjacentNodes(self, index_x: int, index_y: int) -> List[Optional[MapNode]]:
        """
        获取 8 个相邻节点，从北 (0, +1) 开始顺时针，地图边缘外为 None（不回绕）

        Raises:
            GridIndexError: 请求的节点不存在（程序错误）
        """
        if not self.IsValidIndex(index_x, index_y):
            raise GridIndexError(
                f"尝试获取不存在节点的相邻节点: ({index_x}, {index_y}), 栅格={self.count_x_}x{self.count_y_}"
            )
        adjacent: List[Optional[MapNode]] = []
        for dx, dy in DIRECTIONS_8WAY:
            nx, ny = index_x + dx, index_y + dy
            if self.IsValidIndex(nx, ny):
                adjacent.append(self.nodes_[nx * self.count_y_ + ny])
            else:
                adjacent.append(None)
        return adjacent

    def HasAdjacentObstacle(self, node: MapNode) -> bool:
        return any(adj is not None and adj.is_obstacle for adj in self.GetAdjacentNodes(node.index_x, node.index_y))

    def SnapToNode(self, point: Sequence[float]) -> Optional[MapNode]:
        """
        把连续坐标吸附到节点

        按 index_x 优先、index_y 其次的扫描顺序取第一个两轴偏差都不超过半个格距的节点。
        正好落在两个节点中间时取扫描顺序靠前的一个，不保证是最近节点。

        Returns:
            吸附到的节点，不在地图上返回 None
        """
        if not self.nodes_:
            return None
        tolerance = SNAP_TOLERANCE_FACTOR / self.resolution_
        px, py = float(point[0]), float(point[1])
        within = (
            (np.abs(self.positions_[:, 0] - px) <= tolerance) &
            (np.abs(self.positions_[:, 1] - py) <= tolerance)
        )
        if not within.any():
            return None
        return self.nodes_[int(np.argmax(within))]

    def ObstacleMask(self) -> np.ndarray:
        """障碍掩码，uint8，形状 (count_y, count_x)，[y, x] 索引，1=障碍"""
        flags = np.fromiter((node.is_obstacle for node in self.nodes_), dtype=bool, count=len(self.nodes_))
        return flags.reshape(self.count_x_, self.count_y_).T.astype(np.uint8)

    def PathMask(self) -> np.ndarray:
        """最近一次搜索的路径点掩码，uint8，形状 (count_y, count_x)"""
        flags = np.fromiter((node.is_path for node in self.nodes_), dtype=bool, count=len(self.nodes_))
        return flags.reshape(self.count_x_, self.count_y_).T.astype(np.uint8)

    # -------------------------------------------------------------------------
    # 操作

    def BakeObstacle(self, obstacle: IObstacle) -> bool:
        """
        用当前烘焙器烘焙障碍

        Returns:
            是否烘焙成功；成功时 obstacles_baked 加一
        """
        if not self.baker_.BakeObstacle(obstacle, self):
            return False
        self.obstacles_baked_ += 1
        logger.info(f"障碍烘焙成功: 已烘焙障碍数={self.obstacles_baked_}")
        return True

    def RestoreObstaclesBaked(self, count: int) -> None:
        """
        恢复已烘焙障碍计数，只用于从快照重建地图

        Raises:
            ValueError: count 为负数
        """
        if count < 0:
            raise ValueError(f"已烘焙障碍数不能为负数: {count}")
        self.obstacles_baked_ = int(count)

    def GetPath(self, start_point: Sequence[float], end_point: Sequence[float]) -> List[Point]:
        """
        计算从起点到终点的路径

        Returns:
            起点到终点的路径点列表；起终点无效、相同、在障碍中或无路可走时返回空列表
        """
        return GridAStar(self).Search(start_point, end_point).path

    def Serialize(self) -> str:
        """导出 JSON 快照"""
        from .map_serializer import serialize_map
        return serialize_map(self)

    @staticmethod
    def Deserialize(text: str, baker: Optional[IMapBaker] = None) -> "PathfindingMap":
        """从 JSON 快照重建地图"""
        from .map_serializer import deserialize_map
        return deserialize_map(text, baker)

    def __repr__(self) -> str:
        return (
            f"PathfindingMap(origin={self.origin_}, upper_bound={self.upper_bound_}, "
            f"resolution={self.resolution_}, navigator_radius={self.navigator_radius_}, "
            f"nodes={self.count_x_}x{self.count_y_}, obstacles_baked={self.obstacles_baked_})"
        )
