#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
地图节点：栅格中的一个离散采样点
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class MapNode:
    """
    栅格节点

    position / index_x / index_y 在创建后不变；is_obstacle 只会从 False 变为 True；
    其余字段是搜索草稿状态，每次搜索开始时重置。
    """
    position: Tuple[float, float]
    index_x: int
    index_y: int
    is_obstacle: bool = False

    # 搜索草稿状态
    cost: float = field(default=0.0, compare=False)
    distance_from_start: float = field(default=0.0, compare=False)
    heuristic: float = field(default=0.0, compare=False)
    parent: Optional[int] = field(default=None, compare=False)  # 父节点的扁平索引
    is_path: bool = field(default=False, compare=False)

    def ResetSearchState(self) -> None:
        self.cost = 0.0
        self.distance_from_start = 0.0
        self.heuristic = 0.0
        self.parent = None
        self.is_path = False
