#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
常量定义：集中管理所有魔法数字和配置常量
"""

import math

# =============================
# 栅格相关常量
# =============================

# 计算每个轴节点数时对 extent * resolution 的舍入位数
NODE_COUNT_ROUND_DIGITS: int = 9

# 起点/终点吸附容差（单位：格间距）
SNAP_TOLERANCE_FACTOR: float = 0.5

# =============================
# 路径搜索相关常量
# =============================

ROOT_TWO: float = math.sqrt(2.0)

# 8 邻接方向，从北（+y）开始顺时针：N, NE, E, SE, S, SW, W, NW
DIRECTIONS_8WAY = [
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
]

# 规划结果原因
REASON_OK: str = "ok"
REASON_NOT_ON_MAP: str = "start_or_end_not_on_map"
REASON_SAME_NODE: str = "same_node"
REASON_START_IN_OBSTACLE: str = "start_in_obstacle"
REASON_END_IN_OBSTACLE: str = "end_in_obstacle"
REASON_NO_ROUTE: str = "no_route"

# =============================
# 可视化相关常量
# =============================

ASCII_FREE: str = "."
ASCII_OBSTACLE: str = "#"
ASCII_PATH: str = "*"
ASCII_START: str = "S"
ASCII_GOAL: str = "G"

# BGR 颜色
COLOR_FREE = (235, 235, 235)
COLOR_OBSTACLE = (40, 40, 40)
COLOR_PATH = (255, 0, 0)
COLOR_START = (0, 255, 0)
COLOR_GOAL = (0, 0, 255)

DEFAULT_CELL_PX: int = 4

# =============================
# 持久化相关常量
# =============================

SNAPSHOT_FORMAT_VERSION: int = 1

# =============================
# 日志相关常量
# =============================

# loguru 内置日志级别
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
