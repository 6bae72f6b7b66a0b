#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
场景配置模块

提供类型安全的配置管理和验证。
"""

from .models import (
    ScenarioConfig,
    MapConfig,
    ObstacleConfig,
    QueryConfig,
    LogConfig,
)
from .loader import load_config, default_scenario, build_map, build_obstacle

__all__ = [
    'ScenarioConfig',
    'MapConfig',
    'ObstacleConfig',
    'QueryConfig',
    'LogConfig',
    'load_config',
    'default_scenario',
    'build_map',
    'build_obstacle',
]
