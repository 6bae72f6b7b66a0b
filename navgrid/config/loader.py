#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置加载器

从YAML文件加载场景配置并使用Pydantic验证，再把配置转成核心对象。
"""

from pathlib import Path
from typing import Optional, Union

import yaml
from loguru import logger
from pydantic import ValidationError

from ..common.exceptions import ConfigurationError
from ..core.interfaces import IMapBaker
from ..core.map_baker import MapBaker
from ..core.pathfinding_map import PathfindingMap
from ..core.polygon_obstacle import PolygonObstacle
from .models import MapConfig, ObstacleConfig, QueryConfig, ScenarioConfig


def load_config(config_path: Union[str, Path]) -> ScenarioConfig:
    """
    从YAML文件加载场景配置

    Args:
        config_path: 配置文件路径

    Returns:
        验证后的ScenarioConfig对象

    Raises:
        FileNotFoundError: 配置文件不存在
        yaml.YAMLError: YAML格式错误
        ConfigurationError: 配置为空或验证失败
    """
    config_path = Path(config_path)

    if not config_path.exists():
        error_msg = f"配置文件不存在: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = f"YAML格式错误: {e}"
        logger.error(error_msg)
        raise yaml.YAMLError(error_msg) from e

    if raw_config is None:
        error_msg = f"配置文件为空: {config_path}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    if not isinstance(raw_config, dict):
        error_msg = f"配置文件顶层必须是映射: {config_path}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    try:
        config = ScenarioConfig(**raw_config)
    except ValidationError as e:
        error_msg = f"配置验证失败:\n{e}"
        logger.error(error_msg)
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error['loc'])
            logger.error(f"  {field_path}: {error['msg']}")
        raise ConfigurationError(error_msg) from e

    logger.info(f"配置加载成功: {config_path}")
    return config


def default_scenario() -> ScenarioConfig:
    """内置演示场景：25x25 地图、两个六边形障碍、一次路径查询"""
    return ScenarioConfig(
        map=MapConfig(origin=(0.0, 0.0), size=(25.0, 25.0), navigator_radius=0.5, resolution=5),
        obstacles=[
            ObstacleConfig(
                position=(15.0, 13.0),
                corners=[(0, 0), (-2, 4), (0, 7), (-6, 5), (4, -4), (7, 2)],
            ),
            ObstacleConfig(
                position=(9.0, 4.0),
                corners=[(0, 0), (7, 4), (-1, 9), (-4, 5), (0, 7), (4, 4)],
            ),
        ],
        queries=[QueryConfig(start=(4.0, 3.0), end=(16.0, 17.0))],
    )


def build_map(map_config: MapConfig, baker: Optional[IMapBaker] = None) -> PathfindingMap:
    """按配置创建空地图（未烘焙障碍）"""
    return PathfindingMap(
        baker if baker is not None else MapBaker(),
        map_config.origin,
        map_config.size,
        map_config.navigator_radius,
        map_config.resolution,
    )


def build_obstacle(obstacle_config: ObstacleConfig) -> PolygonObstacle:
    return PolygonObstacle(obstacle_config.position, obstacle_config.corners)
