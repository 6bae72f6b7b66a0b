#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
场景配置模型

使用Pydantic定义类型安全的配置模型：地图参数、障碍列表、路径查询和日志。
"""

from typing import List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, Field, field_validator

from ..common.constants import LOG_LEVELS


class MapConfig(BaseModel):
    """寻路地图配置"""
    origin: Tuple[float, float] = Field((0.0, 0.0), description="左下角坐标 (x, y)")
    size: Tuple[float, float] = Field(..., description="地图尺寸 (width, height)")
    navigator_radius: float = Field(..., description="导航体半径")
    resolution: int = Field(..., description="每单位长度节点数")

    @field_validator('size')
    @classmethod
    def validate_size(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        """验证地图尺寸"""
        width, height = v
        if width <= 0 or height <= 0:
            raise ValueError(f"地图尺寸必须大于0: {v}")
        return v

    @field_validator('navigator_radius')
    @classmethod
    def validate_navigator_radius(cls, v: float) -> float:
        """验证导航半径"""
        if v < 0:
            raise ValueError(f"导航半径不能为负数: {v}")
        return v

    @field_validator('resolution')
    @classmethod
    def validate_resolution(cls, v: int) -> int:
        """验证分辨率"""
        if v <= 0:
            raise ValueError(f"分辨率必须大于0: {v}")
        return v


class ObstacleConfig(BaseModel):
    """多边形障碍配置"""
    position: Tuple[float, float] = Field(..., description="放置位置 (x, y)")
    corners: List[Tuple[float, float]] = Field(..., description="局部坐标角点，按顺序，末点连回首点")

    @field_validator('corners')
    @classmethod
    def validate_corners(cls, v: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
        """验证角点"""
        if not v:
            raise ValueError("障碍至少需要一个角点")
        if len(v) < 3:
            logger.warning(f"障碍角点少于3个，几何将退化: {v}")
        return v


class QueryConfig(BaseModel):
    """路径查询配置"""
    start: Tuple[float, float] = Field(..., description="起点 (x, y)")
    end: Tuple[float, float] = Field(..., description="终点 (x, y)")


class LogConfig(BaseModel):
    """日志配置"""
    level: str = Field("INFO", description="日志级别")
    log_dir: Optional[str] = Field(None, description="日志目录，为空时只输出到控制台")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """验证日志级别"""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"未知日志级别: {v}")
        return level


class ScenarioConfig(BaseModel):
    """场景主配置"""
    map: MapConfig = Field(..., description="寻路地图配置")
    obstacles: List[ObstacleConfig] = Field(default_factory=list, description="障碍列表")
    queries: List[QueryConfig] = Field(default_factory=list, description="路径查询列表")
    log: LogConfig = Field(default_factory=LogConfig, description="日志配置")
