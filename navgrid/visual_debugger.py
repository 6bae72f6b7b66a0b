#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
可视化调试工具：显示寻路地图的障碍、路径点等结果
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np
from loguru import logger

from .common.constants import (
    ASCII_FREE,
    ASCII_GOAL,
    ASCII_OBSTACLE,
    ASCII_PATH,
    ASCII_START,
    COLOR_FREE,
    COLOR_GOAL,
    COLOR_OBSTACLE,
    COLOR_PATH,
    COLOR_START,
    DEFAULT_CELL_PX,
)
from .core.interfaces import Point
from .core.pathfinding_map import PathfindingMap


class VisualDebugger:
    """可视化调试器"""

    def __init__(self, enabled: bool = True):
        """
        初始化可视化调试器

        Args:
            enabled: 是否启用可视化
        """
        self.enabled_ = enabled

    def RenderAscii(
        self,
        pathfinding_map: PathfindingMap,
        start: Optional[Sequence[float]] = None,
        end: Optional[Sequence[float]] = None,
    ) -> str:
        """
        把地图渲染成文本，每个 index_y 一行，从上到下 y 递减

        '#' = 障碍, '.' = 空地, '*' = 路径点, 'S' = 起点, 'G' = 终点

        Args:
            pathfinding_map: 地图
            start: 起点坐标（可选，吸附后标记）
            end: 终点坐标（可选，吸附后标记）

        Returns:
            多行文本，禁用时返回空字符串
        """
        if not self.enabled_:
            return ""

        vis = np.full((pathfinding_map.count_y, pathfinding_map.count_x), ASCII_FREE, dtype='<U1')
        vis[pathfinding_map.ObstacleMask() != 0] = ASCII_OBSTACLE
        vis[pathfinding_map.PathMask() != 0] = ASCII_PATH

        # 标记起点终点
        for point, char in ((start, ASCII_START), (end, ASCII_GOAL)):
            if point is None:
                continue
            node = pathfinding_map.SnapToNode(point)
            if node is not None:
                vis[node.index_y, node.index_x] = char

        return "\n".join("".join(row) for row in vis[::-1])

    def DrawMap(
        self,
        pathfinding_map: PathfindingMap,
        path: Optional[List[Point]] = None,
        cell_px: int = DEFAULT_CELL_PX,
    ) -> Optional[np.ndarray]:
        """
        把地图画成彩色图像，index_y 向上增长

        Args:
            pathfinding_map: 地图
            path: 路径点列表（地图坐标）
            cell_px: 每个节点占的像素边长

        Returns:
            BGR 图像，禁用时返回 None
        """
        if not self.enabled_:
            return None
        if cell_px <= 0:
            raise ValueError(f"cell_px必须大于0: {cell_px}")

        # 图像行 0 对应最大的 index_y
        mask = np.flipud(pathfinding_map.ObstacleMask())
        mask = np.repeat(np.repeat(mask, cell_px, axis=0), cell_px, axis=1)

        image = np.empty(mask.shape + (3,), dtype=np.uint8)
        image[:] = COLOR_FREE
        image[mask != 0] = COLOR_OBSTACLE

        if path:
            pixels = [self._ToPixel(pathfinding_map, point, cell_px) for point in path]
            for i in range(1, len(pixels)):
                cv2.line(image, pixels[i - 1], pixels[i], COLOR_PATH, max(1, cell_px // 2))
            radius = max(2, cell_px)
            cv2.circle(image, pixels[0], radius, COLOR_START, -1)
            cv2.circle(image, pixels[-1], radius, COLOR_GOAL, -1)

        return image

    def SaveImage(self, image: Optional[np.ndarray], output_path: Union[str, Path]) -> bool:
        """
        保存图像

        Returns:
            是否保存成功
        """
        if image is None:
            return False
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        ok = bool(cv2.imwrite(str(output_path), image))
        if ok:
            logger.info(f"地图图像已保存: {output_path}")
        else:
            logger.error(f"地图图像保存失败: {output_path}")
        return ok

    @staticmethod
    def _ToPixel(pathfinding_map: PathfindingMap, point: Point, cell_px: int) -> Tuple[int, int]:
        """地图坐标 -> 像素坐标（节点中心）"""
        origin = pathfinding_map.origin
        fx = (point[0] - origin[0]) * pathfinding_map.resolution
        fy = (point[1] - origin[1]) * pathfinding_map.resolution
        px = int(round((fx + 0.5) * cell_px))
        py = int(round((pathfinding_map.count_y - 1 - fy + 0.5) * cell_px))
        return (px, py)
