#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
导航演示主程序

按场景配置创建地图、烘焙障碍、执行路径查询，并打印栅格。
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from loguru import logger

from .common.constants import LOG_LEVELS
from .config import ScenarioConfig, build_map, build_obstacle, default_scenario, load_config
from .core.astar_search import GridAStar, PlanResult
from .core.pathfinding_map import PathfindingMap
from .utils.logger import SetupLogger
from .visual_debugger import VisualDebugger


def run_scenario(config: ScenarioConfig) -> Tuple[PathfindingMap, List[PlanResult]]:
    """
    执行场景

    Returns:
        (烘焙后的地图, 每个查询的规划结果)
    """
    pathfinding_map = build_map(config.map)

    for i, obstacle_config in enumerate(config.obstacles):
        if not pathfinding_map.BakeObstacle(build_obstacle(obstacle_config)):
            logger.warning(f"第{i}个障碍烘焙失败（超出地图范围）: position={obstacle_config.position}")

    results = []
    searcher = GridAStar(pathfinding_map)
    for query in config.queries:
        result = searcher.Search(query.start, query.end)
        results.append(result)
        if result.ok:
            logger.info(f"查询 {query.start} -> {query.end}: {len(result.path)} 个路径点")
        else:
            logger.warning(f"查询 {query.start} -> {query.end} 失败: {result.reason}")

    return pathfinding_map, results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="navgrid 寻路演示")
    parser.add_argument("--config", type=str, default=None, help="场景配置YAML路径，缺省时使用内置演示场景")
    parser.add_argument("--image", type=str, default=None, help="保存地图图像的路径（png）")
    parser.add_argument("--save", type=str, default=None, help="保存地图JSON快照的路径")
    parser.add_argument("--log-level", type=str.upper, default=None, choices=LOG_LEVELS,
                        help="覆盖配置中的日志级别")
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else default_scenario()
    SetupLogger(level=args.log_level or config.log.level, log_dir=config.log.log_dir)

    pathfinding_map, results = run_scenario(config)

    for query, result in zip(config.queries, results):
        print(f"{query.start} -> {query.end}: {result.reason}")
        for point in result.path:
            print(f"  ({point[0]:.2f}, {point[1]:.2f})")

    # 最后一次查询的路径标记还留在节点上
    debugger = VisualDebugger()
    last_query = config.queries[-1] if config.queries else None
    print(debugger.RenderAscii(
        pathfinding_map,
        start=last_query.start if last_query else None,
        end=last_query.end if last_query else None,
    ))

    if args.image:
        last_path = results[-1].path if results else None
        debugger.SaveImage(debugger.DrawMap(pathfinding_map, last_path), args.image)

    if args.save:
        save_path = Path(args.save)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        save_path.write_text(pathfinding_map.Serialize(), encoding='utf-8')
        logger.info(f"地图快照已保存: {save_path}")

    return 0 if all(result.ok for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
