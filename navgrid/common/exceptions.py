#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
自定义异常类：定义导航模块的专用异常
"""


class NavigationError(Exception):
    """导航模块基础异常类"""
    pass


class MapConstructionError(NavigationError):
    """寻路地图构建失败异常（例如分辨率 <= 0）"""
    pass


class GridIndexError(NavigationError, IndexError):
    """栅格索引越界异常，属于程序错误，不应被捕获后继续使用地图"""
    pass


class ConfigurationError(NavigationError):
    """配置错误异常"""
    pass


class SerializationError(NavigationError):
    """地图快照序列化/反序列化失败异常"""
    pass
