#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
公共模块：异常与常量
"""

from .exceptions import (
    NavigationError,
    MapConstructionError,
    GridIndexError,
    ConfigurationError,
    SerializationError,
)

__all__ = [
    'NavigationError',
    'MapConstructionError',
    'GridIndexError',
    'ConfigurationError',
    'SerializationError',
]
