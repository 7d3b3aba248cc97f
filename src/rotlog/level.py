# -*- coding: utf-8 -*-
"""
日志级别

级别按严重程度全序：DEBUG < INFO < WARNING < ERROR。
写入文件时使用的名称为 DEBUG、INFO、WARN、ERROR。
"""

import logging
from enum import IntEnum
from typing import Union


class Level(IntEnum):
    """日志级别枚举"""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def label(self) -> str:
        """落盘时使用的级别名称"""
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, value: Union["Level", int, str]) -> "Level":
        """解析日志级别

        支持 Level、整数以及不区分大小写的名称（"warn" 与 "warning" 等价）。

        Args:
            value: 待解析的级别

        Returns:
            Level: 解析后的级别

        Raises:
            ValueError: 无法识别的级别
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"invalid log level: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            name = value.strip().lower()
            if name.isdigit():
                return cls(int(name))
            level = _NAMES.get(name)
            if level is not None:
                return level
        raise ValueError(f"invalid log level: {value!r}")

    @classmethod
    def from_logging(cls, levelno: int) -> "Level":
        """将标准库 logging 级别映射为 Level

        CRITICAL 归入 ERROR，低于 INFO 的级别均视为 DEBUG。
        """
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


_LABELS = {
    Level.DEBUG: "DEBUG",
    Level.INFO: "INFO",
    Level.WARNING: "WARN",
    Level.ERROR: "ERROR",
}

_NAMES = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARNING,
    "warning": Level.WARNING,
    "error": Level.ERROR,
}
