# -*- coding: utf-8 -*-
"""
异常与退出状态
"""

from enum import IntEnum


class ExitStatus(IntEnum):
    """写入线程结束时的状态码"""

    OK = 0  # 正常关闭
    OPEN_FAILED = 1  # 打开日志文件失败
    WRITE_FAILED = 2  # 写日志文件失败


class LoggerError(Exception):
    """日志库异常基类"""

    pass


class InvalidGranularityError(LoggerError, ValueError):
    """轮转粒度不是 M、H、D、W 之一"""

    pass


class LoggerClosedError(LoggerError):
    """日志器已关闭后仍然写入"""

    pass


class LoggerIOError(LoggerError):
    """打开或写入日志文件失败"""

    pass


class ShutdownTimeoutError(LoggerError):
    """等待写入线程结束超时"""

    pass
