# -*- coding: utf-8 -*-
"""
rotlog - 异步按时间轮转的文件日志库

支持：
- 任意线程写日志，单一写入线程落盘，保持入队顺序
- 按分钟、小时、天、周轮转日志文件
- 按保留个数自动清理旧日志文件
- 有界队列背压、可等待的关闭与刷新
- 标准库 logging 桥接
"""

from rotlog.__version__ import __version__
from .channel import DEFAULT_QUEUE_SIZE
from .config import LoggerConfig, load_config
from .errors import (
    ExitStatus,
    InvalidGranularityError,
    LoggerClosedError,
    LoggerError,
    LoggerIOError,
    ShutdownTimeoutError,
)
from .formatter import GlogFormatter, install_console_logs
from .handler import AsyncFileHandler
from .level import Level
from .logger import AsyncFileLogger, LoggerState, init_logger
from .record import LogRecord, format_record
from .sweeper import RetentionSweeper
from .window import (
    RotationWindow,
    When,
    get_expiry_interval,
    get_file_suffix_name,
    is_when_valid,
)

__all__ = [
    "__version__",
    # 核心
    "AsyncFileLogger",
    "LoggerState",
    "init_logger",
    # 配置
    "LoggerConfig",
    "load_config",
    "DEFAULT_QUEUE_SIZE",
    # 记录与级别
    "Level",
    "LogRecord",
    "format_record",
    # 轮转与清理
    "RotationWindow",
    "When",
    "RetentionSweeper",
    "get_expiry_interval",
    "get_file_suffix_name",
    "is_when_valid",
    # 异常
    "ExitStatus",
    "LoggerError",
    "InvalidGranularityError",
    "LoggerClosedError",
    "LoggerIOError",
    "ShutdownTimeoutError",
    # 诊断输出与桥接
    "GlogFormatter",
    "install_console_logs",
    "AsyncFileHandler",
]
