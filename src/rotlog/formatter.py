# -*- coding: utf-8 -*-
"""
控制台诊断输出

日志器自身的诊断信息（打开/关闭失败、清理失败、退出提示等）
通过标准库 logging 输出，这里提供 glog 风格的格式化器和安装函数。

Glog 格式：
[LEVEL] [DATETIME] [PID] [FILE:LINE](FUNC) MESSAGE

示例：
[INFO] [20210917 23:00:00.123456] [12345] [logger.py:10](_finish) logger process is exit
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional, TextIO

# 获取进程 ID
_PID = os.getpid()

ROOT_LOGGER_NAME = "rotlog"

_console_handler: Optional[logging.Handler] = None


class GlogFormatter(logging.Formatter):
    """Google Log 格式化器"""

    # 日志级别缩写映射
    LEVEL_MAP = {
        logging.DEBUG: "DEBU",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERRO",
        logging.CRITICAL: "FATA",
    }

    def __init__(self, datefmt: str = "%Y%m%d %H:%M:%S", report_caller: bool = True):
        """初始化格式化器

        Args:
            datefmt: 日期格式
            report_caller: 是否报告调用者信息
        """
        super().__init__()
        self.datefmt = datefmt
        self.report_caller = report_caller

    def format(self, record: logging.LogRecord) -> str:
        parts = [f"[{self.LEVEL_MAP.get(record.levelno, 'UNKN')}]"]

        # 时间戳，包含微秒
        timestamp = datetime.fromtimestamp(record.created).strftime(self.datefmt)
        microseconds = int((record.created - int(record.created)) * 1000000)
        parts.append(f"[{timestamp}.{microseconds:06d}]")

        parts.append(f"[{_PID}]")

        if self.report_caller:
            filename = os.path.basename(record.pathname)
            parts.append(f"[{filename}:{record.lineno}]({record.funcName})")

        parts.append(record.getMessage())

        text = " ".join(parts)
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


def install_console_logs(
    level="info", stream: Optional[TextIO] = None
) -> logging.Handler:
    """为 rotlog 的诊断日志安装控制台输出

    Args:
        level: 日志级别名称或 logging 级别数值
        stream: 输出流，默认 stderr

    Returns:
        logging.Handler: 已安装的处理器
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(GlogFormatter())

    global _console_handler
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    # 重复安装时替换旧的处理器
    if _console_handler is not None:
        root.removeHandler(_console_handler)
    root.addHandler(handler)
    _console_handler = handler
    return handler
