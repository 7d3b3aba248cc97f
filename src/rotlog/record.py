# -*- coding: utf-8 -*-
"""
日志记录

LogRecord 在调用方线程中创建，交给写入线程格式化后丢弃，创建后不再修改。

落盘格式：
[<时间>] <级别> <消息> <源文件名>.<行号>

示例：
[2021-09-17 23:00:00] INFO hello world main.py.10
"""

import os
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from .level import Level

TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"


def render_time(ts: float) -> str:
    """将时间戳渲染为 YYYY-MM-DD HH:MM:SS（本地时间）"""
    return datetime.fromtimestamp(ts).strftime(TIME_LAYOUT)


@dataclass(frozen=True)
class LogRecord:
    """单条日志记录"""

    level: Level
    time: str
    message: str
    file: str
    line: int

    @classmethod
    def create(
        cls, level, ts: float, fmt: str, args: tuple = (), file: str = "", line: int = 0
    ) -> "LogRecord":
        """构造日志记录

        Args:
            level: 日志级别
            ts: 创建时间戳（秒）
            fmt: printf 风格的格式串
            args: 格式化参数，为空时直接使用 fmt
            file: 源文件路径
            line: 源文件行号
        """
        message = fmt % args if args else fmt
        return cls(
            level=Level.parse(level),
            time=render_time(ts),
            message=str(message),
            file=file,
            line=line,
        )


def format_record(record: LogRecord) -> str:
    """默认格式化器，返回不含换行符的一行文本"""
    return (
        f"[{record.time}] {record.level.label} {record.message} "
        f"{os.path.basename(record.file)}.{record.line}"
    )


def find_caller(depth: int = 1) -> Tuple[str, int]:
    """获取调用位置

    Args:
        depth: 相对于 find_caller 调用者的栈深度，1 表示调用者的调用者

    Returns:
        tuple: (文件路径, 行号)，取不到时返回 ("???", 0)
    """
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return "???", 0
    return frame.f_code.co_filename, frame.f_lineno
