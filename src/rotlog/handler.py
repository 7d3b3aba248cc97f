# -*- coding: utf-8 -*-
"""
标准库 logging 桥接

将 logging 的记录投递到 AsyncFileLogger，便于已有代码直接使用：

    log = init_logger("H", 24, "info", "./log", "app")
    logging.getLogger().addHandler(AsyncFileHandler(log))
"""

import logging

from .formatter import ROOT_LOGGER_NAME
from .level import Level
from .logger import AsyncFileLogger
from .record import LogRecord, render_time


class AsyncFileHandler(logging.Handler):
    """基于 AsyncFileLogger 的日志处理器"""

    def __init__(self, file_logger: AsyncFileLogger, level: int = logging.NOTSET):
        """初始化

        Args:
            file_logger: 已启动的日志器
            level: 日志级别
        """
        super().__init__(level)
        self.file_logger = file_logger

    def emit(self, record: logging.LogRecord):
        # 日志器自身的诊断输出可能来自写入线程，不能再投递回队列
        if record.name == ROOT_LOGGER_NAME or record.name.startswith(ROOT_LOGGER_NAME + "."):
            return
        try:
            self.file_logger.submit(
                LogRecord(
                    level=Level.from_logging(record.levelno),
                    time=render_time(record.created),
                    message=record.getMessage(),
                    file=record.pathname,
                    line=record.lineno,
                )
            )
        except Exception:
            self.handleError(record)

    def close(self):
        """关闭处理器并等待日志写完"""
        self.file_logger.shutdown()
        super().close()
