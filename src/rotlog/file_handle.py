# -*- coding: utf-8 -*-
"""
日志文件句柄管理
"""

import logging
from pathlib import Path
from typing import Optional, TextIO

from .errors import LoggerIOError

logger = logging.getLogger(__name__)


class FileHandleManager:
    """持有唯一的输出文件句柄，只由写入线程使用"""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self._file: Optional[TextIO] = None
        self._path: str = ""

    @property
    def path(self) -> str:
        """当前打开的文件路径"""
        return self._path

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self, path: str) -> None:
        """以追加方式打开文件，不存在则创建，已有内容不截断

        已打开的旧句柄会先关闭。

        Raises:
            LoggerIOError: 打开失败
        """
        self.close()
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            # 无法编码的字符转义写入，不影响后续记录
            self._file = open(
                path, "a", encoding=self.encoding, errors="backslashreplace"
            )
        except OSError as e:
            raise LoggerIOError(f"failed to open log file {path}: {e}") from e
        self._path = path

    def write(self, text: str) -> None:
        """追加写入并刷新

        Raises:
            LoggerIOError: 写入失败或文件未打开
        """
        if self._file is None:
            raise LoggerIOError("log file is not open")
        try:
            self._file.write(text)
            self._file.flush()
        except OSError as e:
            raise LoggerIOError(f"failed to write log file {self._path}: {e}") from e

    def flush(self) -> None:
        if self._file is None:
            return
        try:
            self._file.flush()
        except OSError as e:
            logger.error(f"Failed to flush log file {self._path}: {e}")

    def close(self) -> None:
        """刷新并关闭文件，错误只记录日志"""
        if self._file is None:
            return
        f, self._file = self._file, None
        try:
            f.close()
        except OSError as e:
            logger.error(f"Failed to close log file {self._path}: {e}")
