# -*- coding: utf-8 -*-
"""
日志保留清理

列出日志目录中匹配当前命名规则的文件，按文件名排序（零填充的日期格式下
字典序即时间顺序），超过保留个数时删除最旧的文件。
"""

import logging
import os
from typing import List, Pattern

logger = logging.getLogger(__name__)


class RetentionSweeper:
    """保留个数清理器

    在写入线程中同步执行：旧文件句柄关闭之后、新文件打开之前。
    列目录和删除失败只记录日志，不中断写日志。
    """

    def __init__(self, file_dir: str, pattern: Pattern, backup_count: int):
        """初始化

        Args:
            file_dir: 日志目录
            pattern: 匹配日志文件名的正则
            backup_count: 最大保留文件数
        """
        self.file_dir = file_dir
        self.pattern = pattern
        self.backup_count = backup_count

    def list_files(self) -> List[str]:
        """获取匹配的文件名列表（已排序）

        Returns:
            List[str]: 文件名列表，列目录失败时返回空列表
        """
        try:
            entries = list(os.scandir(self.file_dir))
        except OSError as e:
            logger.error(f"Failed to list log dir {self.file_dir}: {e}")
            return []

        names = []
        for entry in entries:
            try:
                if entry.is_dir():
                    continue
            except OSError:
                continue
            if self.pattern.match(entry.name):
                names.append(entry.name)

        names.sort()
        return names

    def sweep(self) -> List[str]:
        """删除超出保留个数的旧文件

        Returns:
            List[str]: 已删除的文件路径
        """
        names = self.list_files()
        delete_count = len(names) - self.backup_count
        if delete_count <= 0:
            return []

        deleted = []
        for name in names[:delete_count]:
            path = os.path.join(self.file_dir, name)
            try:
                os.remove(path)
            except OSError as e:
                logger.warning(f"Failed to delete old log file {path}: {e}")
                continue
            logger.debug(f"Deleted old log file: {path}")
            deleted.append(path)

        return deleted
