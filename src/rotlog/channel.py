# -*- coding: utf-8 -*-
"""
写入线程的命令队列

生产者线程通过队列把命令交给唯一的写入线程，命令包括：
- WriteCommand: 写一条日志
- RotateCommand: 结束当前文件并重新打开
- FlushCommand: 刷新文件并唤醒等待者
- ShutdownCommand: 关闭文件并结束写入线程

写命令受容量限制，队列满时阻塞生产者（背压，不丢弃）；
控制命令不受容量限制，也不会阻塞。
"""

import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Union

from .errors import LoggerClosedError
from .record import LogRecord

DEFAULT_QUEUE_SIZE = 1024


@dataclass(frozen=True)
class WriteCommand:
    record: LogRecord


@dataclass(frozen=True)
class RotateCommand:
    pass


@dataclass(eq=False)
class FlushCommand:
    done: threading.Event = field(default_factory=threading.Event)
    # 只有写入线程正常刷新时才置为 True
    ok: bool = False


@dataclass(frozen=True)
class ShutdownCommand:
    pass


Command = Union[WriteCommand, RotateCommand, FlushCommand, ShutdownCommand]


class CommandQueue:
    """有界、有序、单消费者的命令队列"""

    def __init__(self, maxsize: int = DEFAULT_QUEUE_SIZE):
        if maxsize < 1:
            raise ValueError(f"queue size must be positive: {maxsize}")
        self.maxsize = maxsize
        self._items: Deque[Command] = deque()
        self._pending_writes = 0
        self._closed = False
        self._mutex = threading.Lock()
        self._not_empty = threading.Condition(self._mutex)
        self._not_full = threading.Condition(self._mutex)

    @property
    def closed(self) -> bool:
        with self._mutex:
            return self._closed

    def qsize(self) -> int:
        with self._mutex:
            return len(self._items)

    def put(self, command: Command) -> None:
        """放入命令

        写命令在队列满时阻塞，直到有空位或队列关闭。
        ShutdownCommand 放入后队列即关闭，不再接收新命令。

        Raises:
            LoggerClosedError: 队列已关闭
        """
        with self._not_full:
            if isinstance(command, WriteCommand):
                while not self._closed and self._pending_writes >= self.maxsize:
                    self._not_full.wait()
            if self._closed:
                raise LoggerClosedError("logger is closed")

            self._items.append(command)
            if isinstance(command, WriteCommand):
                self._pending_writes += 1
            if isinstance(command, ShutdownCommand):
                self._close_nolock()
            self._not_empty.notify()

    def get(self) -> Command:
        """取出下一条命令，队列为空时阻塞"""
        with self._not_empty:
            while not self._items:
                self._not_empty.wait()
            command = self._items.popleft()
            if isinstance(command, WriteCommand):
                self._pending_writes -= 1
                self._not_full.notify()
            return command

    def close(self) -> None:
        """关闭队列，唤醒所有阻塞的生产者"""
        with self._mutex:
            self._close_nolock()

    def drain(self) -> List[Command]:
        """取出队列中剩余的全部命令"""
        with self._mutex:
            items = list(self._items)
            self._items.clear()
            self._pending_writes = 0
            self._not_full.notify_all()
            return items

    def _close_nolock(self) -> None:
        self._closed = True
        self._not_full.notify_all()
