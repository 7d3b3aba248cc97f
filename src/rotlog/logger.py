# -*- coding: utf-8 -*-
"""
异步按时间轮转的文件日志器

调用方在任意线程中写日志，记录通过有界队列交给唯一的写入线程。
写入线程负责：
- 按时间窗口（M/H/D/W）判断是否需要轮转（每条记录检查一次，不使用定时器）
- 轮转时关闭旧文件、清理超出保留个数的旧文件、打开新窗口的文件
- 格式化并追加写入记录

生命周期：INIT -> ACTIVE -> CLOSING -> CLOSED（或 FAILED）。
打开或写入文件失败视为致命错误，写入线程以对应的 ExitStatus 结束，
是否退出进程由调用方通过 on_exit 回调决定。

使用示例：
    log = init_logger("D", 7, Level.INFO, "./log", "app")
    log.infof("user %s login", "alice")
    status = log.shutdown()
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

from .channel import (
    DEFAULT_QUEUE_SIZE,
    CommandQueue,
    FlushCommand,
    RotateCommand,
    ShutdownCommand,
    WriteCommand,
)
from .config import LoggerConfig
from .errors import (
    ExitStatus,
    InvalidGranularityError,
    LoggerClosedError,
    LoggerError,
    LoggerIOError,
    ShutdownTimeoutError,
)
from .file_handle import FileHandleManager
from .level import Level
from .record import LogRecord, find_caller, format_record
from .sweeper import RetentionSweeper
from .window import RotationWindow, is_when_valid

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Formatter = Callable[[LogRecord], str]
ExitCallback = Callable[[ExitStatus], None]


class LoggerState(str, Enum):
    """日志器生命周期状态"""

    INIT = "init"
    ACTIVE = "active"
    CLOSING = "closing"
    CLOSED = "closed"
    FAILED = "failed"


class AsyncFileLogger:
    """异步按时间轮转的文件日志器

    文件句柄和轮转窗口只由写入线程访问，生产者只接触命令队列。
    """

    def __init__(
        self,
        config: LoggerConfig,
        clock: Optional[Clock] = None,
        formatter: Optional[Formatter] = None,
        on_exit: Optional[ExitCallback] = None,
    ):
        """初始化

        Args:
            config: 日志器配置
            clock: 当前时间（秒）来源，默认 time.time
            formatter: 将记录格式化为一行文本（不含换行符），默认 format_record
            on_exit: 写入线程结束时以 ExitStatus 调用
        """
        self.config = config
        self._clock = clock or time.time
        self._formatter = formatter or format_record
        self._on_exit = on_exit

        self._queue = CommandQueue(config.queue_size)
        self._window = RotationWindow(config.when)
        self._file = FileHandleManager(config.encoding)
        self._sweeper = RetentionSweeper(
            config.file_dir,
            self._window.file_pattern(config.file_base_name),
            config.backup_count,
        )

        self._state = LoggerState.INIT
        self._state_lock = threading.Lock()
        self._status: Optional[ExitStatus] = None
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def from_config(
        cls,
        config: LoggerConfig,
        clock: Optional[Clock] = None,
        formatter: Optional[Formatter] = None,
        on_exit: Optional[ExitCallback] = None,
    ) -> "AsyncFileLogger":
        """根据配置创建并启动日志器"""
        log = cls(config, clock=clock, formatter=formatter, on_exit=on_exit)
        log.start()
        return log

    @property
    def state(self) -> LoggerState:
        return self._state

    @property
    def status(self) -> Optional[ExitStatus]:
        """写入线程结束后的状态，运行中为 None"""
        return self._status

    @property
    def expiry(self) -> int:
        """当前窗口的过期时间戳"""
        return self._window.expiry

    @property
    def current_file(self) -> str:
        """当前写入的文件路径"""
        return self._file.path

    # ======================== 生命周期 ========================

    def start(self) -> None:
        """打开第一个窗口的文件并启动写入线程

        Raises:
            LoggerIOError: 打开日志文件失败
            LoggerError: 重复启动
        """
        with self._state_lock:
            if self._state is not LoggerState.INIT:
                raise LoggerError(f"logger cannot start in state {self._state.value}")
            try:
                self._open_window(self._clock())
            except LoggerIOError:
                self._state = LoggerState.FAILED
                self._status = ExitStatus.OPEN_FAILED
                self._queue.close()
                self._done.set()
                raise

            self._thread = threading.Thread(
                target=self._run, name="rotlog-writer", daemon=True
            )
            self._state = LoggerState.ACTIVE
            self._thread.start()

    def close(self) -> None:
        """异步关闭：投递关闭命令后立即返回

        关闭命令之前已入队的记录都会先写入文件。重复调用无副作用。
        """
        with self._state_lock:
            if self._state is LoggerState.INIT:
                self._state = LoggerState.CLOSED
                self._status = ExitStatus.OK
                self._queue.close()
                self._done.set()
                return
            if self._state is not LoggerState.ACTIVE:
                return
            self._state = LoggerState.CLOSING
            try:
                self._queue.put(ShutdownCommand())
            except LoggerClosedError:
                # 写入线程已因致命错误关闭队列
                pass

    def wait(self, timeout: Optional[float] = None) -> ExitStatus:
        """等待写入线程结束

        Args:
            timeout: 超时时间（秒），None 表示一直等待

        Returns:
            ExitStatus: 结束状态

        Raises:
            ShutdownTimeoutError: 等待超时
        """
        if not self._done.wait(timeout):
            raise ShutdownTimeoutError(f"logger did not stop within {timeout}s")
        return self._status

    def shutdown(self, timeout: Optional[float] = None) -> ExitStatus:
        """关闭并等待所有已入队的记录写入文件"""
        self.close()
        return self.wait(timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
        return False

    # ======================== 写日志 ========================

    def debugf(self, fmt: str, *args) -> None:
        self._log(Level.DEBUG, fmt, args)

    def infof(self, fmt: str, *args) -> None:
        self._log(Level.INFO, fmt, args)

    def warnf(self, fmt: str, *args) -> None:
        self._log(Level.WARNING, fmt, args)

    def errorf(self, fmt: str, *args) -> None:
        self._log(Level.ERROR, fmt, args)

    def log(self, level, fmt: str, *args) -> None:
        """按指定级别写日志"""
        self._log(Level.parse(level), fmt, args)

    def _log(self, level: Level, fmt: str, args: tuple) -> None:
        if self._filtered(level):
            return
        # 调用栈: 用户代码 -> infof/log -> _log
        file, line = find_caller(2)
        self.submit(LogRecord.create(level, self._clock(), fmt, args, file, line))

    def submit(self, record: LogRecord) -> None:
        """投递一条已构造好的记录，队列满时阻塞

        Raises:
            LoggerClosedError: 日志器已关闭
        """
        if self._filtered(record.level):
            return
        self._queue.put(WriteCommand(record))

    def rotate(self) -> None:
        """结束当前文件：关闭后按当前窗口重新打开（不清理旧文件）"""
        self._queue.put(RotateCommand())

    def flush(self, timeout: Optional[float] = None) -> bool:
        """等待调用前入队的记录全部写入并刷新

        Returns:
            bool: 超时前完成且记录已写入为 True；超时或写入线程因致命错误
            结束（记录被丢弃）时为 False
        """
        command = FlushCommand()
        self._queue.put(command)
        return command.done.wait(timeout) and command.ok

    def _filtered(self, level: Level) -> bool:
        return self.config.filter_level and level < self.config.level

    # ======================== 写入线程 ========================

    def _run(self) -> None:
        status = ExitStatus.OK
        while True:
            command = self._queue.get()
            if isinstance(command, ShutdownCommand):
                break
            status = self._dispatch(command)
            if status is not ExitStatus.OK:
                break
        # 致命错误发生在写命令上时，该条记录也已丢失
        lost = 0
        if status is not ExitStatus.OK and isinstance(command, WriteCommand):
            lost = 1
        self._finish(status, lost)

    def _dispatch(self, command) -> ExitStatus:
        if isinstance(command, FlushCommand):
            self._file.flush()
            command.ok = True
            command.done.set()
            return ExitStatus.OK

        if isinstance(command, RotateCommand):
            try:
                self._reopen()
            except LoggerIOError as e:
                logger.error(f"Failed to reopen log file: {e}")
                return ExitStatus.OPEN_FAILED
            return ExitStatus.OK

        now = self._clock()
        if self._window.is_expired(now):
            try:
                self._rotate(now)
            except LoggerIOError as e:
                logger.error(f"Failed to rotate log file: {e}")
                return ExitStatus.OPEN_FAILED

        try:
            line = self._formatter(command.record)
        except Exception:
            logger.exception(f"Failed to format log record: {command.record!r}")
            return ExitStatus.OK

        try:
            self._file.write(line + "\n")
        except LoggerIOError as e:
            logger.error(f"Failed to write log record: {e}")
            return ExitStatus.WRITE_FAILED
        return ExitStatus.OK

    def _rotate(self, now: float) -> None:
        """关闭旧文件、清理旧文件、打开新窗口的文件"""
        self._file.close()
        deleted = self._sweeper.sweep()
        if deleted:
            logger.debug(f"Retention sweep deleted {len(deleted)} file(s)")
        self._open_window(now)

    def _reopen(self) -> None:
        self._file.close()
        self._open_window(self._clock())

    def _open_window(self, now: float) -> None:
        self._window.advance(now)
        path = self._window.file_path(self.config.file_dir, self.config.file_base_name)
        self._file.open(path)
        logger.debug(f"Opened log file {path}, expiry={self._window.expiry}")

    def _finish(self, status: ExitStatus, lost: int = 0) -> None:
        self._file.close()
        self._queue.close()

        dropped = lost
        for command in self._queue.drain():
            if isinstance(command, FlushCommand):
                command.done.set()
            elif isinstance(command, WriteCommand):
                dropped += 1
        if dropped:
            logger.warning(f"Dropped {dropped} pending log record(s)")

        with self._state_lock:
            self._status = status
            if status is ExitStatus.OK:
                self._state = LoggerState.CLOSED
            else:
                self._state = LoggerState.FAILED

        if status is ExitStatus.OK:
            logger.info("logger process is exit")
        else:
            logger.error(f"logger process is exit, status={status.name}")

        if self._on_exit is not None:
            try:
                self._on_exit(status)
            except Exception:
                logger.exception("on_exit callback failed")
        self._done.set()


def init_logger(
    when: str,
    backup_count: int,
    level,
    file_dir: str,
    file_base_name: str,
    *,
    clock: Optional[Clock] = None,
    formatter: Optional[Formatter] = None,
    queue_size: int = DEFAULT_QUEUE_SIZE,
    filter_level: bool = False,
    encoding: str = "utf-8",
    on_exit: Optional[ExitCallback] = None,
) -> AsyncFileLogger:
    """创建并启动日志器

    Args:
        when: 轮转粒度，M、H、D、W 之一
        backup_count: 最大保留文件数
        level: 最低日志级别（仅在 filter_level=True 时生效）
        file_dir: 日志目录
        file_base_name: 日志文件前缀名
        clock: 当前时间来源
        formatter: 记录格式化函数
        queue_size: 队列容量
        filter_level: 是否丢弃低于 level 的记录
        encoding: 文件编码
        on_exit: 写入线程结束回调

    Returns:
        AsyncFileLogger: 已启动的日志器

    Raises:
        InvalidGranularityError: when 不合法（不产生任何副作用）
        LoggerIOError: 打开日志文件失败
    """
    if not is_when_valid(when):
        raise InvalidGranularityError(f"init logger, when is invalid: {when!r}")

    config = LoggerConfig(
        file_dir=file_dir,
        file_base_name=file_base_name,
        when=when,
        backup_count=backup_count,
        level=level,
        queue_size=queue_size,
        filter_level=filter_level,
        encoding=encoding,
    )
    return AsyncFileLogger.from_config(
        config, clock=clock, formatter=formatter, on_exit=on_exit
    )
