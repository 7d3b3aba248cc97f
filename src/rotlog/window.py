# -*- coding: utf-8 -*-
"""
轮转窗口

按粒度（M 分钟、H 小时、D 天、W 周）计算当前窗口的过期时间，
并据此生成日志文件名以及用于清理的文件名正则。

文件命名格式：{file_dir}/{base_name}_{suffix}.log

示例：
- app_2021-09-17_23-00.log  (M)
- app_2021-09-17_23.log     (H)
- app_2021-09-17.log        (D)
- app_2021-W37.log          (W)

后缀由窗口的过期时间（本地时间）渲染。
"""

import os
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Pattern

from .errors import InvalidGranularityError


class When(str, Enum):
    """轮转粒度枚举"""

    MINUTE = "M"
    HOUR = "H"
    DAY = "D"
    WEEK = "W"


# 各粒度对应的时间间隔（秒）
_INTERVALS = {
    When.MINUTE.value: 60,
    When.HOUR.value: 60 * 60,
    When.DAY.value: 60 * 60 * 24,
    When.WEEK.value: 60 * 60 * 24 * 7,
}

_SUFFIX_LAYOUTS = {
    When.MINUTE.value: "%Y-%m-%d_%H-%M",
    When.HOUR.value: "%Y-%m-%d_%H",
    When.DAY.value: "%Y-%m-%d",
}

_SUFFIX_PATTERNS = {
    When.MINUTE.value: r"\d{4}-\d{2}-\d{2}_\d{2}-\d{2}",
    When.HOUR.value: r"\d{4}-\d{2}-\d{2}_\d{2}",
    When.DAY.value: r"\d{4}-\d{2}-\d{2}",
    When.WEEK.value: r"\d{4}-W\d{2}",
}

LOG_SUFFIX = ".log"


def _normalize(when) -> str:
    if isinstance(when, When):
        return when.value
    return when


def is_when_valid(when) -> bool:
    """判断轮转粒度是否合法"""
    return _normalize(when) in _INTERVALS


def get_expiry_interval(when) -> int:
    """获取粒度对应的时间间隔（秒）

    Raises:
        InvalidGranularityError: 粒度不合法
    """
    interval = _INTERVALS.get(_normalize(when))
    if interval is None:
        raise InvalidGranularityError(f"invalid rotation granularity: {when!r}")
    return interval


def compute_expiry(now: float, interval: int) -> int:
    """计算严格大于 now 的下一个按 interval 对齐的时间点"""
    t = int(now)
    return t - t % interval + interval


def get_file_suffix_name(when, expiry: int) -> str:
    """根据过期时间渲染文件名后缀

    Args:
        when: 轮转粒度
        expiry: 窗口过期时间戳（秒）

    Returns:
        str: 文件名后缀
    """
    when = _normalize(when)
    dt = datetime.fromtimestamp(expiry)
    if when == When.WEEK.value:
        year, week, _ = dt.isocalendar()
        return f"{year:04d}-W{week:02d}"

    layout = _SUFFIX_LAYOUTS.get(when)
    if layout is None:
        raise InvalidGranularityError(f"invalid rotation granularity: {when!r}")
    return dt.strftime(layout)


def get_file_name(base_name: str, when, expiry: int) -> str:
    return f"{base_name}_{get_file_suffix_name(when, expiry)}{LOG_SUFFIX}"


def get_absolute_file_path(file_dir: str, base_name: str, when, expiry: int) -> str:
    """获取日志文件的完整路径"""
    return os.path.join(file_dir, get_file_name(base_name, when, expiry))


def get_file_pattern(base_name: str, when) -> Pattern:
    """获取匹配该粒度日志文件名的正则

    例如 D 粒度：^app_\\d{4}-\\d{2}-\\d{2}\\.log$
    """
    suffix = _SUFFIX_PATTERNS.get(_normalize(when))
    if suffix is None:
        raise InvalidGranularityError(f"invalid rotation granularity: {when!r}")
    return re.compile(rf"^{re.escape(base_name)}_{suffix}{re.escape(LOG_SUFFIX)}$")


@dataclass
class RotationWindow:
    """当前输出窗口

    expiry 为 0 表示尚未初始化；只由写入线程修改。
    """

    when: str
    interval: int = field(init=False)
    expiry: int = field(default=0, init=False)

    def __post_init__(self):
        self.when = _normalize(self.when)
        self.interval = get_expiry_interval(self.when)

    @property
    def initialized(self) -> bool:
        return self.expiry > 0

    def is_expired(self, now: float) -> bool:
        """now 到达或超过过期时间即视为过期"""
        return now >= self.expiry

    def advance(self, now: float) -> int:
        """以 now 为基准进入新窗口，返回新的过期时间"""
        self.expiry = compute_expiry(now, self.interval)
        return self.expiry

    def suffix(self) -> str:
        return get_file_suffix_name(self.when, self.expiry)

    def file_path(self, file_dir: str, base_name: str) -> str:
        return get_absolute_file_path(file_dir, base_name, self.when, self.expiry)

    def file_pattern(self, base_name: str) -> Pattern:
        return get_file_pattern(base_name, self.when)
