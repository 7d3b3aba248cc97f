# -*- coding: utf-8 -*-
"""
日志器配置

提供：
- Pydantic 配置模型（构造后不可修改）
- YAML 配置文件加载
- 环境变量覆盖

示例 YAML 配置:
```yaml
logger:
  file_dir: "./log"
  file_base_name: "app"
  when: "D"            # M / H / D / W
  backup_count: 7
  level: "info"
  queue_size: 1024
  filter_level: false
```
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .channel import DEFAULT_QUEUE_SIZE
from .level import Level
from .window import is_when_valid

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "logger"


class LoggerConfig(BaseModel):
    """日志器配置"""

    model_config = ConfigDict(frozen=True)

    file_dir: str = Field(default="./log", description="日志目录")
    file_base_name: str = Field(default="app", min_length=1, description="日志文件前缀名")
    when: str = Field(default="D", description="轮转粒度: M, H, D, W")
    backup_count: int = Field(default=7, ge=0, description="最大保留文件数")
    level: Level = Field(default=Level.INFO, description="最低日志级别")
    queue_size: int = Field(default=DEFAULT_QUEUE_SIZE, ge=1, description="队列容量")
    filter_level: bool = Field(
        default=False, description="是否丢弃低于 level 的日志（默认不过滤）"
    )
    encoding: str = Field(default="utf-8", description="文件编码")

    @field_validator("file_dir", mode="before")
    @classmethod
    def parse_file_dir(cls, v):
        if isinstance(v, Path):
            return os.fspath(v)
        return v

    @field_validator("when")
    @classmethod
    def check_when(cls, v):
        """校验轮转粒度"""
        if not is_when_valid(v):
            raise ValueError(f"when must be one of M, H, D, W, got {v!r}")
        return v

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v):
        """解析日志级别"""
        return Level.parse(v)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggerConfig":
        """从字典创建配置"""
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str, section: Optional[str] = DEFAULT_SECTION) -> "LoggerConfig":
        """从 YAML 文件创建配置

        Args:
            path: YAML 文件路径
            section: 配置所在的顶层节点，为 None 或不存在时使用整个文件
        """
        return cls.from_dict(_load_yaml(path, section))


def _load_yaml(path: str, section: Optional[str]) -> Dict[str, Any]:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if section and isinstance(data.get(section), dict):
        data = data[section]
    logger.debug(f"Loaded logger config from {path}")
    return dict(data)


def _load_env(prefix: str) -> Dict[str, Any]:
    """读取 {PREFIX}_{FIELD} 形式的环境变量"""
    values = {}
    for name in LoggerConfig.model_fields:
        key = f"{prefix}_{name}".upper()
        if key in os.environ:
            values[name] = os.environ[key]
    return values


def load_config(
    config_file: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    env_prefix: Optional[str] = None,
    section: Optional[str] = DEFAULT_SECTION,
) -> LoggerConfig:
    """
    加载日志器配置

    优先级: env_prefix > config_dict > config_file > 默认值

    Args:
        config_file: YAML 配置文件路径
        config_dict: 配置字典
        env_prefix: 环境变量前缀，如 "ROTLOG" 对应 ROTLOG_BACKUP_COUNT
        section: YAML 中的配置节点

    Returns:
        LoggerConfig 实例
    """
    raw: Dict[str, Any] = {}
    if config_file:
        raw.update(_load_yaml(config_file, section))
    if config_dict:
        raw.update(config_dict)
    if env_prefix:
        raw.update(_load_env(env_prefix))
    return LoggerConfig.from_dict(raw)
