"""
配置文件定位 - 在探针安装目录下查找 config/agent.config

职责：
1. 检查路径存在且为普通文件
2. 返回 Found / NotFound 结果（不用异常表达“找不到”）
3. Found.open() 以上下文管理器方式打开字节流，保证关闭

使用方式：
    result = ConfigSourceLocator().locate(base_dir)
    if isinstance(result, Found):
        with result.open() as stream:
            ...
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from ..interfaces import ConfigNotFoundError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = Path("config") / "agent.config"


@dataclass(frozen=True)
class Found:
    """配置文件已找到"""
    path: Path

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        try:
            stream = open(self.path, "rb")
        except OSError as e:
            raise ConfigNotFoundError(f"Fail to load agent.config: {self.path}") from e
        with stream:
            yield stream


@dataclass(frozen=True)
class NotFound:
    """配置文件缺失"""
    path: Path
    error: ConfigNotFoundError


LocateResult = Union[Found, NotFound]


class ConfigSourceLocator:
    """配置文件定位器"""

    def __init__(self, relative_path: Path = CONFIG_FILE_NAME):
        self.relative_path = Path(relative_path)

    def locate(self, base_dir: Path) -> LocateResult:
        config_file = Path(base_dir) / self.relative_path
        if config_file.is_file():
            logger.info(f"Config file found in {config_file}.")
            return Found(config_file)
        return NotFound(
            config_file,
            ConfigNotFoundError(f"Fail to load agent config file: {config_file}"),
        )
