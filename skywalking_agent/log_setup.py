"""
探针日志 - 按 logging.* 配置安装文件与控制台输出

- 文件：<logging.dir 或 安装目录/logs>/<logging.file_name>，按 max_file_size 滚动
- 文件无法创建时由调用方降级为只输出到控制台
- 级别：logging.level
- 重复调用会替换之前安装的 handler，不会叠加
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config.agent_config import LoggingSection, LogLevel

LOGGER_NAME = "skywalking_agent"
TRACE = 5
_OFF = logging.CRITICAL + 10

_LEVELS = {
    LogLevel.TRACE: TRACE,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.OFF: _OFF,
}

DEFAULT_FILE_NAME = "skywalking-api.log"
_FORMAT = "%(levelname)s %(asctime)s %(name)s : %(message)s"

logging.addLevelName(TRACE, "TRACE")


def to_logging_level(level: LogLevel) -> int:
    return _LEVELS[level]


def resolve_log_dir(section: LoggingSection, home: Path) -> Path:
    """logging.dir 为空时使用 <安装目录>/logs"""
    if section.dir.strip():
        return Path(section.dir)
    return Path(home) / "logs"


def resolve_log_file(section: LoggingSection, home: Path) -> Path:
    """logging.file_name 为空白时使用默认文件名"""
    file_name = section.file_name.strip() or DEFAULT_FILE_NAME
    return resolve_log_dir(section, home) / file_name


def setup_logging(
    section: LoggingSection,
    home: Path,
    console: bool = True,
    to_file: bool = True,
) -> logging.Logger:
    """
    安装探针日志输出，返回 skywalking_agent 根 logger

    Raises:
        OSError: 日志目录无法创建或日志文件无法打开（to_file=True 时）
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_skywalking_agent", False):
            logger.removeHandler(handler)
            handler.close()

    level = to_logging_level(section.level)
    formatter = logging.Formatter(_FORMAT)
    logger.setLevel(level)
    logger.propagate = False

    if console:
        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        ch.setLevel(level)
        ch._skywalking_agent = True
        logger.addHandler(ch)

    if to_file:
        log_file = resolve_log_file(section, home)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=section.max_file_size,
            backupCount=5,
            encoding="utf-8",
        )
        fh.setFormatter(formatter)
        fh.setLevel(level)
        fh._skywalking_agent = True
        logger.addHandler(fh)

    return logger
