"""
探针日志单元测试
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from skywalking_agent.config import AgentConfig, LogLevel
from skywalking_agent.log_setup import (
    DEFAULT_FILE_NAME,
    TRACE,
    resolve_log_dir,
    resolve_log_file,
    setup_logging,
    to_logging_level,
)


class TestLevels:
    """级别映射测试"""

    def test_level_mapping(self):
        assert to_logging_level(LogLevel.WARN) == logging.WARNING
        assert to_logging_level(LogLevel.TRACE) == TRACE
        assert to_logging_level(LogLevel.OFF) > logging.CRITICAL


class TestSetupLogging:
    """日志安装测试"""

    def test_default_dir_under_home(self, agent_home: Path):
        """测试 logging.dir 为空时使用 <home>/logs"""
        section = AgentConfig().logging
        assert resolve_log_dir(section, agent_home) == agent_home / "logs"

    def test_explicit_dir(self, agent_home: Path, tmp_path: Path):
        """测试显式日志目录"""
        section = AgentConfig().logging
        section.dir = str(tmp_path / "agent-logs")
        logger = setup_logging(section, agent_home, console=False)
        logger.info("hello")
        assert (tmp_path / "agent-logs" / "skywalking-api.log").exists()

    def test_rotating_handler_settings(self, agent_home: Path):
        """测试滚动文件大小与级别"""
        section = AgentConfig().logging
        section.max_file_size = 1024
        section.level = LogLevel.ERROR
        logger = setup_logging(section, agent_home, console=False)
        handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert handlers[0].maxBytes == 1024
        assert logger.level == logging.ERROR

    def test_repeated_setup_replaces_handlers(self, agent_home: Path):
        """测试重复调用不叠加 handler"""
        section = AgentConfig().logging
        setup_logging(section, agent_home)
        logger = setup_logging(section, agent_home)
        assert len(logger.handlers) == 2

    def test_blank_file_name_uses_default(self, agent_home: Path):
        """测试空白文件名回退为默认文件名"""
        section = AgentConfig().logging
        section.file_name = "  "
        assert resolve_log_file(section, agent_home) == agent_home / "logs" / DEFAULT_FILE_NAME

    def test_console_only(self, agent_home: Path):
        """测试 to_file=False 时不创建日志文件"""
        section = AgentConfig().logging
        logger = setup_logging(section, agent_home, to_file=False)
        assert not any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        assert len(logger.handlers) == 1
        assert not (agent_home / "logs").exists()

    def test_unwritable_dir_raises(self, agent_home: Path, tmp_path: Path):
        """测试日志目录无法创建时抛出 OSError"""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        section = AgentConfig().logging
        section.dir = str(blocker / "sub")
        with pytest.raises(OSError):
            setup_logging(section, agent_home, console=False)
