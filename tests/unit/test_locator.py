"""
配置文件定位单元测试

每个模块完成后必须运行：pytest tests/unit/test_locator.py -v
"""

import logging
from pathlib import Path

import pytest

from skywalking_agent.config import CONFIG_FILE_NAME, ConfigSourceLocator, Found, NotFound
from skywalking_agent.interfaces import ConfigNotFoundError


class TestLocate:
    """定位测试"""

    def test_relative_path(self):
        """测试固定相对路径"""
        assert CONFIG_FILE_NAME == Path("config") / "agent.config"

    def test_found(self, agent_home: Path, write_config, caplog):
        """测试文件存在"""
        path = write_config("agent.application_code=OrderService\n")
        with caplog.at_level(logging.INFO, logger="skywalking_agent.config.locator"):
            result = ConfigSourceLocator().locate(agent_home)
        assert isinstance(result, Found)
        assert result.path == path
        assert f"Config file found in {path}." in caplog.text

    def test_missing_file(self, agent_home: Path):
        """测试文件不存在"""
        result = ConfigSourceLocator().locate(agent_home)
        assert isinstance(result, NotFound)
        assert result.path == agent_home / "config" / "agent.config"
        assert isinstance(result.error, ConfigNotFoundError)
        assert str(result.path) in str(result.error)

    def test_directory_is_not_a_file(self, agent_home: Path):
        """测试同名目录不算配置文件"""
        (agent_home / "config" / "agent.config").mkdir(parents=True)
        assert isinstance(ConfigSourceLocator().locate(agent_home), NotFound)

    def test_custom_relative_path(self, agent_home: Path):
        """测试自定义相对路径"""
        (agent_home / "agent.properties").write_text("a=1")
        result = ConfigSourceLocator(Path("agent.properties")).locate(agent_home)
        assert isinstance(result, Found)


class TestFoundOpen:
    """打开文件测试"""

    def test_open_reads_bytes_and_closes(self, agent_home: Path, write_config):
        """测试读取后流已关闭"""
        write_config("a=1")
        result = ConfigSourceLocator().locate(agent_home)
        with result.open() as stream:
            assert stream.read() == b"a=1"
        assert stream.closed

    def test_stream_closed_on_error(self, agent_home: Path, write_config):
        """测试异常路径上流也关闭"""
        write_config("a=1")
        result = ConfigSourceLocator().locate(agent_home)
        with pytest.raises(RuntimeError):
            with result.open() as stream:
                raise RuntimeError("parse failed")
        assert stream.closed

    def test_open_vanished_file(self, agent_home: Path, write_config):
        """测试定位后文件被删除"""
        path = write_config("a=1")
        result = ConfigSourceLocator().locate(agent_home)
        path.unlink()
        with pytest.raises(ConfigNotFoundError):
            with result.open():
                pass
