"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(agent_home, write_config):
        write_config("agent.application_code=OrderService")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Generator

import pytest

from skywalking_agent.boot import SYSTEM_PROPERTIES
from skywalking_agent.config import AgentConfig, ConfigInitializer, reset_config
from skywalking_agent.interfaces import IPackagePathResolver, PackageNotFoundError
from skywalking_agent.log_setup import LOGGER_NAME


class FixedPackagePath(IPackagePathResolver):
    """固定安装目录（测试用）"""

    def __init__(self, home: Path):
        self.home = home

    def base_path(self) -> Path:
        return self.home


class MissingPackagePath(IPackagePathResolver):
    """安装目录无法定位（测试用）"""

    def base_path(self) -> Path:
        raise PackageNotFoundError("Can not locate agent package")


# ============================================================================
# 目录与文件 Fixtures
# ============================================================================

@pytest.fixture
def agent_home(tmp_path: Path) -> Path:
    """临时探针安装目录（不含配置文件）"""
    home = tmp_path / "skywalking-agent"
    home.mkdir()
    return home


@pytest.fixture
def write_config(agent_home: Path) -> Callable[[str], Path]:
    """写入 <agent_home>/config/agent.config"""

    def _write(text: str) -> Path:
        config_dir = agent_home / "config"
        config_dir.mkdir(exist_ok=True)
        path = config_dir / "agent.config"
        path.write_bytes(text.encode("latin-1"))
        return path

    return _write


# ============================================================================
# 初始化 Fixtures
# ============================================================================

@pytest.fixture
def make_initializer(agent_home: Path) -> Callable[..., ConfigInitializer]:
    """构造初始化器（默认无系统属性、无环境变量）"""

    def _make(
        system_properties: dict[str, str] | None = None,
        environ: dict[str, str] | None = None,
        **kwargs,
    ) -> ConfigInitializer:
        kwargs.setdefault("path_resolver", FixedPackagePath(agent_home))
        return ConfigInitializer(
            system_properties=system_properties or {},
            environ=environ or {},
            **kwargs,
        )

    return _make


@pytest.fixture
def package_path(agent_home: Path) -> IPackagePathResolver:
    """指向 agent_home 的解析器"""
    return FixedPackagePath(agent_home)


@pytest.fixture
def missing_package_path() -> IPackagePathResolver:
    """无法定位安装目录的解析器"""
    return MissingPackagePath()


@pytest.fixture
def config() -> AgentConfig:
    """默认配置"""
    return AgentConfig()


# ============================================================================
# 进程级状态清理
# ============================================================================

@pytest.fixture(autouse=True)
def clean_process_state() -> Generator[None, None, None]:
    """每个用例前后清空进程级配置、系统属性与探针日志 handler"""
    reset_config()
    SYSTEM_PROPERTIES.clear()
    yield
    reset_config()
    SYSTEM_PROPERTIES.clear()

    agent_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(agent_logger.handlers):
        agent_logger.removeHandler(handler)
        handler.close()
    agent_logger.setLevel(logging.NOTSET)
    agent_logger.propagate = True
