"""
配置初始化 - 编排文件层、覆盖层与校验

流程：
1. 定位探针安装目录（失败直接抛出 PackageNotFoundError）
2. 读取 config/agent.config 并绑定（失败记日志，使用默认值继续）
3. 系统属性 + 环境变量中 skywalking. 前缀的项覆盖（失败记日志，继续）
4. 校验 agent.application_code / collector.servers（失败抛出 InitializationError）
5. 冻结配置，作为进程级只读状态

测试要点：
- test_override_beats_file: 覆盖层优先于文件层
- test_missing_file_reaches_validation: 文件缺失仍走到校验
- test_blank_required_field_is_fatal: 必填项为空时终止
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from ..boot import SYSTEM_PROPERTIES, AgentPackagePath
from ..interfaces import (
    IConfigBinder,
    InitializationError,
    IPackagePathResolver,
    IPropertiesParser,
)
from ..models import InitReport, InitStage
from .agent_config import AgentConfig
from .binder import ConfigBinder
from .locator import ConfigSourceLocator, NotFound
from .overrides import ENV_KEY_PREFIX, collect_overrides
from .properties import PropertiesParser
from .validator import validate

logger = logging.getLogger(__name__)


class ConfigInitializer:
    """配置初始化器（每个进程只运行一次）"""

    def __init__(
        self,
        path_resolver: IPackagePathResolver | None = None,
        locator: ConfigSourceLocator | None = None,
        parser: IPropertiesParser | None = None,
        binder: IConfigBinder | None = None,
        system_properties: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self.path_resolver = path_resolver or AgentPackagePath()
        self.locator = locator or ConfigSourceLocator()
        self.parser = parser or PropertiesParser()
        self.binder = binder or ConfigBinder()
        self.system_properties = system_properties if system_properties is not None else SYSTEM_PROPERTIES
        self.environ = environ if environ is not None else os.environ
        self.report = InitReport()

    def initialize(self, config: AgentConfig | None = None) -> AgentConfig:
        """
        执行初始化

        Args:
            config: 待填充的配置对象（默认新建，全部为默认值）

        Returns:
            校验通过并已冻结的配置

        Raises:
            PackageNotFoundError: 无法定位安装目录
            InitializationError: 必填项缺失
        """
        self.report = InitReport()
        config = config if config is not None else AgentConfig()

        base_dir = self.path_resolver.base_path()
        self._load_config_file(config, base_dir)
        self._override_by_system_env(config)

        try:
            validate(config)
        except InitializationError as e:
            self.report.mark_failed(InitStage.VALIDATION_FAILED, str(e))
            raise

        config.freeze()
        self.report.mark(InitStage.VALIDATED)
        return config

    def _load_config_file(self, config: AgentConfig, base_dir: Path) -> None:
        """文件层（尽力而为）"""
        result = self.locator.locate(base_dir)
        if isinstance(result, NotFound):
            logger.error(
                f"Failed to read the config file, skywalking is going to run in default config: {result.error}"
            )
            self.report.mark_failed(InitStage.FILE_LOAD_FAILED, str(result.error))
            return

        self.report.config_file = result.path
        try:
            with result.open() as stream:
                values = self.parser.load(stream)
            self.report.file_keys = self.binder.bind(config, values)
        except Exception as e:
            logger.error(
                f"Failed to read the config file, skywalking is going to run in default config: {e}"
            )
            self.report.mark_failed(InitStage.FILE_LOAD_FAILED, str(e))
            return

        self.report.mark(InitStage.FILE_LOADED)

    def _override_by_system_env(self, config: AgentConfig) -> None:
        """覆盖层（尽力而为）"""
        try:
            overlay = collect_overrides(self.system_properties, self.environ, ENV_KEY_PREFIX)
            if overlay:
                self.report.override_keys = self.binder.bind(config, overlay)
        except Exception as e:
            logger.error(f"Failed to read the system env: {e}")
            self.report.mark_failed(InitStage.OVERRIDE_FAILED, str(e))
            return

        self.report.mark(InitStage.OVERRIDES_APPLIED)


# 进程级配置实例
_config: AgentConfig | None = None


def initialize_config(initializer: ConfigInitializer | None = None) -> AgentConfig:
    """初始化进程级配置（已初始化则直接返回）"""
    global _config
    if _config is None:
        _config = (initializer or ConfigInitializer()).initialize()
    return _config


def get_config() -> AgentConfig:
    """获取进程级配置"""
    if _config is None:
        raise InitializationError("Agent config is not initialized.")
    return _config


def reset_config() -> None:
    """清除进程级配置（仅用于测试或重新启动）"""
    global _config
    _config = None
