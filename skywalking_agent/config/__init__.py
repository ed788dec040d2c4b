"""
配置层 - 定位、解析、绑定、覆盖、校验 agent.config

职责：
- 加载 <安装目录>/config/agent.config
- 系统属性与环境变量（skywalking. 前缀）覆盖
- 校验必填项并冻结为进程级只读配置
"""

from .agent_config import AgentConfig, LogLevel
from .binder import CONFIG_KEYS, ConfigBinder, bind
from .initializer import ConfigInitializer, get_config, initialize_config, reset_config
from .locator import CONFIG_FILE_NAME, ConfigSourceLocator, Found, NotFound
from .overrides import ENV_KEY_PREFIX, collect_overrides, strip_prefixed
from .properties import PropertiesParser, parse_properties
from .validator import is_blank, validate

__all__ = [
    "AgentConfig",
    "LogLevel",
    "CONFIG_KEYS",
    "ConfigBinder",
    "bind",
    "ConfigInitializer",
    "get_config",
    "initialize_config",
    "reset_config",
    "CONFIG_FILE_NAME",
    "ConfigSourceLocator",
    "Found",
    "NotFound",
    "ENV_KEY_PREFIX",
    "collect_overrides",
    "strip_prefixed",
    "PropertiesParser",
    "parse_properties",
    "is_blank",
    "validate",
]
