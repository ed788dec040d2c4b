"""
探针配置 - 对应 config/agent.config 中的全部配置项

职责：
- 定义分节的类型化配置对象（每个字段都有默认值）
- 赋值时按字段类型校验
- 校验通过后冻结，之后只读

key 与字段一一对应：agent.application_code -> config.agent.application_code
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from ..interfaces import ConfigFrozenError


class LogLevel(str, Enum):
    """探针日志级别"""
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    OFF = "OFF"


class ConfigSection(BaseModel):
    """配置节基类（支持冻结）"""

    _frozen: bool = PrivateAttr(default=False)

    model_config = {"validate_assignment": True}

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_") and self._frozen:
            raise ConfigFrozenError(f"配置已冻结，不能修改: {type(self).__name__}.{name}")
        super().__setattr__(name, value)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """冻结本节及所有子节"""
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, ConfigSection):
                value.freeze()
        self._frozen = True


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class AgentSection(ConfigSection):
    """探针基础配置"""

    namespace: str = ""
    application_code: str = ""
    # <=0 表示不采样（全部上报）
    sample_n_per_3_secs: int = -1
    ignore_suffix: str = ".jpg,.jpeg,.js,.css,.png,.bmp,.gif,.ico,.mp3,.mp4,.html,.svg"
    span_limit_per_segment: int = 300
    is_open_debugging_class: bool = False

    def ignore_suffix_list(self) -> list[str]:
        """忽略的请求后缀列表"""
        return _split_csv(self.ignore_suffix)


class CollectorSection(ConfigSection):
    """收集器配置（间隔单位：秒）"""

    grpc_channel_check_interval: int = 30
    app_and_service_register_check_interval: int = 3
    discovery_check_interval: int = 60
    servers: str = ""

    def server_list(self) -> list[str]:
        """collector 地址列表（host:port）"""
        return _split_csv(self.servers)


class BufferSection(ConfigSection):
    """上报缓冲配置"""

    channel_size: int = 5
    buffer_size: int = 300


class DictionarySection(ConfigSection):
    """字典缓存配置"""

    application_code_buffer_size: int = 10 * 10000
    operation_name_buffer_size: int = 1000 * 10000


class LoggingSection(ConfigSection):
    """探针日志配置"""

    file_name: str = "skywalking-api.log"
    # 为空时写到 <安装目录>/logs
    dir: str = ""
    max_file_size: int = 300 * 1024 * 1024
    level: LogLevel = LogLevel.DEBUG


class MongoDBPluginSection(ConfigSection):
    """MongoDB 插件配置"""

    trace_param: bool = False


class PluginSection(ConfigSection):
    """插件配置"""

    mongodb: MongoDBPluginSection = Field(default_factory=MongoDBPluginSection)


class AgentConfig(ConfigSection):
    """探针配置根对象"""

    agent: AgentSection = Field(default_factory=AgentSection)
    collector: CollectorSection = Field(default_factory=CollectorSection)
    buffer: BufferSection = Field(default_factory=BufferSection)
    dictionary: DictionarySection = Field(default_factory=DictionarySection)
    logging: LoggingSection = Field(default_factory=LoggingSection)
    plugin: PluginSection = Field(default_factory=PluginSection)

    def lookup(self, path: tuple[str, ...]) -> Any:
        """按字段路径取值，如 ("agent", "application_code")"""
        target: Any = self
        for attr in path:
            target = getattr(target, attr)
        return target
