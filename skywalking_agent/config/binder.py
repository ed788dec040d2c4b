"""
配置绑定 - 把一层 key/value 写入 AgentConfig

职责：
- 静态声明全部可识别的 key（CONFIG_KEYS），不做运行期反射
- 按字段类型转换字符串值
- 未识别的 key 忽略；已出现的 key 覆盖旧值

测试要点：
- test_bind_overwrites_present_keys: 覆盖已出现的 key
- test_unknown_keys_ignored: 未识别 key 忽略
- test_bind_error_keeps_partial: 转换失败时保留已绑定部分
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from ..interfaces import BindError, IConfigBinder
from .agent_config import AgentConfig, LogLevel

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _to_str(raw: str) -> str:
    return raw


def _to_int(raw: str) -> int:
    """只接受 ASCII 十进制（可带正负号），不允许空白与下划线"""
    if not _INT_PATTERN.fullmatch(raw):
        raise ValueError(f"invalid integer: {raw!r}")
    return int(raw)


def _to_bool(raw: str) -> bool:
    """仅 "true"（忽略大小写）为真"""
    return raw.lower() == "true"


def _to_log_level(raw: str) -> LogLevel:
    return LogLevel(raw.upper())


@dataclass(frozen=True)
class ConfigKey:
    """单个配置项：dotted key -> 字段路径 + 类型转换"""
    key: str
    path: tuple[str, ...]
    convert: Callable[[str], Any]

    def assign(self, config: AgentConfig, raw: str) -> None:
        section = config.lookup(self.path[:-1])
        setattr(section, self.path[-1], self.convert(raw))


def _key(dotted: str, convert: Callable[[str], Any]) -> ConfigKey:
    return ConfigKey(key=dotted, path=tuple(dotted.split(".")), convert=convert)


CONFIG_KEYS: dict[str, ConfigKey] = {
    item.key: item
    for item in (
        # agent
        _key("agent.namespace", _to_str),
        _key("agent.application_code", _to_str),
        _key("agent.sample_n_per_3_secs", _to_int),
        _key("agent.ignore_suffix", _to_str),
        _key("agent.span_limit_per_segment", _to_int),
        _key("agent.is_open_debugging_class", _to_bool),
        # collector
        _key("collector.grpc_channel_check_interval", _to_int),
        _key("collector.app_and_service_register_check_interval", _to_int),
        _key("collector.discovery_check_interval", _to_int),
        _key("collector.servers", _to_str),
        # buffer
        _key("buffer.channel_size", _to_int),
        _key("buffer.buffer_size", _to_int),
        # dictionary
        _key("dictionary.application_code_buffer_size", _to_int),
        _key("dictionary.operation_name_buffer_size", _to_int),
        # logging
        _key("logging.file_name", _to_str),
        _key("logging.dir", _to_str),
        _key("logging.max_file_size", _to_int),
        _key("logging.level", _to_log_level),
        # plugin
        _key("plugin.mongodb.trace_param", _to_bool),
    )
}


class ConfigBinder(IConfigBinder):
    """基于 CONFIG_KEYS 的绑定器"""

    def __init__(self, keys: Mapping[str, ConfigKey] | None = None):
        self.keys = keys if keys is not None else CONFIG_KEYS

    def bind(self, config: AgentConfig, values: Mapping[str, str]) -> list[str]:
        bound: list[str] = []
        for key, raw in values.items():
            item = self.keys.get(key)
            if item is None:
                logger.debug(f"忽略未识别的配置项: {key}")
                continue
            try:
                item.assign(config, raw)
            except (ValueError, TypeError, ValidationError) as e:
                raise BindError(key, raw, str(e)) from e
            bound.append(key)
        return bound


def bind(config: AgentConfig, values: Mapping[str, str]) -> list[str]:
    """使用默认 key 表绑定"""
    return ConfigBinder().bind(config, values)
