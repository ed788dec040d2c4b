"""
配置校验 - 启动前的唯一致命检查

agent.application_code 与 collector.servers 在所有层生效后必须非空白。
"""

from __future__ import annotations

from .agent_config import AgentConfig
from ..interfaces import InitializationError

# 按顺序检查，报告第一个缺失项
REQUIRED_KEYS: tuple[tuple[str, ...], ...] = (
    ("agent", "application_code"),
    ("collector", "servers"),
)


def is_blank(value: str | None) -> bool:
    """None、空串、纯空白都算空"""
    return value is None or not value.strip()


def validate(config: AgentConfig) -> None:
    """
    校验必填项

    Raises:
        InitializationError: 某个必填项为空
    """
    for path in REQUIRED_KEYS:
        if is_blank(config.lookup(path)):
            raise InitializationError(f"`{'.'.join(path)}` is missing.")
