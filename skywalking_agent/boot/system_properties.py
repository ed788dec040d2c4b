"""
系统属性 - 进程级的 key/value 表

由启动命令行的 -Dkey=value 填充，初始化时与环境变量一起参与覆盖。
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Iterable, Iterator


def parse_definition(definition: str) -> tuple[str, str]:
    """解析 key=value（缺少 = 时值为空串）"""
    key, _, value = definition.partition("=")
    key = key.strip()
    if not key:
        raise ValueError(f"Invalid property definition: {definition!r}")
    return key, value


class SystemProperties(MutableMapping):
    """有序的系统属性表"""

    def __init__(self, initial: dict[str, str] | None = None):
        self._props: dict[str, str] = dict(initial or {})

    def __getitem__(self, key: str) -> str:
        return self._props[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._props[key] = str(value)

    def __delitem__(self, key: str) -> None:
        del self._props[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def define_all(self, definitions: Iterable[str]) -> None:
        """批量写入 key=value 定义"""
        for definition in definitions:
            key, value = parse_definition(definition)
            self[key] = value


# 进程级实例
SYSTEM_PROPERTIES = SystemProperties()
