"""
覆盖层 - 从系统属性与环境变量收集 skywalking. 前缀的配置

规则：
1. 只有以 ENV_KEY_PREFIX 开头的 key 参与覆盖，其余全部忽略
2. 去前缀是纯切片操作，key 的其余部分原样保留
3. 先系统属性，后环境变量；同名 key 以环境变量为准

示例：
    skywalking.agent.application_code=foo  ->  agent.application_code -> foo
"""

from __future__ import annotations

from typing import Mapping

ENV_KEY_PREFIX = "skywalking."


def strip_prefixed(entries: Mapping[str, str], prefix: str = ENV_KEY_PREFIX) -> dict[str, str]:
    """挑出带前缀的 key 并去掉前缀"""
    return {
        str(key)[len(prefix):]: value
        for key, value in entries.items()
        if str(key).startswith(prefix)
    }


def collect_overrides(
    system_properties: Mapping[str, str],
    environ: Mapping[str, str],
    prefix: str = ENV_KEY_PREFIX,
) -> dict[str, str]:
    """合并为一层覆盖（环境变量后写，优先级更高）"""
    overlay = strip_prefixed(system_properties, prefix)
    overlay.update(strip_prefixed(environ, prefix))
    return overlay
