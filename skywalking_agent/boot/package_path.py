"""
探针安装目录定位

查找顺序：
1. 构造参数显式指定的 home
2. 环境变量 SW_AGENT_HOME
3. skywalking_agent 包所在目录的上一级（即探针发行目录）

第 3 步只适用于源码目录或 editable 安装；普通 pip 安装后它指向
site-packages，其中没有 config/agent.config，此时需要 SW_AGENT_HOME 或 --home。

目录不存在时抛出 PackageNotFoundError，初始化随之终止。
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic_settings import BaseSettings

from ..interfaces import IPackagePathResolver, PackageNotFoundError

logger = logging.getLogger(__name__)


class AgentHomeSettings(BaseSettings):
    """探针安装目录（支持环境变量覆盖）"""

    home: Path | None = None

    model_config = {
        "env_prefix": "SW_AGENT_",
        "env_ignore_empty": True,
    }


def default_package_dir() -> Path:
    """skywalking_agent 包的发行根目录"""
    return Path(__file__).resolve().parents[2]


class AgentPackagePath(IPackagePathResolver):
    """探针安装目录解析器（结果缓存）"""

    def __init__(self, home: str | Path | None = None):
        self._home = Path(home) if home is not None else None
        self._resolved: Path | None = None

    def base_path(self) -> Path:
        if self._resolved is None:
            self._resolved = self._find()
        return self._resolved

    def _find(self) -> Path:
        candidate = self._home
        if candidate is None:
            candidate = AgentHomeSettings().home
        if candidate is None:
            candidate = default_package_dir()

        if not candidate.is_dir():
            raise PackageNotFoundError(f"Can not locate agent package: {candidate}")

        logger.debug(f"探针安装目录: {candidate}")
        return candidate
