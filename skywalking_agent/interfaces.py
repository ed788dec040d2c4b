"""
模块接口契约 - 定义配置初始化所依赖的协作者接口

设计原则：
1. 初始化编排只依赖接口，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from skywalking_agent.interfaces import IPackagePathResolver

    class FixedHome(IPackagePathResolver):
        def base_path(self) -> Path:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Mapping

if TYPE_CHECKING:
    from .config.agent_config import AgentConfig


# ============================================================================
# 协作者接口
# ============================================================================

class IPackagePathResolver(ABC):
    """探针安装目录解析接口"""

    @abstractmethod
    def base_path(self) -> Path:
        """
        返回探针安装目录

        Returns:
            已存在的目录路径

        Raises:
            PackageNotFoundError: 无法确定安装目录
        """
        ...


class IPropertiesParser(ABC):
    """properties 文本解析接口"""

    @abstractmethod
    def load(self, stream: BinaryIO) -> dict[str, str]:
        """
        解析字节流为有序的 key/value 映射

        Args:
            stream: 已打开的配置文件字节流（调用方负责关闭）

        Returns:
            按首次出现顺序排列的 key -> value

        Raises:
            PropertiesParseError: 文本格式错误
        """
        ...


class IConfigBinder(ABC):
    """配置绑定接口 - 把 key/value 写入类型化配置对象"""

    @abstractmethod
    def bind(self, config: AgentConfig, values: Mapping[str, str]) -> list[str]:
        """
        绑定一层 key/value 到配置对象（原地修改）

        Args:
            config: 配置对象
            values: 一层 key/value（未识别的 key 忽略）

        Returns:
            实际写入的 key 列表

        Raises:
            BindError: 某个 key 的值无法转换
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class AgentError(Exception):
    """基础异常"""
    pass


class PackageNotFoundError(AgentError):
    """无法定位探针安装目录"""
    pass


class ConfigNotFoundError(AgentError):
    """配置文件不存在或不可读"""
    pass


class PropertiesParseError(AgentError):
    """配置文件格式错误"""
    pass


class BindError(AgentError):
    """配置值绑定失败"""

    def __init__(self, key: str, value: str, reason: str = ""):
        self.key = key
        self.value = value
        message = f"无法绑定配置 {key}={value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InitializationError(AgentError):
    """初始化失败（致命，探针不得启动）"""
    pass


class ConfigFrozenError(AgentError):
    """配置已冻结，禁止修改"""
    pass
