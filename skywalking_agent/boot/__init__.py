"""
启动支撑 - 安装目录定位与系统属性
"""

from .package_path import AgentHomeSettings, AgentPackagePath, default_package_dir
from .system_properties import SYSTEM_PROPERTIES, SystemProperties, parse_definition

__all__ = [
    "AgentHomeSettings",
    "AgentPackagePath",
    "default_package_dir",
    "SYSTEM_PROPERTIES",
    "SystemProperties",
    "parse_definition",
]
