"""
数据模型层

- InitReport: 配置初始化过程记录
"""

from .init_report import InitReport, InitStage

__all__ = [
    "InitReport",
    "InitStage",
]
