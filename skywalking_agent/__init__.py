"""
SkyWalking 探针 - 启动期配置核心模块

模块结构：
- boot/       探针安装目录定位、系统属性
- config/     配置文件定位/解析/绑定/覆盖/校验
- models/     初始化过程记录
- cli.py      启动入口（-D 覆盖、打印最终配置）
"""

__version__ = "0.1.0"
