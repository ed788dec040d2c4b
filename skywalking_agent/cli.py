"""
探针启动入口

用法：
    skywalking-agent -D skywalking.agent.application_code=OrderService --show
    python -m skywalking_agent --home /opt/skywalking-agent

退出码：0 成功；1 必填项缺失；2 找不到安装目录
（日志文件无法打开不影响退出码，降级为控制台日志）
"""

from __future__ import annotations

import argparse
import logging
import sys

from .boot import SYSTEM_PROPERTIES, AgentPackagePath
from .config import ConfigInitializer, initialize_config
from .interfaces import InitializationError, PackageNotFoundError
from .log_setup import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INIT_FAILED = 1
EXIT_PACKAGE_NOT_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skywalking-agent",
        description="Initialize the SkyWalking agent configuration.",
    )
    parser.add_argument(
        "-D",
        dest="definitions",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="系统属性（可重复），如 -D skywalking.collector.servers=127.0.0.1:10800",
    )
    parser.add_argument(
        "--home",
        default=None,
        help="探针安装目录（默认：SW_AGENT_HOME 或包所在目录；非 editable 安装时必须指定）",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="以JSON打印最终配置",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        SYSTEM_PROPERTIES.define_all(args.definitions)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return EXIT_INIT_FAILED

    resolver = AgentPackagePath(args.home)
    try:
        config = initialize_config(ConfigInitializer(path_resolver=resolver))
    except PackageNotFoundError as e:
        print(f"探针安装目录不存在: {e}", file=sys.stderr)
        return EXIT_PACKAGE_NOT_FOUND
    except InitializationError as e:
        print(f"探针初始化失败: {e}", file=sys.stderr)
        return EXIT_INIT_FAILED

    home = resolver.base_path()
    try:
        setup_logging(config.logging, home)
    except OSError as e:
        # 日志文件不可写时只输出到控制台，不影响启动
        setup_logging(config.logging, home, to_file=False)
        logger.error(f"Failed to open the agent log file, logging to console only: {e}")

    logger.info(
        f"Agent initialized: application_code={config.agent.application_code}, "
        f"servers={config.collector.server_list()}, "
        f"ignore_suffix={config.agent.ignore_suffix_list()}"
    )

    if args.show:
        print(config.model_dump_json(indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
