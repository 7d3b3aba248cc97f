#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
按分钟轮转示例

每隔几秒写一条日志，Ctrl+C 后等待队列中的日志全部落盘再退出。
也可以从 YAML 配置文件初始化：

    python main.py --config config.yaml
"""

import argparse
import sys
import time

from rotlog import (
    AsyncFileLogger,
    ExitStatus,
    Level,
    init_logger,
    install_console_logs,
    load_config,
)


def parse_args():
    parser = argparse.ArgumentParser(description="rotlog minute rotation example")
    parser.add_argument("--dir", default="./log", help="日志目录")
    parser.add_argument("--name", default="mylog", help="日志文件前缀名")
    parser.add_argument("--backup-count", type=int, default=1024, help="最大保留文件数")
    parser.add_argument("--interval", type=float, default=5.0, help="写日志间隔（秒）")
    parser.add_argument("--config", default="", help="YAML 配置文件")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    install_console_logs("info")

    if args.config:
        log = AsyncFileLogger.from_config(load_config(config_file=args.config))
    else:
        log = init_logger("M", args.backup_count, Level.INFO, args.dir, args.name)

    try:
        while True:
            log.infof("%s  %s", "aaa", "bbbb")
            time.sleep(args.interval)
    except KeyboardInterrupt:
        pass

    status = log.shutdown()
    return 0 if status is ExitStatus.OK else int(status)


if __name__ == "__main__":
    sys.exit(main())
