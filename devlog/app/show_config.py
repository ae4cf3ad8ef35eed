from __future__ import annotations

import argparse
import json

from loguru import logger

from devlog.config.loader import load_config
from devlog.core.errors import ConfigError
from devlog.core.logging import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the effective devlog configuration")
    parser.add_argument(
        "--config", type=str, default=None, help="YAML設定ファイルのパス(省略可)"
    )
    args = parser.parse_args()

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        setup_logging()
        logger.error("Error: {}", e)
        return
    print(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
