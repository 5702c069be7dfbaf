"""
CLI 入口

用法:
    python -m kit                 # 安裝到目前目錄
    python -m kit ~/my_project    # 安裝到指定專案
"""

import argparse
import sys

from core.exceptions import KitError
from kit.scaffold import Scaffolder


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m kit",
        description="把 E2E testing kit 安裝到既有專案",
    )
    parser.add_argument(
        "target", nargs="?", default=".",
        help="目標專案目錄（預設為目前目錄）",
    )
    args = parser.parse_args(argv)

    try:
        Scaffolder(args.target).run()
    except KitError as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
