# src/doseviz/app.py
import argparse
import asyncio
import sys
from typing import Optional, Sequence

import structlog

from doseengine.errors import DataError
from doseengine.logs import configure_logging
from doseengine.query import fetch_substances

logger = structlog.get_logger()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot the effect timeline of a substance dose")
    parser.add_argument("substance", help="Substance name to look up, e.g. LSD")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(level="DEBUG" if args.verbose else None)

    try:
        substances = asyncio.run(fetch_substances(args.substance))
    except DataError as e:
        print(str(e), file=sys.stderr)
        return 1
    if not substances:
        logger.error("No substance found", query=args.substance)
        return 1

    # Qt is only needed once there is something to show
    from PySide6.QtWidgets import QApplication
    from doseviz.ui.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    window = MainWindow(substances[0])
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
