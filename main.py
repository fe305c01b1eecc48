"""notechat - AI chat panel over a folder of markdown notes.

Entry point for the application.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication
from qasync import QEventLoop

from notechat.config.themes import get_stylesheet
from notechat.ui.main_window import MainWindow
from notechat.utils.logging import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Chat with an AI about your notes.")
    parser.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Folder of markdown notes (defaults to the saved one)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main() -> int:
    """Run the notechat application.

    Returns:
        Exit code
    """
    args = parse_args()
    log_path = setup_logging(logging.DEBUG if args.debug else logging.INFO)
    logging.getLogger(__name__).info("Logging to %s", log_path)

    # Create Qt application
    app = QApplication(sys.argv)
    app.setApplicationName("notechat")
    app.setApplicationVersion("0.1.0")
    app.setStyleSheet(get_stylesheet())

    # Set up asyncio event loop with Qt integration
    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    window = MainWindow(vault_path=args.vault.expanduser() if args.vault else None)
    window.show()

    with loop:
        return loop.run_forever()


if __name__ == "__main__":
    sys.exit(main())
