"""Allow running TirTimer as a module: python -m tirtimer."""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import TirTimerApp

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure root logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="tirtimer",
        description="Two-stage preparation / shooting timer",
    )
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    args, qt_args = parser.parse_known_args(argv)

    setup_logging(args.debug)
    init_db()
    logger.info("TirTimer ready")

    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationName("TirTimer")
    app.setOrganizationName("TirTimer")

    # Dock icon (generated placeholder: orange target ring)
    from PyQt6.QtGui import QIcon, QPixmap, QPainter, QColor
    icon = QPixmap(256, 256)
    icon.fill(QColor(0, 0, 0, 0))
    p = QPainter(icon)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    for inset, color in ((16, "#FF8A80"), (64, "#FFFFFF"), (104, "#FF8A80")):
        p.setBrush(QColor(color))
        p.setPen(QColor(color).darker(120))
        p.drawEllipse(inset, inset, 256 - 2 * inset, 256 - 2 * inset)
    p.end()
    app.setWindowIcon(QIcon(icon))

    window = TirTimerApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
