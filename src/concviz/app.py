# src/concviz/app.py
import logging
import sys
from datetime import datetime, timezone

from PySide6.QtWidgets import QApplication

from concengine.registry import Registry, demo_registry
from .config import get_settings
from .ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)

    if settings.seed_demo_data:
        registry = demo_registry(datetime.now(timezone.utc))
    else:
        registry = Registry()
    logger.info("starting with %d products", len(registry.products()))

    app = QApplication(sys.argv)
    win = MainWindow(registry, settings)
    win.show()
    return app.exec()
