import logging
import sys

from PyQt6.QtWidgets import QApplication

from hanzi_sheet.services import app_config
from hanzi_sheet.ui.main_window import create_main_window

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = logging.DEBUG if app_config.debug_enabled() else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main() -> int:
    _configure_logging()
    app = QApplication(sys.argv)

    window = create_main_window(expose_handles=False)
    logger.info("Settings file: %s", app_config.settings_path())
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
