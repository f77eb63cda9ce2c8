import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from drummer.core.settings import Settings
from drummer.core.state import AppState
from drummer.ui.main_window import MainWindow

logger = logging.getLogger("drummer")


def init_app_state() -> AppState:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Backend: %s (timeout %.0fs)", settings.api_url, settings.request_timeout_s)
    return AppState(settings)


def main() -> int:
    qt_app = QApplication(sys.argv)
    qt_app.setApplicationName("Drummer")

    app_state = init_app_state()
    main_window = MainWindow(app_state)
    main_window.show()
    app_state.load()

    code = qt_app.exec()
    app_state.pool.wait_all()
    return code


if __name__ == "__main__":
    raise SystemExit(main())
