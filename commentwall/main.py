"""CommentWall application entry point."""

import sys

from PyQt6.QtWidgets import QApplication

from commentwall.core.config_manager import ConfigManager
from commentwall.core.logger import setup_logger
from commentwall.core.i18n_manager import I18nManager
from commentwall.adapters.rest_comment_store import RestCommentStore
from commentwall.services.page_controller import PageController
from commentwall.gui.main_window import MainWindow


def main():
    """Main entry point for CommentWall.

    Startup sequence:
    1. ConfigManager init (loads or creates settings.yaml)
    2. Logger init (reads log_level from config)
    3. I18nManager init (reads locale from config)
    4. Comment store creation (base URL from environment or config)
    5. PageController creation
    6. QApplication + MainWindow (starts the initial comment load)
    7. Event loop
    """
    # 1. ConfigManager
    config = ConfigManager()

    # 2. Logger
    logger = setup_logger(
        log_level=config.get("app.log_level", "INFO"),
        mask_logs=config.get("security.mask_logs", True),
    )
    logger.info("CommentWall starting...")

    # 3. I18nManager
    i18n = I18nManager()
    locale = config.get("app.locale", "en_US")
    i18n.load_locale(locale)

    # 4. Comment store (configuration passed in explicitly)
    base_url = config.get_api_base_url()
    store = RestCommentStore(base_url, timeout=config.get("api.timeout", 30))
    logger.info(f"Comment store: {base_url}")

    # 5. Controller
    controller = PageController(store)

    # 6. Window
    app = QApplication(sys.argv)
    window = MainWindow(controller)
    window.show()
    logger.info("CommentWall UI ready")

    # 7. Event loop
    exit_code = app.exec()

    store.close()
    logger.info("CommentWall shutting down")

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
