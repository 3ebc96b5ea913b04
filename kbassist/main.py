"""Main application entry point.

Runs the NiceGUI interface against the configured knowledge-base backend.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    Builds the configuration once, creates the shared gateway from it and
    starts the UI. The gateway is closed when the server shuts down.
    """
    from nicegui import app, ui

    from kbassist.api.gateway import close_gateway, init_gateway
    from kbassist.config import get_client_config
    from kbassist.ui import chat_page, knowledge_page, settings_page  # noqa: F401 - Registers the pages

    config = get_client_config()
    init_gateway(config)
    app.on_shutdown(close_gateway)

    logger.info(f"Using knowledge-base backend at {config.api_base}")
    logger.info(f"Starting UI on http://{config.ui_host}:{config.ui_port}")

    ui.run(
        host=config.ui_host,
        port=config.ui_port,
        title=config.ui_title,
        favicon="📚",
        reload=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
