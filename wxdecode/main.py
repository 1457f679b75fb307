"""Main entry point: file logging, configuration, decode web service."""

import logging
import os
from pathlib import Path
from typing import Optional

import uvicorn

from wxdecode import web_app
from wxdecode.config import AppConfig, LoggingConfig

LOG_FILE = 'wxdecode.log'


def setup_logging(logging_config: LoggingConfig, base_dir: Optional[Path] = None) -> str:
    """
    Configure logging to file only (no console).

    Args:
        logging_config: Level and directory (relative paths are resolved against base_dir)
        base_dir: Defaults to the project directory

    Returns:
        Path of the log file
    """
    if base_dir is None:
        base_dir = Path(__file__).resolve().parent.parent
    log_dir = Path(logging_config.log_dir)
    if not log_dir.is_absolute():
        log_dir = base_dir / log_dir
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, LOG_FILE)
    logging.basicConfig(
        level=logging_config.level_number(),
        format='%(asctime)s - %(levelname)s:%(name)s:%(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8')
        ],
        force=True
    )
    # basicConfig(force=True) drops the in-memory handler the web app installed
    logging.getLogger().addHandler(web_app.web_log_handler)
    return log_file


def main():
    """Main entry point."""
    # Load configuration
    config = AppConfig.load()
    log_file = setup_logging(config.logging)

    logger = logging.getLogger(__name__)
    logger.info("wxdecode starting...")
    logger.info(f"Logging to {log_file}")

    web_app.config = config
    logger.info(f"Web service available at http://{config.web_ui.host}:{config.web_ui.port}")
    uvicorn.run(
        web_app.app,
        host=config.web_ui.host,
        port=config.web_ui.port,
        log_config=None,
        log_level=config.logging.level.lower(),
    )
    logger.info("wxdecode stopped")


if __name__ == "__main__":
    main()
