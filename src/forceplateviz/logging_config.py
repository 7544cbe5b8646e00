"""
Logging Configuration
Sets up the 'forceplateviz' logger for the viewer.

The adapter reports every hidden arrow at DEBUG level, once per timer tick.
Those messages stay muted unless tick tracing is requested explicitly.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "forceplateviz"
TICK_LOGGER = "forceplateviz.controller.adapter"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    trace_ticks: bool = False,
) -> None:
    """
    Configures the logger for the 'forceplateviz' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        trace_ticks: Let per-tick adapter messages through at `level`.
            Otherwise the adapter logger is capped at INFO.
    """
    # Get the logger for our package
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Check if handlers already exist to avoid duplicate logs when main() runs twice
    if logger.hasHandlers():
        logger.handlers.clear()

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # 3. Tick logger (capped at INFO unless trace_ticks)
    tick_logger = logging.getLogger(TICK_LOGGER)
    tick_logger.setLevel(level if trace_ticks else max(level, logging.INFO))

    logger.info(f"Logging initialized (tick tracing {'on' if trace_ticks else 'off'}).")
