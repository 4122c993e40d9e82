# tedit/utils/logging_config.py
"""tedit.utils.logging_config
============================

Logging setup for the tedit editor.

curses owns the terminal while the editor runs, so log output goes to files
by default. This module defines the global loggers and a single function,
`setup_logging`, that attaches handlers according to the `[logging]` config
section.

Handlers:
    - Rotating `editor.log` for general events.
    - Optional stderr console handler (off by default).
    - Optional `error.log` for ERROR and CRITICAL events.
    - Optional `keytrace.log` for decoded key events, enabled by the
      ``TEDIT_KEYTRACE`` environment variable.

Globals:
    logger: Main application logger ("tedit").
    KEY_LOGGER: Logger for key-event traces ("tedit.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


logger = logging.getLogger("tedit")
KEY_LOGGER = logging.getLogger("tedit.keyevents")

KEYTRACE_ENV = "TEDIT_KEYTRACE"


def _rotating_handler(filename: str, max_bytes: int, backups: int) -> logging.Handler:
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)
    return logging.handlers.RotatingFileHandler(
        filename, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
    )


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Existing handlers on the root logger are cleared first, so calling this
    more than once (as the tests do) does not duplicate records.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` section is read; recognised keys are:

            - ``file`` (str): Path of the main log. Default ``"editor.log"``.
            - ``file_level`` (str): Level for the main log. Default ``"DEBUG"``.
            - ``console_level`` (str): Level for stderr. Default ``"WARNING"``.
            - ``log_to_console`` (bool): Enable the stderr handler.
              Default ``False``.
            - ``separate_error_log`` (bool): Also write ``error.log``.
              Default ``False``.

    Notes:
        Never raises. Handler setup problems are printed to stderr and
        logging continues with whatever handlers could be created.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})
    log_filename = logging_config.get("file", "editor.log")
    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    file_handler = None
    try:
        file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5)
    except OSError as e_fh:
        print(f"Error setting up file logger for '{log_filename}': {e_fh}", file=sys.stderr)
        log_filename = os.path.join(tempfile.gettempdir(), "tedit.log")
        print(f"Logging to temporary file: '{log_filename}'", file=sys.stderr)
        try:
            file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5)
        except OSError as e_tmp:
            print(f"File logging disabled: {e_tmp}", file=sys.stderr)
    if file_handler:
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_file_level)

    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s")
        )
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        try:
            error_file_handler = _rotating_handler("error.log", 1024 * 1024, 3)
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except OSError as e_efh:
            print(f"Error setting up separate error log 'error.log': {e_efh}.", file=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)
    root_logger.setLevel(log_file_level)

    # Key traces stay out of the main log.
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []

    if os.environ.get(KEYTRACE_ENV, "").lower() in {"1", "true", "yes"}:
        try:
            key_trace_handler = _rotating_handler("keytrace.log", 1024 * 1024, 3)
            key_trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            KEY_LOGGER.addHandler(key_trace_handler)
            KEY_LOGGER.disabled = False
            logging.info("Key event tracing enabled, logging to 'keytrace.log'.")
        except OSError as e_keytrace:
            logging.error(f"Failed to set up key trace logging: {e_keytrace}", exc_info=True)
            KEY_LOGGER.disabled = True
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(
            f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}."
        )
    if console_handler:
        logging.info(
            f"Console logging to stderr at level: {logging.getLevelName(console_handler.level)}."
        )
