"""
project: Labyrinth
module: server.py
License: MIT

Server bootstrap: logging configuration and the development HTTP server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from labyrinth import app
from labyrinth.logging_utils import current_level, get_logger

log = get_logger("labyrinth.server")


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Configure logging and run the Flask server until interrupted."""
    _configure_logging()
    try:
        print(f"[INFO] Starting maze server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging():
    """Route stdlib logging (Flask, werkzeug, unhandled request errors) to the
    console and to instance/app.log.

    The threshold follows LABYRINTH_LOG_LEVEL, same as the structured logger.
    If the instance directory cannot be created only the console handler is
    installed. Safe to call more than once.
    """
    level = current_level()
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    handlers = []

    console = logging.StreamHandler()
    handlers.append(console)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
        handlers.append(
            RotatingFileHandler(os.path.join(app.instance_path, "app.log"), maxBytes=1_000_000, backupCount=3)
        )
    except OSError as e:
        log.warn(event="log_file_unavailable", path=app.instance_path, detail=e.strerror or str(e))

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.setLevel(level)
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)
        root.addHandler(h)
    return handlers
