"""
project: Labyrinth
module: __init__.py
License: MIT

Flask application setup.

Serves maze records (hand-authored files and procedurally generated mazes)
as JSON for the browser client. Configuration is sourced from environment
variables with development defaults; a local `instance/` directory holds
runtime data such as the log file.
"""

import logging
import os
import uuid
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so settings can be supplied without exporting shell variables.
load_dotenv()

DEFAULT_MAZE_DIR = Path(__file__).resolve().parent / "mazes"

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only installs: logging falls back to console only
    pass

app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    MAZE_DIR=os.getenv("LABYRINTH_MAZE_DIR", str(DEFAULT_MAZE_DIR)),
    MAZE_DEFAULT_WIDTH=int(os.getenv("MAZE_DEFAULT_WIDTH", "21")),
    MAZE_DEFAULT_HEIGHT=int(os.getenv("MAZE_DEFAULT_HEIGHT", "21")),
    MAZE_MAX_DIMENSION=int(os.getenv("MAZE_MAX_DIMENSION", "201")),
    MAZE_ENABLE_GENERATION_METRICS=bool(os.getenv("MAZE_ENABLE_GENERATION_METRICS", "1") == "1"),
)
# Keep record fields in file order (name, width, height, ...)
app.json.sort_keys = False

from labyrinth.routes.maze_api import bp_maze  # noqa: E402

app.register_blueprint(bp_maze)


def create_app():
    """Return the configured Flask app instance."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
