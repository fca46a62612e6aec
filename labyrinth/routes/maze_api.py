"""
project: Labyrinth
module: maze_api.py
License: MIT

Maze retrieval, generation and validation API routes.

Maze files live in the directory named by the MAZE_DIR config value. A file
whose layout is "PROCEDURAL" is generated on request before it is validated
and returned. Every maze handed to a client has passed structural validation
and the reachability check.
"""

import re
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request

from labyrinth.logging_utils import get_logger
from labyrinth.maze import MazeConfig, MazeGenerator, MazeRecord, is_solvable, validate_maze
from labyrinth.maze.errors import InvalidMazeError, MazeLoadError
from labyrinth.maze.loader import (
    check_record,
    list_maze_files,
    load_maze_file,
    load_record,
    unreachable_message,
)
from labyrinth.maze.record import PROCEDURAL

log = get_logger("labyrinth.api")

bp_maze = Blueprint("maze", __name__)

_SLUG_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class _BadParam(Exception):
    pass


def _int_arg(name: str, default=None):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise _BadParam(f"{name} must be an integer") from None


@bp_maze.route("/api/mazes")
def list_mazes():
    """
    List the maze files available to the client.
    Response: { 'mazes': [ {slug, name, width, height, procedural}, ... ] }
    """
    try:
        files = list_maze_files(current_app.config["MAZE_DIR"])
    except MazeLoadError as e:
        log.warn(event="maze_dir_unavailable", detail=e.message, path=e.source)
        return jsonify({"mazes": []})
    mazes = []
    for path in files:
        try:
            data = load_maze_file(path)
        except MazeLoadError as e:
            log.warn(event="maze_file_skipped", source=e.source, detail=e.message)
            continue
        if not isinstance(data, dict):
            continue
        mazes.append(
            {
                "slug": path.stem,
                "name": data.get("name") or path.stem,
                "width": data.get("width"),
                "height": data.get("height"),
                "procedural": data.get("layout") == PROCEDURAL,
            }
        )
    return jsonify({"mazes": mazes})


@bp_maze.route("/api/mazes/<slug>")
def get_maze(slug):
    """
    Return one maze record, generating its layout first if it is procedural.
    Query: seed (optional, for procedural layouts)
    """
    if not _SLUG_RE.match(slug):
        return jsonify({"error": "maze not found"}), 404
    path = Path(current_app.config["MAZE_DIR"]) / f"{slug}.json"
    if not path.is_file():
        return jsonify({"error": "maze not found"}), 404
    try:
        seed = _int_arg("seed")
    except _BadParam as e:
        return jsonify({"error": str(e)}), 400
    try:
        record = load_record(path, seed=seed)
    except MazeLoadError as e:
        return jsonify({"error": "unreadable maze file", "errors": [e.message]}), 422
    except InvalidMazeError as e:
        log.warn(event="maze_rejected", source=e.source, issues=len(e.errors))
        return jsonify({"error": "invalid maze", "errors": e.errors}), 422
    except ValueError as e:
        return jsonify({"error": "invalid maze", "errors": [str(e)]}), 422
    if not is_solvable(record.playable_grid(), record.start_pos):
        log.warn(event="maze_unsolvable", source=path.name)
        return jsonify({"error": "invalid maze", "errors": [unreachable_message(record)]}), 422
    payload = record.to_dict()
    payload["slug"] = slug
    payload["solvable"] = True
    return jsonify(payload)


@bp_maze.route("/api/maze/generate")
def generate():
    """
    Generate a new maze.
    Query: width, height (default from config), seed (optional), name (optional)
    Response: maze record plus 'seed', 'solvable' and, when enabled, 'metrics'.
    """
    cfg = current_app.config
    try:
        width = _int_arg("width", cfg["MAZE_DEFAULT_WIDTH"])
        height = _int_arg("height", cfg["MAZE_DEFAULT_HEIGHT"])
        seed = _int_arg("seed")
    except _BadParam as e:
        return jsonify({"error": str(e)}), 400
    limit = cfg["MAZE_MAX_DIMENSION"]
    if width > limit or height > limit:
        return jsonify({"error": f"width and height must not exceed {limit}"}), 400
    name = request.args.get("name") or "Generated Maze"
    enable_metrics = bool(cfg.get("MAZE_ENABLE_GENERATION_METRICS"))
    try:
        generator = MazeGenerator(MazeConfig(width=width, height=height, seed=seed, name=name), enable_metrics=enable_metrics)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    outputs = generator.run()
    payload = MazeRecord.from_grid(outputs.grid, name=name, direction=generator.config.direction).to_dict()
    payload["seed"] = outputs.seed
    payload["solvable"] = is_solvable(outputs.grid)
    if enable_metrics:
        payload["metrics"] = outputs.metrics
    return jsonify(payload)


@bp_maze.route("/api/maze/validate", methods=["POST"])
def validate():
    """
    Validate a maze record posted as JSON.
    Response: { success, errors, solvable } where solvable is null when the
    record is structurally invalid.
    """
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({"error": "request body must be JSON"}), 400
    source = str(data.get("name") or "<request>") if isinstance(data, dict) else "<request>"
    result = check_record(data, source, check_solvable=True)
    payload = result.to_dict()
    payload["solvable"] = result.success if validate_maze(data, source).success else None
    return jsonify(payload)
