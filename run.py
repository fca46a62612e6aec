"""Labyrinth CLI entry point.

Provides subcommands for running the maze HTTP server and for working with
maze files: bulk validation, generation, filling procedural layouts and
checking a single file. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
_COLOR_ENABLED = True

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    if not sys.stdout.isatty():  # pragma: no cover - environment dependent
        _COLOR_ENABLED = False
except (AttributeError, ValueError):  # pragma: no cover
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def _paint(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def _ok(text: str) -> str:
    return _paint(text, Fore.GREEN)


def _fail(text: str) -> str:
    return _paint(text, Fore.RED)


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Labyrinth Maze Server

    Serve maze records over HTTP, or validate, generate and fill maze files
    from the command line. Configuration can be provided via CLI flags or
    environment variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          LABYRINTH_MAZE_DIR   Directory of maze JSON files (default: packaged mazes)
          LABYRINTH_LOG_LEVEL  Structured log level: DEBUG, INFO, WARN, ERROR
          LABYRINTH_LOG_JSON   Emit structured logs as JSON lines when set to 1

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Validate every maze file and check each one can be solved
          python run.py validate labyrinth/mazes --check-solvable

          # Generate a reproducible 31x21 maze into a file
          python run.py generate --width 31 --height 21 --seed 42 --output big.json

          # Replace a PROCEDURAL layout with a generated one
          python run.py fill labyrinth/mazes/catacombs.json --seed 7
        """
    )

    parser = argparse.ArgumentParser(
        prog="Labyrinth",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Labyrinth Maze Server {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the maze HTTP server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask server that serves maze records as JSON",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--maze-dir",
        dest="maze_dir",
        default=None,
        help="Directory of maze files (default: env LABYRINTH_MAZE_DIR or packaged mazes)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # validate subcommand
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate every maze file in a directory",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Check each *.json maze file and print a per-file report and summary.",
    )
    validate_parser.add_argument(
        "maze_dir",
        nargs="?",
        default=None,
        help="Directory to scan (default: env LABYRINTH_MAZE_DIR or packaged mazes)",
    )
    validate_parser.add_argument(
        "--check-solvable",
        action="store_true",
        help="Also report mazes whose exit cannot be reached from the player start",
    )
    validate_parser.add_argument(
        "--generate-procedural",
        action="store_true",
        help="Generate PROCEDURAL layouts before validating instead of rejecting them",
    )
    validate_parser.set_defaults(command="validate")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a maze and print or save its record",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--width", type=int, default=21, help="Maze width (default: 21)")
    gen_parser.add_argument("--height", type=int, default=21, help="Maze height (default: 21)")
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    gen_parser.add_argument("--name", default="Generated Maze", help="Maze name stored in the record")
    gen_parser.add_argument("--output", default=None, help="Write the record to this file instead of stdout")
    gen_parser.add_argument("--render", action="store_true", help="Print the maze as text instead of JSON")
    gen_parser.set_defaults(command="generate")

    # fill subcommand
    fill_parser = subparsers.add_parser(
        "fill",
        help="Replace a file's PROCEDURAL layout with a generated grid",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    fill_parser.add_argument("path", help="Path to the maze file")
    fill_parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    fill_parser.set_defaults(command="fill")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Validate one maze file, including reachability of the exit",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    check_parser.add_argument("path", help="Path to the maze file")
    check_parser.set_defaults(command="check")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _print_result(result) -> None:
    status = _ok("VALID") if result.success else _fail("INVALID")
    print(f"  {result.source:32} {status}")
    for err in result.errors:
        print(f"      - {err}")


def _cmd_validate(args) -> int:
    from labyrinth.maze.errors import MazeLoadError
    from labyrinth.maze.loader import validate_directory

    maze_dir = args.maze_dir or os.getenv("LABYRINTH_MAZE_DIR")
    if not maze_dir:
        from labyrinth import DEFAULT_MAZE_DIR

        maze_dir = str(DEFAULT_MAZE_DIR)
    try:
        report = validate_directory(
            maze_dir,
            check_solvable=args.check_solvable,
            generate_procedural=args.generate_procedural,
        )
    except MazeLoadError as e:
        print(f"[ERROR] Cannot read maze directory {e.source}: {e.message}")
        return 1
    print(f"Validating mazes in {maze_dir}")
    for result in report.results.values():
        _print_result(result)
    summary = f"{report.valid} valid, {report.invalid} invalid"
    print(_ok(summary) if report.ok else _fail(summary))
    return 0 if report.ok else 1


def _cmd_generate(args) -> int:
    from labyrinth.maze import MazeConfig, MazeGenerator, MazeRecord

    try:
        generator = MazeGenerator(
            MazeConfig(width=args.width, height=args.height, seed=args.seed, name=args.name)
        )
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1
    outputs = generator.run()
    record = MazeRecord.from_grid(outputs.grid, name=args.name, direction=generator.config.direction)
    text = json.dumps(record.to_dict(), indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        print(f"[INFO] Wrote {args.width}x{args.height} maze (seed {outputs.seed}) to {args.output}")
    elif args.render:
        print(outputs.grid.render())
    else:
        print(text)
    return 0


def _cmd_fill(args) -> int:
    from labyrinth.maze.errors import InvalidMazeError, MazeLoadError
    from labyrinth.maze.loader import fill_procedural_file

    try:
        record = fill_procedural_file(args.path, seed=args.seed)
    except MazeLoadError as e:
        print(f"[ERROR] {e.source}: {e.message}")
        return 1
    except InvalidMazeError as e:
        print(f"[ERROR] {e.source} is not a valid maze record")
        for err in e.errors:
            print(f"      - {err}")
        return 1
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1
    print(f"[INFO] {args.path}: {record.width}x{record.height} layout ready")
    return 0


def _cmd_check(args) -> int:
    from labyrinth.maze.loader import validate_maze_file

    result = validate_maze_file(args.path, check_solvable=True)
    _print_result(result)
    return 0 if result.success else 1


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()

    from labyrinth.logging_utils import log

    if mode == "validate":
        return _cmd_validate(args)
    elif mode == "generate":
        return _cmd_generate(args)
    elif mode == "fill":
        return _cmd_fill(args)
    elif mode == "check":
        return _cmd_check(args)

    # Resolve configuration from CLI flags or env vars
    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    maze_dir_cli = getattr(args, "maze_dir", None)

    # Make LABYRINTH_MAZE_DIR available to the Flask app BEFORE importing it
    if maze_dir_cli:
        os.environ["LABYRINTH_MAZE_DIR"] = maze_dir_cli
    maze_banner = maze_dir_cli or os.getenv("LABYRINTH_MAZE_DIR") or "packaged (labyrinth/mazes)"

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from labyrinth.server import start_server

    title = _paint("Labyrinth Server Bootup", Fore.CYAN + Style.BRIGHT)

    def label(text: str) -> str:
        return _paint(text, Fore.YELLOW)

    def value(val) -> str:
        return _paint(str(val), Fore.GREEN)

    divider = _paint("=" * 40, Fore.MAGENTA)
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Mazes:'):12} {value(maze_banner)}",
        divider,
        "",
    ]
    print("\n".join(lines))

    info_prefix = _paint("[INFO]", Fore.CYAN)
    print(f"{info_prefix} Listening for connections... Press Ctrl+C to stop.")
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
    log.info(event="listen", host=host, port=port, debug=debug, mazes=maze_banner)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
