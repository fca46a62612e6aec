import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from labyrinth import DEFAULT_MAZE_DIR, create_app  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True, "MAZE_DIR": str(DEFAULT_MAZE_DIR)})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def maze_dir(tmp_path, test_app):
    """Point the app at an empty temporary maze directory for one test."""
    previous = test_app.config["MAZE_DIR"]
    test_app.config["MAZE_DIR"] = str(tmp_path)
    try:
        yield tmp_path
    finally:
        test_app.config["MAZE_DIR"] = previous


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation timing guardrails")
