from cli._runner import run


def main() -> None:
    """Run tests."""
    import sys

    sys.exit(run(["uv", "run", "pytest"]))


def test_v() -> None:
    """Run tests with verbose output."""
    import sys

    sys.exit(run(["uv", "run", "pytest", "-v"]))


def test_unit() -> None:
    """Run unit tests only."""
    import sys

    sys.exit(run(["uv", "run", "pytest", "tests/unit"]))


def test_integration() -> None:
    """Run integration tests (in-memory SQLite unless DATABASE_URL_APP is set)."""
    import sys

    sys.exit(run(["uv", "run", "pytest", "-m", "integration", "tests/integration"]))
