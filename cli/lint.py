import sys

from cli._runner import run

LINT_PATHS = ["payment_api", "cli", "scripts", "tests"]


def main() -> None:
    """Run ruff checks and verify formatting."""
    code = run(["uv", "run", "ruff", "check", *LINT_PATHS])
    code = code or run(["uv", "run", "ruff", "format", "--check", *LINT_PATHS])
    sys.exit(code)


def format() -> None:
    """Apply ruff fixes and formatting."""
    run(["uv", "run", "ruff", "check", "--fix", *LINT_PATHS])
    sys.exit(run(["uv", "run", "ruff", "format", *LINT_PATHS]))
