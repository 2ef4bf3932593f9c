"""Allow running bump-py with ``python -m bump_py``."""

from bump_py.cli.app import app

app(prog_name="bump-py")
