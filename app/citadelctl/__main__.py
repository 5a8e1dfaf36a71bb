"""Allow running citadelctl as ``python -m citadelctl``."""

from citadelctl.cli.main import app

app()
