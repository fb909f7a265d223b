"""Allow ``python -m filecast``."""

from filecast.cli import app

if __name__ == "__main__":
    app()
