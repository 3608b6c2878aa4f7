"""Entry point: python -m jsondb [create|open] ..."""

from __future__ import annotations

from jsondb.cli import cli


def main() -> None:
    cli(prog_name="jsondb")


if __name__ == "__main__":
    main()
