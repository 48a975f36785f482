"""
Launcher script: ``python main.py [--trains-csv ...] [--tickets-csv ...]``
"""

from railbook.cli import main_cli


if __name__ == '__main__':
    raise SystemExit(main_cli())
