"""Entry point for running Sorter Weighing as a module: python -m sorter_weighing."""

from __future__ import annotations

from sorter_weighing.cli import main

if __name__ == "__main__":
    main()
