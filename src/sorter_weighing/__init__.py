"""Sorter Weighing: gross-weight allowance calculation for sorter scales."""

__version__ = "1.0.0"
