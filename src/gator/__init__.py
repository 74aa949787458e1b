"""Gator - RSS 聚合器."""

__version__ = "0.1.0"
