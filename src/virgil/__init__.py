"""Virgil: guided code walkthroughs from markdown."""

__version__ = "0.1.0"
