"""Command line interface for implements."""

from .run_check import main

__all__ = ['main']
