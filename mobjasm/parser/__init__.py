"""MObj Parser - Builds command records from tokens."""

from .parser import Parser, parse

__all__ = ['Parser', 'parse']
