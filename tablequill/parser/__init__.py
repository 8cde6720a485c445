"""Table markup parsing."""

from .markup_parser import TableMarkupParser, parse_table

__all__ = ["TableMarkupParser", "parse_table"]
