"""Utility exports."""

from .date_parser import format_iso_datetime, parse_profile_date
from .logger import get_logger

__all__ = [
    "get_logger",
    "format_iso_datetime",
    "parse_profile_date",
]
