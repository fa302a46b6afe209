"""Catalog - Home page sections and display formatting."""

from classmarket.catalog.formatting import (
    format_capacity,
    format_date,
    format_datetime,
    format_period,
    format_price,
)
from classmarket.catalog.sectioning import SectionedClasses, featured_class, section_classes

__all__ = [
    "SectionedClasses",
    "featured_class",
    "format_capacity",
    "format_date",
    "format_datetime",
    "format_period",
    "format_price",
    "section_classes",
]
