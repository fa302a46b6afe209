"""Data models for admin operations."""

from dataclasses import dataclass


@dataclass
class AdminClassRow:
    """One row of the admin class table."""

    id: str
    title: str
    lecturer: str
    capacity: str
    period: str
    status: str
