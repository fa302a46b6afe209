"""Sort classes into the home page's display sections."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from classmarket.store import ClassRecord


@dataclass
class SectionedClasses:
    """Classes grouped for display.

    Attributes:
        upcoming_free: Free classes whose start is still ahead.
        premium: Paid classes whose end is still ahead.
        ended: Classes whose end has passed, paid or free.
    """

    upcoming_free: list[ClassRecord] = field(default_factory=list)
    premium: list[ClassRecord] = field(default_factory=list)
    ended: list[ClassRecord] = field(default_factory=list)


def is_upcoming_free(record: ClassRecord, now: datetime) -> bool:
    return record.price == 0 and record.start_date is not None and record.start_date > now


def is_premium(record: ClassRecord, now: datetime) -> bool:
    return record.price > 0 and record.end_date is not None and record.end_date > now


def is_ended(record: ClassRecord, now: datetime) -> bool:
    return record.end_date is not None and record.end_date < now


def section_classes(classes: Sequence[ClassRecord], now: datetime) -> SectionedClasses:
    """Partition classes into upcoming-free, premium and ended sections.

    Each section keeps input order. A class can land in no section (for example
    a paid class without an end date, or one ending exactly at ``now``). The
    predicates are independent, so a free class with a future start but a past
    end appears in both upcoming_free and ended.

    Args:
        classes: Classes to sort.
        now: Reference instant; must be timezone-aware.

    Returns:
        The three sections.
    """
    return SectionedClasses(
        upcoming_free=[c for c in classes if is_upcoming_free(c, now)],
        premium=[c for c in classes if is_premium(c, now)],
        ended=[c for c in classes if is_ended(c, now)],
    )


def featured_class(
    classes: Sequence[ClassRecord], sections: SectionedClasses
) -> ClassRecord | None:
    """Pick the banner class: the first upcoming free class, else the first class."""
    if sections.upcoming_free:
        return sections.upcoming_free[0]
    return classes[0] if classes else None
