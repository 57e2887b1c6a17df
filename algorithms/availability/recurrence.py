"""
Expansion of recurring availability blocks.

Recurring blocks are stored once, on their anchor date, and materialized into
concrete dated occurrences at query time. Weekly blocks repeat on the anchor's
weekday and monthly blocks on the anchor's day of month; months that lack that
day (e.g. the 31st) are skipped.
"""

import logging
from datetime import date
from typing import Iterable, List

from .entities import RECURRENCE_MONTHLY, RECURRENCE_WEEKLY, AvailabilityBlock
from .time_utils import date_range

logger = logging.getLogger(__name__)


def occurs_on(block: AvailabilityBlock, day: date) -> bool:
    """Check whether a (possibly recurring) block applies to a date."""
    if not block.recurring:
        return block.date == day
    if day < block.date:
        return False
    if block.recurrence_pattern == RECURRENCE_WEEKLY:
        return day.weekday() == block.date.weekday()
    if block.recurrence_pattern == RECURRENCE_MONTHLY:
        return day.day == block.date.day
    logger.warning(
        f"Unknown recurrence pattern '{block.recurrence_pattern}' on block {block.id}, "
        "treating it as a single occurrence"
    )
    return block.date == day


def expand_blocks(
    blocks: Iterable[AvailabilityBlock], start_date: date, end_date: date
) -> List[AvailabilityBlock]:
    """
    Materialize blocks into concrete dated occurrences within a range.

    Args:
        blocks: Blocks as returned by a BlockStore
        start_date: First date of the range (inclusive)
        end_date: Last date of the range (inclusive)

    Returns:
        Non-recurring blocks, ordered by date then start time
    """
    expanded = []
    for block in blocks:
        if not block.recurring:
            if start_date <= block.date <= end_date:
                expanded.append(block)
            continue

        first = max(block.date, start_date)
        for day in date_range(first, end_date):
            if occurs_on(block, day):
                expanded.append(block.occurrence_on(day))

    expanded.sort(key=lambda b: (b.date, b.start_time))
    return expanded
