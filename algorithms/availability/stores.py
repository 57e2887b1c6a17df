"""
Read interfaces consumed by the availability engine.

The engine never queries a database directly. It is handed a template store,
a block store and a session store, which keeps it free of ORM imports and
lets tests run it against the in-memory implementations below.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, Iterable, List, Optional

from .entities import AvailabilityBlock, BookedSession, WeeklyAvailabilityTemplate


class TemplateStore(ABC):
    """Source of weekly availability templates."""

    @abstractmethod
    def get_weekly_template(self, teacher_id: str) -> Optional[WeeklyAvailabilityTemplate]:
        """
        Load a teacher's weekly template.

        Returns:
            The template, or None when the teacher has not configured one

        Raises:
            StoreUnavailableException: If the backend cannot be read
        """


class BlockStore(ABC):
    """Source of availability blocks and overrides."""

    @abstractmethod
    def get_blocks(
        self, teacher_id: str, date_start: date, date_end: date
    ) -> List[AvailabilityBlock]:
        """
        Load blocks relevant to a date range.

        Returns every non-recurring block dated within the range and every
        recurring block anchored on or before date_end. Implementations
        return an empty list when the backend cannot be read.
        """


class SessionStore(ABC):
    """Source of already booked sessions."""

    @abstractmethod
    def get_booked_sessions(
        self, teacher_id: str, date_start: date, date_end: date, timezone: str = "UTC"
    ) -> List[BookedSession]:
        """
        Load the teacher's booked sessions within a date range.

        Dates and start times are expressed in the given timezone, and each
        session appears once even if reachable through several lookups.
        Implementations return an empty list when the backend cannot be read.
        """


class InMemoryTemplateStore(TemplateStore):
    def __init__(self, templates: Optional[Iterable[WeeklyAvailabilityTemplate]] = None):
        self.templates: Dict[str, WeeklyAvailabilityTemplate] = {
            t.teacher_id: t for t in templates or []
        }

    def add(self, template: WeeklyAvailabilityTemplate) -> None:
        self.templates[template.teacher_id] = template

    def get_weekly_template(self, teacher_id):
        return self.templates.get(str(teacher_id))


class InMemoryBlockStore(BlockStore):
    def __init__(self, blocks: Optional[Iterable[AvailabilityBlock]] = None):
        self.blocks: List[AvailabilityBlock] = list(blocks or [])

    def add(self, block: AvailabilityBlock) -> None:
        self.blocks.append(block)

    def get_blocks(self, teacher_id, date_start, date_end):
        teacher_id = str(teacher_id)
        return [
            block
            for block in self.blocks
            if block.teacher_id == teacher_id
            and block.date <= date_end
            and (block.recurring or block.date >= date_start)
        ]


class InMemorySessionStore(SessionStore):
    """Sessions keyed by teacher; duplicate ids are dropped on read."""

    def __init__(self, sessions: Optional[Dict[str, Iterable[BookedSession]]] = None):
        self.sessions: Dict[str, List[BookedSession]] = {
            str(teacher_id): list(items) for teacher_id, items in (sessions or {}).items()
        }

    def add(self, teacher_id: str, session: BookedSession) -> None:
        self.sessions.setdefault(str(teacher_id), []).append(session)

    def get_booked_sessions(self, teacher_id, date_start, date_end, timezone="UTC"):
        seen = set()
        result = []
        for session in self.sessions.get(str(teacher_id), []):
            if session.id in seen or not (date_start <= session.date <= date_end):
                continue
            seen.add(session.id)
            result.append(session)
        return result
