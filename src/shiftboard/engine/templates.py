"""
Week Templates
==============
Name-addressed snapshots of one week of assignments.

Capturing rewrites each assignment date as a day offset (0..6) from the
week start, so a template can be applied to any week. With the default
Sunday week start, offset 0 is Sunday.
"""
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from shiftboard.core.clock import IdGenerator, TimestampIdGenerator
from shiftboard.core.errors import UnknownTemplate
from shiftboard.core.periods import Period
from shiftboard.models.assignment import Assignment, Slot, parse_date
from shiftboard.models.template import TemplateEntry, WeekTemplate
from shiftboard.store.assignments import AssignmentStore
from shiftboard.utils.logging_setup import get_logger
from shiftboard.utils.structured_logging import get_structured_logger

logger = get_logger("shiftboard.engine.templates")
events = get_structured_logger("shiftboard.engine.templates")


class TemplateManager:
    """
    Stores week templates by name (last write wins).

    Usage:
        templates = TemplateManager()
        templates.capture("standard", store.assignments_for_period(week), week.start)
        new_week = templates.apply("standard", date(2024, 5, 5))
    """

    def __init__(self, templates: Iterable[WeekTemplate] = (), id_generator: Optional[IdGenerator] = None):
        self.id_generator = id_generator or TimestampIdGenerator()
        self._templates: Dict[str, WeekTemplate] = {}
        for t in templates:
            self._templates[t.name] = t

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, name) -> bool:
        return name in self._templates

    def names(self) -> List[str]:
        return list(self._templates)

    def get(self, name: str) -> Optional[WeekTemplate]:
        return self._templates.get(name)

    def require(self, name: str) -> WeekTemplate:
        template = self._templates.get(name)
        if template is None:
            raise UnknownTemplate(name)
        return template

    def capture(self, name: str, week_assignments: Iterable[Assignment], week_start) -> WeekTemplate:
        """
        Snapshot a week under ``name``, replacing any template with that name.

        Assignments dated outside the 7 days from ``week_start`` and empty
        assignments are skipped.
        """
        if not name or not str(name).strip():
            raise ValueError("Template name must not be empty")
        week_start = parse_date(week_start)

        entries = []
        for a in sorted(week_assignments, key=lambda a: a.slot.sort_key()):
            offset = (a.date - week_start).days
            if not 0 <= offset <= 6:
                logger.warning(f"Template {name!r}: skipping {a!r}, outside week of {week_start.isoformat()}")
                continue
            if not a.worker_ids:
                continue
            entries.append(TemplateEntry(
                id=a.id,
                offset=offset,
                shift_type=a.shift_type,
                worker_ids=list(a.worker_ids),
            ))

        template = WeekTemplate(name=name, assignments=entries)
        replaced = name in self._templates
        self._templates[name] = template
        events.info("template_captured", name=name, entries=len(entries), replaced=replaced)
        return template

    def apply(self, name: str, target_week_start) -> Optional[List[Assignment]]:
        """
        Materialize a template onto the week starting at ``target_week_start``.

        Returns:
            Fresh assignments for that week, or None if the name is unknown
        """
        template = self._templates.get(name)
        if template is None:
            logger.info(f"Template {name!r} not found; nothing applied")
            return None

        target_week_start: date = parse_date(target_week_start)
        return [
            Assignment(
                id=self.id_generator.next_id(),
                slot=Slot(date=target_week_start + timedelta(days=e.offset), shift_type=e.shift_type),
                worker_ids=list(e.worker_ids),
            )
            for e in template.assignments
        ]

    def install(self, name: str, target_week_start, store: AssignmentStore) -> Optional[List[Assignment]]:
        """Apply a template and replace the target week's assignments in the store with it."""
        assignments = self.apply(name, target_week_start)
        if assignments is None:
            return None
        week = Period.week(parse_date(target_week_start))
        installed = store.replace_period(week, assignments)
        events.info("template_installed", name=name, week=week.start.isoformat(), assignments=installed)
        return assignments

    def delete(self, name: str) -> WeekTemplate:
        template = self.require(name)
        del self._templates[name]
        return template

    def to_dict(self) -> Dict[str, dict]:
        return {name: t.to_dict() for name, t in self._templates.items()}

    @classmethod
    def from_dict(cls, d: Dict[str, dict], id_generator: Optional[IdGenerator] = None) -> "TemplateManager":
        templates = []
        for name, payload in d.items():
            t = WeekTemplate.from_dict({"name": name, **payload})
            templates.append(t)
        return cls(templates, id_generator=id_generator)
