"""
Workspace
=========
Explicit application state: roster, assignment store, templates and the
engine, loaded from and committed to a key-value store at well-defined
points. Nothing is persisted as a side effect of a mutation; callers batch
engine operations and then call ``commit()``.
"""
import json
from datetime import date
from typing import Optional

from shiftboard.core.clock import Clock, IdGenerator, SystemClock, TimestampIdGenerator
from shiftboard.core.periods import Period
from shiftboard.engine.allocation import AllocationEngine
from shiftboard.engine.templates import TemplateManager
from shiftboard.io.persistence import (
    KeyValueStore,
    MemoryStore,
    load_assignments,
    load_roster,
    load_templates,
    save_assignments,
    save_roster,
    save_templates,
)
from shiftboard.models.config import EngineConfig
from shiftboard.models.worker import Roster
from shiftboard.store.assignments import AssignmentStore
from shiftboard.utils.logging_setup import get_logger
from shiftboard.utils.structured_logging import get_structured_logger

logger = get_logger("shiftboard.workspace")
events = get_structured_logger("shiftboard.workspace")


class Workspace:
    """
    Owns the live state and decides when it is persisted.

    Usage:
        ws = Workspace(JsonFileStore("data"))
        ws.load()
        ws.engine.merge(ws.engine.suggest_for(ws.current_week()))
        ws.commit()
    """

    def __init__(
        self,
        kv: Optional[KeyValueStore] = None,
        config: Optional[EngineConfig] = None,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        self.kv = kv if kv is not None else MemoryStore()
        self.config = config or EngineConfig()
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or TimestampIdGenerator()

        self.roster = Roster()
        self.store = AssignmentStore(config=self.config, id_generator=self.id_generator)
        self.templates = TemplateManager(id_generator=self.id_generator)
        self.engine = AllocationEngine(self.store, self.roster)
        self._snapshot = self._fingerprint()

    def load(self) -> "Workspace":
        """Replace in-memory state with what the key-value store holds."""
        self.roster = load_roster(self.kv, self.config.workers_key)
        self.store = load_assignments(
            self.kv, self.config.assignments_key, config=self.config, id_generator=self.id_generator
        )
        self.templates = load_templates(self.kv, self.config.templates_key, id_generator=self.id_generator)
        self.engine = AllocationEngine(self.store, self.roster)
        self._snapshot = self._fingerprint()
        logger.info(
            f"Loaded {len(self.roster)} workers, {len(self.store)} assignments, {len(self.templates)} templates"
        )
        return self

    @property
    def dirty(self) -> bool:
        """True if anything changed since the last load or commit."""
        return self._fingerprint() != self._snapshot

    def commit(self, force: bool = False) -> bool:
        """
        Persist roster, assignments and templates.

        Returns:
            True if anything was written
        """
        if not force and not self.dirty:
            logger.debug("Nothing to commit")
            return False
        save_roster(self.kv, self.roster, self.config.workers_key)
        save_assignments(self.kv, self.store, self.config.assignments_key)
        save_templates(self.kv, self.templates, self.config.templates_key)
        self._snapshot = self._fingerprint()
        events.info(
            "workspace_committed",
            workers=len(self.roster),
            assignments=len(self.store),
            templates=len(self.templates),
        )
        return True

    def today(self) -> date:
        return self.clock.today()

    def current_week(self) -> Period:
        return Period.current_week(self.today(), self.config.week_starts_on)

    def current_month(self) -> Period:
        return Period.current_month(self.today())

    def install_template(self, name: str, target_week_start=None):
        """Replace a week with a template; defaults to the current week."""
        start = target_week_start or self.current_week().start
        return self.templates.install(name, start, self.store)

    def capture_template(self, name: str, week: Optional[Period] = None):
        """Snapshot a week (default: current week) as a template."""
        week = week or self.current_week()
        return self.templates.capture(name, self.store.assignments_for_period(week), week.start)

    def _fingerprint(self) -> str:
        return json.dumps(
            [self.roster.to_list(), self.store.to_records(), self.templates.to_dict()],
            sort_keys=True,
            ensure_ascii=False,
        )
