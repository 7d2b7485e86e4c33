"""Worker and roster models."""
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional

from shiftboard.core.errors import DuplicateWorker, UnknownWorker


@dataclass(frozen=True)
class Worker:
    """A team member who can be placed in slots."""

    id: str
    display_name: str = ""
    work_id: str = ""

    def __post_init__(self):
        worker_id = str(self.id).strip()
        if not worker_id:
            raise ValueError("Worker id must not be empty")
        object.__setattr__(self, "id", worker_id)
        object.__setattr__(self, "display_name", str(self.display_name).strip() or worker_id)
        object.__setattr__(self, "work_id", str(self.work_id).strip())

    def renamed(self, display_name: Optional[str] = None, work_id: Optional[str] = None) -> "Worker":
        """Return a copy with edited fields; the id never changes."""
        return replace(
            self,
            display_name=self.display_name if display_name is None else display_name,
            work_id=self.work_id if work_id is None else work_id,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "displayName": self.display_name,
            "workId": self.work_id,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Worker":
        return cls(
            id=d["id"],
            display_name=d.get("displayName", d.get("name", "")),
            work_id=d.get("workId", ""),
        )


@dataclass
class Roster:
    """
    Ordered set of workers.

    Enumeration order is insertion order; the allocation engine uses it to
    break load ties. Removing a worker leaves their ids in any assignments.
    """

    workers: List[Worker] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for w in self.workers:
            if w.id in seen:
                raise DuplicateWorker(f"Duplicate worker id: {w.id}")
            seen.add(w.id)

    def __iter__(self) -> Iterator[Worker]:
        return iter(self.workers)

    def __len__(self) -> int:
        return len(self.workers)

    def __contains__(self, worker_id) -> bool:
        return self.get(worker_id) is not None

    def get(self, worker_id: str) -> Optional[Worker]:
        for w in self.workers:
            if w.id == worker_id:
                return w
        return None

    def ids(self) -> List[str]:
        return [w.id for w in self.workers]

    def display_name(self, worker_id: str) -> str:
        """Display name for an id, or the raw id if the worker was removed."""
        w = self.get(worker_id)
        return w.display_name if w else worker_id

    def names(self) -> Dict[str, str]:
        return {w.id: w.display_name for w in self.workers}

    def add(self, worker: Worker) -> Worker:
        if worker.id in self:
            raise DuplicateWorker(f"Duplicate worker id: {worker.id}")
        self.workers.append(worker)
        return worker

    def update(self, worker: Worker) -> Worker:
        """Replace the worker with the same id, keeping its position."""
        for i, w in enumerate(self.workers):
            if w.id == worker.id:
                self.workers[i] = worker
                return worker
        raise UnknownWorker(worker.id)

    def remove(self, worker_id: str) -> Optional[Worker]:
        for i, w in enumerate(self.workers):
            if w.id == worker_id:
                return self.workers.pop(i)
        return None

    def to_list(self) -> List[dict]:
        return [w.to_dict() for w in self.workers]

    @classmethod
    def from_list(cls, items: List[dict]) -> "Roster":
        return cls(workers=[Worker.from_dict(d) for d in items])
