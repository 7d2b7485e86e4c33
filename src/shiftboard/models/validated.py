"""
Pydantic Validated Models
=========================
Pydantic validation layer for configuration coming from files or the CLI.

Usage:
    from shiftboard.models.validated import ValidatedEngineConfig, load_config

    config = ValidatedEngineConfig(week_starts_on=0).to_dataclass()
    config = load_config("shiftboard.json")

Note: the dataclass EngineConfig stays the type the engine consumes.
"""
import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import EngineConfig
from .shift import ShiftType


class ValidatedEngineConfig(BaseModel):
    """
    Pydantic-validated engine configuration.

    Use this for strict validation at boundaries (config files, CLI).
    Can be converted to/from the dataclass EngineConfig.
    """
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    dedupe_worker_ids: bool = Field(default=False, description="Drop repeated worker ids within a slot")
    week_starts_on: int = Field(default=6, ge=0, le=6, description="0=Monday .. 6=Sunday")
    shift_types: List[str] = Field(default_factory=lambda: [s.value for s in ShiftType])

    workers_key: str = Field(default="workers", min_length=1)
    assignments_key: str = Field(default="assignments", min_length=1)
    templates_key: str = Field(default="weeklyTemplates", min_length=1)

    @field_validator("shift_types")
    @classmethod
    def validate_shift_types(cls, v: List[str]) -> List[str]:
        """Shift codes must be known and unique."""
        if not v:
            raise ValueError("at least one shift type is required")
        parsed = [ShiftType.from_string(code) for code in v]
        if len(set(parsed)) != len(parsed):
            raise ValueError("shift types must be unique")
        return [s.value for s in parsed]

    def to_dataclass(self) -> EngineConfig:
        """Convert to the dataclass EngineConfig."""
        return EngineConfig.from_dict(self.model_dump())

    @classmethod
    def from_dataclass(cls, config: EngineConfig) -> "ValidatedEngineConfig":
        """Create from dataclass EngineConfig."""
        return cls(**config.to_dict())


def load_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """
    Load and validate configuration from a JSON file.

    Args:
        path: JSON file path; None returns the defaults

    Returns:
        Validated EngineConfig
    """
    if path is None:
        return EngineConfig()
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return ValidatedEngineConfig.model_validate(data).to_dataclass()
