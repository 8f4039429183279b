"""
YAML Learner Store: Infrastructure adapter persisting LearnerState.

File layout:

    seen_words:
      你好:
        target_date: '2024-01-15T12:00:05+00:00'
        memory_strength: 5.0        # seconds
    seen_exercises:
      '<record key>': '2024-01-15T12:00:00+00:00'
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from erudify.domain.errors import StateCorrupted
from erudify.domain.memory import LearnerState, MemoryRecord
from erudify.domain.models import DrillRecord
from erudify.domain.ports import LearnerStore

from .records import dump_yaml

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ProficiencyModel(BaseModel):
    target_date: datetime
    memory_strength: float = Field(gt=0)  # seconds

    @field_validator("target_date")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)


class LearnerStateModel(BaseModel):
    seen_words: dict[str, ProficiencyModel] = Field(default_factory=dict)
    seen_exercises: dict[str, datetime] = Field(default_factory=dict)

    @field_validator("seen_exercises")
    @classmethod
    def ensure_utc(cls, v: dict[str, datetime]) -> dict[str, datetime]:
        return {k: _as_utc(ts) for k, ts in v.items()}

    @classmethod
    def from_domain(cls, state: LearnerState) -> "LearnerStateModel":
        return cls(
            seen_words={
                word: ProficiencyModel(
                    target_date=m.due_at,
                    memory_strength=m.interval.total_seconds(),
                )
                for word, m in state.word_memory.items()
            },
            seen_exercises={r.key(): ts for r, ts in state.record_history.items()},
        )

    def to_domain(self) -> LearnerState:
        return LearnerState(
            word_memory={
                word: MemoryRecord(
                    due_at=p.target_date,
                    interval=timedelta(seconds=p.memory_strength),
                )
                for word, p in self.seen_words.items()
            },
            record_history={DrillRecord.from_key(k): ts for k, ts in self.seen_exercises.items()},
        )


class YamlLearnerStore(LearnerStore):
    """
    Keeps the learner state in a single YAML file, rewritten on every save.
    """

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> LearnerState:
        if not self.path.exists():
            logger.info(f"No learner state at {self.path}, starting fresh")
            return LearnerState()

        try:
            raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
            state = LearnerStateModel.model_validate(raw).to_domain()
        except (yaml.YAMLError, ValidationError, ValueError, TypeError) as e:
            raise StateCorrupted(self.path, str(e)) from e

        logger.debug(f"Loaded {len(state.word_memory)} words from {self.path}")
        return state

    def save(self, state: LearnerState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = LearnerStateModel.from_domain(state).model_dump(mode="json")
        self.path.write_text(dump_yaml(data), encoding="utf-8")
        logger.debug(f"Saved learner state to {self.path}")
