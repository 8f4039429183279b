"""
YAML storage for drill records.

On disk a record file is a YAML list of

    - segments:
        - chinese: 学生
          pinyin: xué sheng
      english: I am a student.
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from erudify.domain.errors import StateCorrupted
from erudify.domain.models import DrillRecord, Segment

logger = logging.getLogger(__name__)


class SegmentModel(BaseModel):
    chinese: str
    pinyin: str | None = ""


class DrillRecordModel(BaseModel):
    segments: list[SegmentModel]
    english: str

    @classmethod
    def from_domain(cls, record: DrillRecord) -> "DrillRecordModel":
        return cls(
            segments=[SegmentModel(chinese=s.text, pinyin=s.reading) for s in record.segments],
            english=record.translation,
        )

    def to_domain(self) -> DrillRecord:
        return DrillRecord(
            tuple(Segment(s.chinese, s.pinyin or "") for s in self.segments),
            self.english,
        )


def dump_yaml(data) -> str:
    return yaml.safe_dump(
        data,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=10**9,
    )


def dump_records(records: Iterable[DrillRecord]) -> str:
    return dump_yaml([DrillRecordModel.from_domain(r).model_dump() for r in records])


def parse_records(text: str, source: str = "<string>") -> list[DrillRecord]:
    try:
        raw = yaml.safe_load(text) or []
    except yaml.YAMLError as e:
        raise StateCorrupted(source, str(e)) from e

    if not isinstance(raw, list):
        raise StateCorrupted(source, "expected a list of records")

    try:
        return [DrillRecordModel.model_validate(item).to_domain() for item in raw]
    except ValidationError as e:
        raise StateCorrupted(source, str(e)) from e


def load_records(path: Path) -> list[DrillRecord]:
    records = parse_records(path.read_text(encoding="utf-8"), source=str(path))
    logger.debug(f"Loaded {len(records)} records from {path}")
    return records


def load_record_files(paths: Sequence[Path]) -> list[DrillRecord]:
    records: list[DrillRecord] = []
    for path in paths:
        records.extend(load_records(path))
    return records


def save_records(path: Path, records: Iterable[DrillRecord]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_records(records), encoding="utf-8")
