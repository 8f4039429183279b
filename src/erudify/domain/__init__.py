# Domain Package
from .memory import ExerciseScore, LearnerState, MemoryRecord
from .models import DictionaryEntry, DrillRecord, Segment, WordListStatus
from .ports import Dictionary, LearnerStore

__all__ = [
    "Segment",
    "DrillRecord",
    "DictionaryEntry",
    "WordListStatus",
    "MemoryRecord",
    "LearnerState",
    "ExerciseScore",
    "Dictionary",
    "LearnerStore",
]
