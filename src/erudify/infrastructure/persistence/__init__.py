# Persistence Adapters
from .learner_store import YamlLearnerStore
from .records import dump_records, load_record_files, load_records, parse_records, save_records

__all__ = [
    "YamlLearnerStore",
    "dump_records",
    "load_records",
    "load_record_files",
    "parse_records",
    "save_records",
]
