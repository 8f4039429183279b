"""
Adapter Factory
Centralizes the selection of the dictionary and learner store from config.
"""

import logging

from erudify.application.config import AppConfig
from erudify.domain.errors import DictionaryUnavailable
from erudify.domain.ports import Dictionary, LearnerStore
from erudify.infrastructure.dictionary.cedict import CedictDictionary
from erudify.infrastructure.persistence.learner_store import YamlLearnerStore

logger = logging.getLogger(__name__)


def get_dictionary(config: AppConfig) -> Dictionary:
    """
    Returns the dictionary named by config.

    Raises:
        DictionaryUnavailable: no dictionary path is configured or the file is missing.
    """
    if config.dictionary_path is None:
        raise DictionaryUnavailable(
            "No dictionary configured. Set ERUDIFY_DICTIONARY_PATH or pass "
            "--dictionary with the path to a CC-CEDICT file."
        )
    return CedictDictionary.from_file(config.dictionary_path, config.frequency_path)


def get_learner_store(config: AppConfig) -> LearnerStore:
    logger.debug(f"Learner state file: {config.state_file}")
    return YamlLearnerStore(config.state_file)
