import pytest

from erudify.application.config import resolve_config
from erudify.application.factory import get_dictionary, get_learner_store
from erudify.domain.errors import DictionaryUnavailable
from erudify.infrastructure.dictionary.cedict import CedictDictionary
from erudify.infrastructure.persistence.learner_store import YamlLearnerStore


def test_get_dictionary(mock_home, cedict_file):
    dictionary = get_dictionary(resolve_config({"dictionary_path": cedict_file}))

    assert isinstance(dictionary, CedictDictionary)
    assert dictionary.lookup_entries("你好")[-1].reading == "ni3 hao3"


def test_get_dictionary_not_configured(mock_home):
    with pytest.raises(DictionaryUnavailable, match="No dictionary configured"):
        get_dictionary(resolve_config())


def test_get_dictionary_missing_file(mock_home, tmp_path):
    with pytest.raises(DictionaryUnavailable, match="not found"):
        get_dictionary(resolve_config({"dictionary_path": tmp_path / "nope.u8"}))


def test_get_learner_store(mock_home, tmp_path):
    store = get_learner_store(resolve_config({"data_dir": tmp_path / "data"}))

    assert isinstance(store, YamlLearnerStore)
    assert store.path == (tmp_path / "data" / "learner_state.yaml").resolve()
