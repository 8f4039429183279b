"""
Ports (interfaces) for the collaborators the engines depend on.

Application services depend on these abstractions, not on concrete
dictionary files or storage formats.
"""

from abc import ABC, abstractmethod

from .memory import LearnerState
from .models import DictionaryEntry


class Dictionary(ABC):
    """
    Port for word lookups.

    Implementations:
        - CedictDictionary: CC-CEDICT text file with an optional frequency list.
    """

    @abstractmethod
    def lookup_entries(self, text: str) -> list[DictionaryEntry]:
        """
        Return every entry whose canonical form is a prefix of text.

        Entries are ordered by canonical form length ascending, ties kept in
        dictionary order. Callers that want the most specific match first
        iterate the result in reverse.
        """
        pass

    @abstractmethod
    def segment(self, text: str) -> list[DictionaryEntry | str]:
        """
        Split arbitrary text into dictionary words and raw unknown runs.
        """
        pass

    @abstractmethod
    def frequency(self, word: str) -> float:
        """
        Usage frequency of word, 0.0 when unknown.
        """
        pass


class LearnerStore(ABC):
    """Port for persisting learner state after every mutation."""

    @abstractmethod
    def load(self) -> LearnerState:
        """
        Return the stored state, or an empty state if nothing is stored yet.
        """
        pass

    @abstractmethod
    def save(self, state: LearnerState) -> None:
        pass
