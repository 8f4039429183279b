"""
CC-CEDICT Dictionary: Infrastructure adapter for the CC-CEDICT text format.

Implements Dictionary from lines like

    學生 学生 [xue2 sheng5] /student/schoolchild/

keyed on the simplified form, with an optional frequency list of
"word count" lines.
"""

import logging
import re
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from erudify.domain.errors import DictionaryUnavailable
from erudify.domain.models import DictionaryEntry
from erudify.domain.ports import Dictionary

logger = logging.getLogger(__name__)

CEDICT_ENTRY_RE = re.compile(r"^(\S+)\s+(\S+)\s+\[([^\]]*)\]\s*/(.*)/\s*$")


class CedictDictionary(Dictionary):
    """
    In-memory prefix dictionary built from CC-CEDICT entries.
    """

    def __init__(
        self,
        entries: Iterable[DictionaryEntry],
        frequencies: dict[str, float] | None = None,
    ):
        self._freq = dict(frequencies or {})
        self._by_form: dict[str, list[DictionaryEntry]] = defaultdict(list)
        self._max_len = 0

        for entry in entries:
            same_form = self._by_form[entry.canonical_form]
            if any(e.reading == entry.reading for e in same_form):
                continue  # Traditional variants sharing a simplified form
            if entry.canonical_form in self._freq and not entry.frequency:
                entry = DictionaryEntry(
                    entry.canonical_form,
                    entry.reading,
                    self._freq[entry.canonical_form],
                    entry.definitions,
                )
            same_form.append(entry)
            self._max_len = max(self._max_len, len(entry.canonical_form))

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_form.values())

    # ---------- Loading ----------

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], frequencies: dict[str, float] | None = None
    ) -> "CedictDictionary":
        return cls(parse_cedict_lines(lines), frequencies)

    @classmethod
    def from_file(cls, path: Path, frequency_path: Path | None = None) -> "CedictDictionary":
        if not path.exists():
            raise DictionaryUnavailable(f"Dictionary file not found: {path}")

        frequencies = load_frequencies(frequency_path) if frequency_path else None
        with path.open("r", encoding="utf-8") as handle:
            dictionary = cls.from_lines(handle, frequencies)
        logger.info(f"Loaded {len(dictionary)} dictionary entries from {path}")
        return dictionary

    # ---------- Dictionary port ----------

    def lookup_entries(self, text: str) -> list[DictionaryEntry]:
        results: list[DictionaryEntry] = []
        for n in range(1, min(self._max_len, len(text)) + 1):
            results.extend(self._by_form.get(text[:n], ()))
        return results

    def segment(self, text: str) -> list[DictionaryEntry | str]:
        """
        Greedy longest-match segmentation.

        Among entries of the longest matching form the most frequent wins.
        Consecutive unknown characters are returned as one raw string.
        """
        tokens: list[DictionaryEntry | str] = []
        unknown = ""
        i = 0

        while i < len(text):
            entries = self.lookup_entries(text[i:])
            if not entries:
                unknown += text[i]
                i += 1
                continue

            if unknown:
                tokens.append(unknown)
                unknown = ""
            longest = max(len(e.canonical_form) for e in entries)
            best = max(
                (e for e in entries if len(e.canonical_form) == longest),
                key=lambda e: e.frequency,
            )
            tokens.append(best)
            i += longest

        if unknown:
            tokens.append(unknown)
        return tokens

    def frequency(self, word: str) -> float:
        return self._freq.get(word, 0.0)


def parse_cedict_lines(lines: Iterable[str]) -> Iterable[DictionaryEntry]:
    """Yield entries from CC-CEDICT lines, skipping comments and junk."""
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        match = CEDICT_ENTRY_RE.match(line)
        if not match:
            logger.debug(f"Skipping unparseable dictionary line {lineno}: {line[:80]}")
            continue
        _traditional, simplified, pinyin, glosses = match.groups()
        yield DictionaryEntry(
            canonical_form=simplified,
            reading=pinyin,
            definitions=tuple(g for g in glosses.split("/") if g),
        )


def load_frequencies(path: Path) -> dict[str, float]:
    """
    Read a "word count [tag]" list, one word per line.
    """
    if not path.exists():
        raise DictionaryUnavailable(f"Frequency file not found: {path}")

    frequencies: dict[str, float] = {}
    with path.open("r", encoding="utf-8") as handle:
        for lineno, line in enumerate(handle, start=1):
            parts = line.split()
            if len(parts) < 2:
                continue
            try:
                frequencies[parts[0]] = float(parts[1])
            except ValueError:
                logger.warning(f"Bad frequency on line {lineno} of {path}: {parts[1]}")
    return frequencies
