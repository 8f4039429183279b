"""
Domain errors.

Every failure carries the context needed to fix the offending input by hand;
training data is never skipped silently.
"""


class ErudifyError(Exception):
    """Base class for all erudify errors."""


class MalformedRecord(ErudifyError):
    """A transcript block is missing a field or has them out of order."""

    def __init__(self, reason: str, remainder: str):
        self.reason = reason
        self.remainder = remainder
        super().__init__(f"Malformed record ({reason}) at:\n{remainder}")


class AlignmentError(ErudifyError):
    """Base class for failures while aligning hanzi with pinyin."""

    def __init__(self, message: str, chinese: str, romanized: str, remainder: str):
        self.chinese = chinese
        self.romanized = romanized
        self.remainder = remainder
        super().__init__(message)


class SegmentationAmbiguous(AlignmentError):
    """Strict mode found a dictionary match that ends inside a romanized word."""

    def __init__(self, chinese: str, romanized: str, remainder: str, matched: str):
        self.matched = matched
        super().__init__(
            f"Segmentation failed at {matched!r} at {remainder!r} "
            f"(chinese={chinese!r}, pinyin={romanized!r})",
            chinese,
            romanized,
            remainder,
        )


class AlignmentFailed(AlignmentError):
    """No dictionary candidate's reading matches the remaining transcription."""

    def __init__(self, chinese: str, romanized: str, remainder: str):
        super().__init__(
            f"Failed to align {chinese!r} with {romanized!r} at {remainder!r}",
            chinese,
            romanized,
            remainder,
        )


class EmptyTargetList(ErudifyError):
    def __init__(self):
        super().__init__("word_list must not be empty")


class DictionaryUnavailable(ErudifyError):
    """No dictionary file is configured or it cannot be read."""


class StateCorrupted(ErudifyError):
    """A persisted file exists but does not match the expected structure."""

    def __init__(self, path, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Could not load {path}: {detail}")
