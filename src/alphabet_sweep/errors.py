"""
Error taxonomy for corpus building and search.
"""


class SweepError(Exception):
    """Base class for every error raised by alphabet_sweep."""


class MalformedWordError(SweepError, ValueError):
    """A raw word contains characters outside A-Z after normalization."""

    def __init__(self, word: str, line_no: int | None = None):
        self.word = word
        self.line_no = line_no
        where = f" (line {line_no})" if line_no is not None else ""
        super().__init__(f"Malformed word{where}: {word!r} "
                         f"contains characters outside A-Z")


class EmptyCorpusError(SweepError):
    """The corpus holds no words, so every alphabet scores 0."""

    def __init__(self, message: str = "Corpus is empty: nothing to optimize"):
        super().__init__(message)


class InvalidAlphabetError(SweepError, ValueError):
    """A supplied alphabet is not a permutation of the 26 letters."""
