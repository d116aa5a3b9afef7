"""
Wordlist indexing: raw words -> immutable weighted corpus.

Pipeline per word:
  1. normalize (strip + upper-case, reject anything outside A-Z)
  2. collapse runs of the same letter ("AAPP" -> "AP", "ABBA" -> "ABA")
  3. merge identical canonical words, weight = number of raw words
  4. encode each unique canonical word as 26 positions

Encoding of "THE":
    ABCDEFGHIJKLMNOPQRSTUVWXYZ
    ----2--1-----------0------
Slot c holds the position of letter c in the word's distinct-letter order,
ABSENT if the letter does not occur. Non-sentinel slots are always exactly
0..k-1, which is what the single-pass scorer relies on.
"""
from collections import Counter
from dataclasses import dataclass

import numpy as np

from .alphabet import LETTER_IDS, N_LETTERS
from .errors import MalformedWordError


ABSENT = -1


@dataclass(frozen=True, eq=False)
class Corpus:
    """Unique canonical words with their encodings and weights.

    Row i of `encodings` and `weights` belongs to `words[i]`; words are
    sorted lexicographically. Arrays are read-only.
    """

    words: tuple[str, ...]
    encodings: np.ndarray  # (n_words, 26) int8
    weights: np.ndarray    # (n_words,) int64
    n_raw: int = 0         # raw words indexed (blank lines excluded)
    n_skipped: int = 0     # blank lines dropped

    def __len__(self) -> int:
        return len(self.words)

    @property
    def total_weight(self) -> int:
        """Upper bound for any alphabet's score."""
        return int(self.weights.sum())

    def weight_of(self, word: str) -> int:
        """Weight of a canonical word, 0 if it is not in the corpus."""
        try:
            return int(self.weights[self.words.index(word)])
        except ValueError:
            return 0

    def entries(self):
        """Iterate (word, encoding, weight)."""
        for i, word in enumerate(self.words):
            yield word, self.encodings[i], int(self.weights[i])


def collapse_runs(word: str) -> str:
    """Replace each maximal run of one repeated character by one instance.

    Only adjacent repeats collapse: "AAPP" -> "AP", "ABBA" -> "ABA".
    """
    out = []
    prev = None
    for ch in word:
        if ch != prev:
            out.append(ch)
            prev = ch
    return "".join(out)


def normalize_word(raw: str, line_no: int | None = None) -> str:
    """Strip and upper-case a raw word; reject anything outside A-Z."""
    word = raw.strip().upper()
    for ch in word:
        if ch not in LETTER_IDS:
            raise MalformedWordError(raw, line_no)
    return word


def encode_word(canonical: str) -> np.ndarray:
    """Per-letter position array of a canonical word.

    Repeated letters keep the position of their first occurrence
    ("ABA" -> A=0, B=1).
    """
    encoded = np.full(N_LETTERS, ABSENT, dtype=np.int8)
    pos = 0
    for ch in canonical:
        idx = LETTER_IDS[ch]
        if encoded[idx] == ABSENT:
            encoded[idx] = pos
            pos += 1
    return encoded


def build_corpus(raw_words) -> Corpus:
    """Index raw words into a Corpus.

    Blank lines are skipped and counted; any malformed word aborts the
    whole build with MalformedWordError (no partial corpus).
    """
    canonical = []
    n_skipped = 0
    for line_no, raw in enumerate(raw_words, start=1):
        if not raw.strip():
            n_skipped += 1
            continue
        canonical.append(collapse_runs(normalize_word(raw, line_no)))

    counts = Counter(canonical)
    unique = sorted(counts)

    encodings = np.full((len(unique), N_LETTERS), ABSENT, dtype=np.int8)
    weights = np.zeros(len(unique), dtype=np.int64)
    for i, word in enumerate(unique):
        encodings[i] = encode_word(word)
        weights[i] = counts[word]

    encodings.flags.writeable = False
    weights.flags.writeable = False

    return Corpus(
        words=tuple(unique),
        encodings=encodings,
        weights=weights,
        n_raw=len(canonical),
        n_skipped=n_skipped,
    )
