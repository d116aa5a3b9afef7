"""
Scoring of alphabets against the corpus.

A word matches an alphabet when the alphabet, restricted to the word's
letters, visits them in exactly the word's own order. With the position
encoding this is one pass over the alphabet:

    ptr = 0
    for each letter L in alphabet order:
        absent in word       -> skip
        word[L] == ptr       -> ptr += 1
        otherwise            -> no match

`matches` is that scan for a single word. `total_score` does the same
check for every word at once with numpy: at a present letter the pointer
equals the number of present letters already visited, i.e. a running
count along the reordered columns.
"""
import numpy as np

from .indexer import ABSENT


def matches(encoded, alphabet) -> bool:
    """Single-word check, O(26), short-circuits on the first mismatch."""
    ptr = 0
    for letter in alphabet:
        pos = encoded[letter]
        if pos == ABSENT:
            continue
        if pos != ptr:
            return False
        ptr += 1
    return True


def match_mask(corpus, alphabet) -> np.ndarray:
    """Boolean array, True where corpus.words[i] matches the alphabet."""
    positions = corpus.encodings[:, list(alphabet)]
    present = positions != ABSENT
    expected = np.cumsum(present, axis=1) - 1
    return np.all(~present | (positions == expected), axis=1)


def total_score(corpus, alphabet) -> int:
    """Sum of weights of all matching words. Pure, no side effects."""
    if len(corpus) == 0:
        return 0
    return int(corpus.weights[match_mask(corpus, alphabet)].sum())


def matched_words(corpus, alphabet) -> list[tuple[str, int]]:
    """(word, weight) of every matching word, heaviest first."""
    if len(corpus) == 0:
        return []
    mask = match_mask(corpus, alphabet)
    result = [(corpus.words[i], int(corpus.weights[i]))
              for i in np.flatnonzero(mask)]
    return sorted(result, key=lambda m: (-m[1], m[0]))
