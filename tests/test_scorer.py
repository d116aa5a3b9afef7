"""
Single-word matching and corpus scoring.
"""
import itertools
import random

from alphabet_sweep.alphabet import LETTERS, parse_alphabet, random_alphabet
from alphabet_sweep.indexer import build_corpus, encode_word
from alphabet_sweep.scorer import match_mask, matched_words, matches, total_score


def _with_prefix(prefix: str) -> list[int]:
    """Alphabet starting with `prefix`, remaining letters in A..Z order."""
    rest = "".join(ch for ch in LETTERS if ch not in prefix)
    return parse_alphabet(prefix + rest)


def test_the_matches_when_order_respected():
    assert matches(encode_word("THE"), parse_alphabet("ABTHECDFGIJKLMNOPQRSUVWXYZ"))


def test_the_fails_when_e_before_h():
    assert not matches(encode_word("THE"), parse_alphabet("ABTEHCDFGIJKLMNOPQRSUVWXYZ"))


def test_single_letter_word_always_matches():
    rng = random.Random(3)
    for _ in range(20):
        assert matches(encode_word("Q"), random_alphabet(rng))


def test_repeated_letter_word_uses_first_occurrence():
    """ABA is checked as A before B."""
    assert matches(encode_word("ABA"), _with_prefix("AB"))
    assert not matches(encode_word("ABA"), _with_prefix("BA"))


def test_vectorized_mask_agrees_with_scan():
    words = ["THE", "CAT", "ACT", "BANANA", "ZEBRA", "QUIZ", "A", "ABBA",
             "STRENGTH", "RHYTHM"]
    corpus = build_corpus(words)
    rng = random.Random(11)
    for _ in range(200):
        alphabet = random_alphabet(rng)
        mask = match_mask(corpus, alphabet)
        for i, (_, encoded, _) in enumerate(corpus.entries()):
            assert bool(mask[i]) == matches(encoded, alphabet)


def test_total_score_sums_weights():
    corpus = build_corpus(["AB", "AAB", "ABB", "BA", "C"])
    # AB weight 3, BA weight 1, C weight 1
    assert total_score(corpus, _with_prefix("AB")) == 4
    assert total_score(corpus, _with_prefix("BA")) == 2


def test_total_score_empty_corpus():
    assert total_score(build_corpus([]), list(range(26))) == 0


def test_anagrams_cannot_match_together():
    """CAT, ACT, TAC order the same letters differently: one at most."""
    corpus = build_corpus(["CAT", "ACT", "TAC"])
    for perm in itertools.permutations("ACT"):
        order = "".join(perm)
        score = total_score(corpus, _with_prefix(order))
        assert score <= 1
        assert score == (1 if order in ("CAT", "ACT", "TAC") else 0)


def test_matched_words_heaviest_first():
    corpus = build_corpus(["AB", "AB", "ABC", "CB"])
    result = matched_words(corpus, _with_prefix("ABC"))
    assert result == [("AB", 2), ("ABC", 1)]
