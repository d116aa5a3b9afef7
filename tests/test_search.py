"""
Local search driver: acceptance, revert, restarts, stopping, end-to-end.
"""
import random

import pytest

from alphabet_sweep.alphabet import (
    format_alphabet,
    identity_alphabet,
    is_permutation,
    random_alphabet,
)
from alphabet_sweep.errors import EmptyCorpusError
from alphabet_sweep.indexer import build_corpus
from alphabet_sweep.scorer import total_score
from alphabet_sweep.search import LocalSearchDriver, SearchState
from alphabet_sweep.stopping import any_of, max_iterations, target_score
from alphabet_sweep.tracker import ResultTracker


class ScriptedRng:
    """randrange() returns the scripted positions in order."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, n):
        return self.values.pop(0)


def test_driver_refuses_empty_corpus():
    with pytest.raises(EmptyCorpusError):
        LocalSearchDriver(build_corpus([]))


def test_driver_rejects_bad_policy():
    corpus = build_corpus(["AB"])
    with pytest.raises(ValueError):
        LocalSearchDriver(corpus, stagnation_limit=0)
    with pytest.raises(ValueError):
        LocalSearchDriver(corpus, perturbation_swaps=-1)


def test_improving_swap_is_accepted():
    """BA fails under A..Z; swapping A and B makes it match."""
    events = []
    tracker = ResultTracker(on_best=events.append)
    driver = LocalSearchDriver(build_corpus(["BA"]), rng=ScriptedRng([0, 1]),
                               tracker=tracker)
    state = SearchState.start(identity_alphabet())

    driver.step(state)

    assert format_alphabet(state.current_alphabet).startswith("BA")
    assert state.local_best_score == 1
    assert state.global_best_score == 1
    assert format_alphabet(state.global_best_alphabet).startswith("BA")
    assert state.stagnation_counter == 0
    assert state.iteration == 1
    assert [e.score for e in events] == [1]
    assert events[0].iteration == 1


def test_non_improving_swap_is_reverted():
    driver = LocalSearchDriver(build_corpus(["AB"]), rng=ScriptedRng([0, 1]))
    state = SearchState.start(identity_alphabet())

    driver.step(state)

    assert state.current_alphabet == identity_alphabet()
    assert state.local_best_score == 0
    assert state.stagnation_counter == 1


def test_equal_score_is_not_accepted():
    """Strict improvement only: a neutral swap is undone."""
    driver = LocalSearchDriver(build_corpus(["AB"]), rng=ScriptedRng([5, 6]))
    state = SearchState.start(identity_alphabet())
    state.local_best_score = 1

    driver.step(state)

    assert state.current_alphabet == identity_alphabet()
    assert state.stagnation_counter == 1


def test_stagnation_triggers_restart():
    tracker = ResultTracker()
    driver = LocalSearchDriver(build_corpus(["AB"]), stagnation_limit=3,
                               perturbation_swaps=2, rng=random.Random(0),
                               tracker=tracker)
    state = SearchState.start(identity_alphabet())
    state.local_best_score = 1
    state.global_best_score = 1

    for _ in range(3):
        driver.step(state)

    assert state.restarts == 1
    assert state.stagnation_counter == 0
    assert state.local_best_score == 0
    assert state.global_best_score == 1
    assert tracker.restart_scores == [1]
    assert is_permutation(state.current_alphabet)


def test_best_alphabet_is_a_snapshot():
    driver = LocalSearchDriver(build_corpus(["BA"]),
                               rng=ScriptedRng([0, 1, 2, 3]))
    state = SearchState.start(identity_alphabet())
    driver.step(state)
    best = list(state.global_best_alphabet)
    state.current_alphabet[2], state.current_alphabet[3] = (
        state.current_alphabet[3], state.current_alphabet[2])
    assert state.global_best_alphabet == best


def test_stop_checked_before_first_iteration():
    driver = LocalSearchDriver(build_corpus(["AB"]))
    state = driver.run(SearchState.start(identity_alphabet()),
                       max_iterations(0))
    assert state.iteration == 0


def test_starting_alphabet_counts_as_global_best():
    """A run stopped before any swap still reports the start's score."""
    events = []
    driver = LocalSearchDriver(build_corpus(["AB", "BA"]),
                               tracker=ResultTracker(on_best=events.append))
    state = driver.run(SearchState.start(identity_alphabet()),
                       max_iterations(0))

    assert state.global_best_score == 1
    assert state.global_best_alphabet == identity_alphabet()
    assert state.local_best_score == 0
    assert [(e.iteration, e.score) for e in events] == [(0, 1)]


def test_global_best_is_monotonic_and_bounded():
    words = ["THE", "AND", "FOR", "ARE", "BUT", "NOT", "YOU", "ALL", "ANY",
             "CAN", "HER", "WAS", "ONE", "OUR", "OUT", "DAY", "GET", "HAS",
             "HIM", "HIS", "HOW", "MAN", "NEW", "NOW", "OLD", "SEE", "TWO",
             "WAY", "WHO", "BOY", "DID", "ITS", "LET", "PUT", "SAY", "SHE"]
    corpus = build_corpus(words)
    driver = LocalSearchDriver(corpus, rng=random.Random(7))
    state = SearchState.start(random_alphabet(random.Random(7)))
    seen = []

    driver.run(state, max_iterations(3000),
               on_step=lambda s: seen.append(s.global_best_score))

    assert len(seen) == 3000
    assert all(a <= b for a, b in zip(seen, seen[1:]))
    assert state.global_best_score <= corpus.total_weight
    assert total_score(corpus, state.global_best_alphabet) == \
        state.global_best_score
    assert is_permutation(state.current_alphabet)
    assert state.restarts > 0


def test_same_seed_same_run():
    corpus = build_corpus(["THE", "CAT", "DOG", "BIRD", "FISH", "WORD"])

    def one_run():
        tracker = ResultTracker()
        driver = LocalSearchDriver(corpus, rng=random.Random(123),
                                   tracker=tracker)
        state = driver.run(SearchState.start(identity_alphabet()),
                           max_iterations(500))
        return state.global_best_alphabet, tracker.history

    assert one_run() == one_run()


def test_finds_best_on_small_corpus():
    """CAT and AT agree, ACT and AT agree, TAC agrees with nothing: max 2."""
    corpus = build_corpus(["CAT", "ACT", "TAC", "AT"])
    rng = random.Random(2024)
    driver = LocalSearchDriver(corpus, rng=rng)
    state = SearchState.start(random_alphabet(rng))

    driver.run(state, any_of(max_iterations(10_000), target_score(2)))

    assert state.global_best_score == 2
    assert total_score(corpus, state.global_best_alphabet) == 2


def test_anagram_corpus_never_exceeds_one():
    corpus = build_corpus(["CAT", "ACT", "TAC"])
    driver = LocalSearchDriver(corpus, rng=random.Random(1))
    state = driver.run(SearchState.start(identity_alphabet()),
                       max_iterations(2000))
    assert state.global_best_score == 1
