"""
Stopping predicates for the search loop.

A predicate is a callable(state) -> bool, checked once at the top of
every iteration; True stops the search.
"""
import time


def max_iterations(n: int):
    """Stop after n evaluated swaps."""
    def stop(state):
        return state.iteration >= n
    return stop


def deadline(seconds: float, clock=time.monotonic):
    """Stop once `seconds` have passed since the predicate was built."""
    end = clock() + seconds

    def stop(state):
        return clock() >= end
    return stop


def target_score(score: int):
    """Stop as soon as the global best reaches `score`."""
    def stop(state):
        return state.global_best_score >= score
    return stop


def any_of(*conditions):
    """Stop when any of the conditions does."""
    def stop(state):
        return any(cond(state) for cond in conditions)
    return stop
