"""
Stochastic local search over alphabet orderings.

Hill climbing with random single swaps and restart-on-plateau:
  1) swap two random positions of the current alphabet
  2) score it; better than the local best? keep it, otherwise swap back
  3) no improvement for `stagnation_limit` evaluations? forget the local
     best and scramble the alphabet with a few unscored swaps

The search has no end of its own: `run` takes a stopping predicate
(see stopping.py) and the caller reads the best result from the state.
"""
import random
from dataclasses import dataclass, field

from .alphabet import N_LETTERS, swap
from .errors import EmptyCorpusError
from .scorer import total_score
from .tracker import ResultTracker


STAGNATION_LIMIT = 100
PERTURBATION_SWAPS = 10


@dataclass
class SearchState:
    """Everything the search mutates.

    global_best_* never decrease; local_best_score resets on restart.
    """

    current_alphabet: list[int]
    global_best_score: int = 0
    global_best_alphabet: list[int] = field(default_factory=list)
    local_best_score: int = 0
    stagnation_counter: int = 0
    iteration: int = 0
    restarts: int = 0

    @classmethod
    def start(cls, alphabet) -> "SearchState":
        """Fresh state at `alphabet` with zero scores."""
        alphabet = list(alphabet)
        return cls(current_alphabet=alphabet,
                   global_best_alphabet=list(alphabet))


class LocalSearchDriver:
    """Owns the proposal/acceptance loop over a fixed corpus."""

    def __init__(self, corpus, stagnation_limit=STAGNATION_LIMIT,
                 perturbation_swaps=PERTURBATION_SWAPS, rng=None,
                 tracker=None):
        if len(corpus) == 0:
            raise EmptyCorpusError()
        if stagnation_limit < 1:
            raise ValueError("stagnation_limit must be >= 1")
        if perturbation_swaps < 0:
            raise ValueError("perturbation_swaps must be >= 0")
        self.corpus = corpus
        self.stagnation_limit = stagnation_limit
        self.perturbation_swaps = perturbation_swaps
        self.rng = rng or random.Random()
        self.tracker = tracker or ResultTracker()

    def step(self, state: SearchState) -> SearchState:
        """One propose -> score -> accept/revert iteration."""
        # p1 == p2 is allowed: a no-op swap that just costs an evaluation
        p1 = self.rng.randrange(N_LETTERS)
        p2 = self.rng.randrange(N_LETTERS)
        alphabet = state.current_alphabet

        swap(alphabet, p1, p2)
        new_score = total_score(self.corpus, alphabet)
        state.iteration += 1

        if new_score > state.local_best_score:
            state.local_best_score = new_score
            state.stagnation_counter = 0
            if new_score > state.global_best_score:
                state.global_best_score = new_score
                state.global_best_alphabet = list(alphabet)
                self.tracker.report(new_score, alphabet, state.iteration)
        else:
            swap(alphabet, p1, p2)
            state.stagnation_counter += 1

        if state.stagnation_counter >= self.stagnation_limit:
            self.perturb(state)

        return state

    def perturb(self, state: SearchState) -> None:
        """Restart: drop the local anchor and scramble with unscored swaps."""
        self.tracker.record_restart(state.local_best_score)
        state.stagnation_counter = 0
        state.local_best_score = 0
        state.restarts += 1
        for _ in range(self.perturbation_swaps):
            swap(state.current_alphabet,
                 self.rng.randrange(N_LETTERS),
                 self.rng.randrange(N_LETTERS))

    def score_start(self, state: SearchState) -> None:
        """Record the starting alphabet's score as the first global best.

        local_best_score stays untouched, so the first improving swap is
        still accepted as usual.
        """
        score = total_score(self.corpus, state.current_alphabet)
        if score > state.global_best_score:
            state.global_best_score = score
            state.global_best_alphabet = list(state.current_alphabet)
            self.tracker.report(score, state.current_alphabet, state.iteration)

    def run(self, state: SearchState, stop, on_step=None) -> SearchState:
        """Iterate until stop(state) is true; returns the same state."""
        if state.iteration == 0:
            self.score_start(state)
        while not stop(state):
            self.step(state)
            if on_step is not None:
                on_step(state)
        return state
