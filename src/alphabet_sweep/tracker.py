"""
Bookkeeping of new global bests found by the search.
"""
from dataclasses import dataclass

from .alphabet import format_alphabet


@dataclass(frozen=True)
class BestEvent:
    """A new global best: score and alphabet snapshot at `iteration`."""

    iteration: int
    score: int
    alphabet: str


class ResultTracker:
    """Keeps the best-ever result, its history and per-restart local bests.

    `on_best` (optional) receives every BestEvent as it happens, so the
    caller can print or checkpoint it.
    """

    def __init__(self, on_best=None):
        self.on_best = on_best
        self.best_score = 0
        self.best_alphabet = None
        self.history: list[BestEvent] = []
        self.restart_scores: list[int] = []

    def report(self, score: int, alphabet, iteration: int = 0) -> BestEvent:
        """Record a new global best and notify the sink."""
        event = BestEvent(iteration=iteration, score=int(score),
                          alphabet=format_alphabet(alphabet))
        self.best_score = event.score
        self.best_alphabet = event.alphabet
        self.history.append(event)
        if self.on_best is not None:
            self.on_best(event)
        return event

    def record_restart(self, local_best_score: int) -> None:
        """Local best reached by the segment that just ended."""
        self.restart_scores.append(int(local_best_score))

    def summary(self) -> dict:
        scores = sorted(self.restart_scores, reverse=True)
        return {
            "best_score": self.best_score,
            "best_alphabet": self.best_alphabet,
            "n_improvements": len(self.history),
            "n_restarts": len(self.restart_scores),
            "top_restart_scores": scores[:10],
            "history": [
                {"iteration": e.iteration, "score": e.score,
                 "alphabet": e.alphabet}
                for e in self.history
            ],
        }
