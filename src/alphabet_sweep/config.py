"""
Alphabet Sweep - global configuration as a dataclass.
"""
from dataclasses import dataclass
from pathlib import Path

from .stopping import any_of, deadline, max_iterations, target_score


@dataclass
class SweepConfig:
    """Configuration shared by every pipeline step."""

    # === PATHS ===
    wordlist_path: Path = Path("english_words.txt")
    output_dir: Path = Path("output")

    # === SEARCH POLICY ===
    stagnation_limit: int = 100
    perturbation_swaps: int = 10
    initial_alphabet: str = "identity"  # "identity", "random" or 26 letters
    seed: int | None = None

    # === STOPPING (None disables a condition) ===
    max_iterations: int | None = 1_000_000
    time_limit: float | None = None
    target_score: int | None = None

    # === BASELINE ===
    baseline_trials: int = 200
    baseline_seed: int = 42

    # === OUTPUT ===
    top_n_words: int = 50
    plot: bool = True

    # --- Derived paths ---

    @property
    def stats_dir(self) -> Path:
        return self.output_dir / "stats"

    @property
    def plots_dir(self) -> Path:
        return self.output_dir / "plots"

    @property
    def report_path(self) -> Path:
        return self.stats_dir / "sweep_report.json"

    def ensure_dirs(self) -> None:
        """Create every output directory."""
        for d in [self.stats_dir, self.plots_dir]:
            d.mkdir(parents=True, exist_ok=True)

    def stop_condition(self):
        """Combine the configured limits into one stopping predicate.

        Raises ValueError when no limit is set: the search never ends
        on its own.
        """
        conditions = []
        if self.max_iterations is not None:
            conditions.append(max_iterations(self.max_iterations))
        if self.time_limit is not None:
            conditions.append(deadline(self.time_limit))
        if self.target_score is not None:
            conditions.append(target_score(self.target_score))
        if not conditions:
            raise ValueError("At least one of max_iterations, time_limit "
                             "or target_score must be set")
        return any_of(*conditions)

    @classmethod
    def from_overrides(cls, **kwargs) -> "SweepConfig":
        """Build a config ignoring None values (for Click integration)."""
        filtered = {k: v for k, v in kwargs.items() if v is not None}
        return cls(**filtered)
