"""
Random-alphabet baseline: how good is a found alphabet compared with
uniformly shuffled ones?

Pattern: score N random permutations, then compare the real score
against that distribution (empirical p-value, z-score, normal p-value).
"""
import random

import numpy as np
from scipy.stats import norm as sp_norm

from .alphabet import random_alphabet
from .scorer import total_score


def random_scores(corpus, n_trials=200, seed=42) -> list[int]:
    """Scores of n_trials uniformly random alphabets."""
    rng = random.Random(seed)
    return [total_score(corpus, random_alphabet(rng))
            for _ in range(n_trials)]


def compute_random_baseline(corpus, n_trials=200, seed=42) -> dict:
    """Mean/std/max of random alphabet scores, threshold = mean + 4σ."""
    scores = random_scores(corpus, n_trials, seed)
    arr = np.array(scores, dtype=float)
    mean = float(arr.mean())
    std = float(arr.std())

    return {
        "mean": round(mean, 2),
        "std": round(std, 2),
        "max": int(arr.max()),
        "threshold": round(mean + 4 * std, 2),
        "n_trials": n_trials,
        "scores": scores,
    }


def compare_to_baseline(score, baseline_scores) -> dict:
    """Significance of `score` against random-alphabet scores."""
    arr = np.array(baseline_scores, dtype=float)
    n = len(arr)
    mean = float(arr.mean())
    std = float(arr.std())

    # +1 for a conservative estimate
    n_ge = int(np.sum(arr >= score))
    p_value = (n_ge + 1) / (n + 1)

    z_score = (score - mean) / std if std > 0 else float("inf")
    p_normal = float(1 - sp_norm.cdf(z_score))

    return {
        "score": int(score),
        "random_mean": round(mean, 2),
        "random_std": round(std, 2),
        "n_random_ge_score": n_ge,
        "p_value": round(p_value, 6),
        "z_score": round(z_score, 2),
        "p_normal": p_normal,
        "significant_001": p_value < 0.001,
    }
