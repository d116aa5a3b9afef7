"""
Pipeline entry points: wordlist -> corpus -> search -> reports.

Outputs (under config.output_dir):
  stats/sweep_report.json   best alphabet, score, baseline comparison
  stats/sweep_matches.txt   every word the best alphabet can sweep
  plots/sweep_history.png   best score over iterations
"""
import json
import random
import time

import click
from tqdm import tqdm

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .alphabet import format_alphabet, parse_alphabet, resolve_initial_alphabet
from .baseline import compare_to_baseline, compute_random_baseline
from .config import SweepConfig
from .errors import EmptyCorpusError
from .indexer import build_corpus
from .scorer import matched_words, total_score
from .search import LocalSearchDriver, SearchState
from .tracker import ResultTracker
from .utils import print_header, print_step, timer
from .wordlist import load_wordlist


# =====================================================================
# Data preparation
# =====================================================================

@timer
def load_corpus(config: SweepConfig):
    """Read the wordlist and index it."""
    lines = load_wordlist(config.wordlist_path)
    corpus = build_corpus(lines)
    click.echo(f"    {corpus.n_raw} words ({corpus.n_skipped} blank lines "
               f"skipped), {len(corpus)} unique after collapsing runs")
    click.echo(f"    Upper bound (total weight): {corpus.total_weight}")
    return corpus


def corpus_summary(corpus, top_n=20) -> dict:
    """Corpus statistics: sizes, collapse ratio, heaviest words."""
    order = sorted(range(len(corpus)),
                   key=lambda i: (-int(corpus.weights[i]), corpus.words[i]))
    lengths = [len(w) for w in corpus.words]
    return {
        "n_raw": corpus.n_raw,
        "n_skipped": corpus.n_skipped,
        "n_unique": len(corpus),
        "total_weight": corpus.total_weight,
        "collapse_ratio": (round(len(corpus) / corpus.n_raw, 4)
                           if corpus.n_raw else 0.0),
        "max_word_length": max(lengths, default=0),
        "top_words": [
            {"word": corpus.words[i], "weight": int(corpus.weights[i])}
            for i in order[:top_n]
        ],
    }


# =====================================================================
# Search
# =====================================================================

def search_alphabet(corpus, config: SweepConfig, on_best=None,
                    progress=True):
    """Run the local search with the configured policy and limits.

    Returns (state, tracker). Ctrl-C ends the search early; the state
    still holds the best alphabet found so far.
    """
    rng = random.Random(config.seed)
    tracker = ResultTracker(on_best=on_best)
    driver = LocalSearchDriver(
        corpus,
        stagnation_limit=config.stagnation_limit,
        perturbation_swaps=config.perturbation_swaps,
        rng=rng,
        tracker=tracker,
    )
    state = SearchState.start(
        resolve_initial_alphabet(config.initial_alphabet, rng))
    stop = config.stop_condition()

    bar = tqdm(total=config.max_iterations, desc="  Search", unit="it",
               disable=not progress, mininterval=0.5)
    try:
        driver.run(state, stop, on_step=lambda s: bar.update(1))
    except KeyboardInterrupt:
        tqdm.write("    Interrupted: keeping best alphabet so far")
    finally:
        bar.close()

    return state, tracker


def _echo_best(event):
    tqdm.write(f"    New best: {event.alphabet} {event.score} "
               f"(iteration {event.iteration})")


# =====================================================================
# Reports
# =====================================================================

def _build_report(corpus, state, tracker, baseline, elapsed, config):
    """Assemble the JSON report."""
    matches = matched_words(corpus, state.global_best_alphabet)
    upper = corpus.total_weight
    report = {
        "best_alphabet": format_alphabet(state.global_best_alphabet),
        "best_score": state.global_best_score,
        "upper_bound": upper,
        "coverage": (round(state.global_best_score / upper, 4)
                     if upper else 0.0),
        "n_matched_words": len(matches),
        "iterations": state.iteration,
        "restarts": state.restarts,
        "elapsed_s": round(elapsed, 2),
        "policy": {
            "stagnation_limit": config.stagnation_limit,
            "perturbation_swaps": config.perturbation_swaps,
            "initial_alphabet": config.initial_alphabet,
            "seed": config.seed,
        },
        "corpus": corpus_summary(corpus, top_n=10),
        "tracker": tracker.summary(),
        "top_matches": [
            {"word": w, "weight": c}
            for w, c in matches[:config.top_n_words]
        ],
    }
    if baseline is not None:
        report["baseline"] = {k: v for k, v in baseline.items()
                              if k != "scores"}
        report["vs_baseline"] = compare_to_baseline(
            state.global_best_score, baseline["scores"])
    return report


def _save_matches_txt(matches, output_path):
    """Save the matched words as readable text."""
    lines = [
        "# Words typed as one sweep through the best alphabet",
        f"# Total: {len(matches)} distinct words, "
        f"weight {sum(c for _, c in matches)}",
        "",
        f"{'Word':<30s} {'Weight':>6s}",
        "-" * 37,
    ]
    for word, count in matches:
        lines.append(f"{word:<30s} {count:>6d}")
    output_path.write_text("\n".join(lines), encoding="utf-8")


@timer
def plot_history(tracker, iterations, output_path):
    """Step plot of the best score against iterations."""
    fig, ax = plt.subplots(figsize=(10, 5))
    if tracker.history:
        xs = [e.iteration for e in tracker.history] + [iterations]
        ys = [e.score for e in tracker.history]
        ys.append(ys[-1])
        ax.step(xs, ys, where="post", color="steelblue", linewidth=1.5)
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Best score")
    ax.set_title("Alphabet search: best score over time")
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(str(output_path), dpi=150)
    plt.close(fig)


def _print_report(report):
    """Print the report to the console."""
    click.echo(f"\n{'=' * 60}")
    click.echo("  SEARCH RESULT")
    click.echo(f"{'=' * 60}")
    click.echo(f"\n  Best alphabet: {report['best_alphabet']}")
    click.echo(f"  Score: {report['best_score']} / {report['upper_bound']} "
               f"({report['coverage']:.1%})")
    click.echo(f"  Matched words: {report['n_matched_words']}")
    click.echo(f"  Iterations: {report['iterations']}  "
               f"Restarts: {report['restarts']}  "
               f"({report['elapsed_s']:.1f}s)")

    if "baseline" in report:
        bl = report["baseline"]
        vs = report["vs_baseline"]
        click.echo(f"\n  Random baseline ({bl['n_trials']} alphabets):")
        click.echo(f"    Mean={bl['mean']:.1f}  Std={bl['std']:.1f}  "
                   f"Max={bl['max']}")
        click.echo(f"    z={vs['z_score']}  p={vs['p_value']}")

    click.echo("\n  Top 20 matched words:")
    for m in report["top_matches"][:20]:
        click.echo(f"    {m['word']:20s} ({m['weight']:4d}x)")


# =====================================================================
# Entry points
# =====================================================================

def run(config: SweepConfig, force=False):
    """Entry point: search for the best alphabet and save reports."""
    report_path = config.report_path

    if report_path.exists() and not force:
        click.echo("  Sweep report already exists. Use --force to re-run.")
        return None

    config.ensure_dirs()
    print_header("ALPHABET SWEEP - hill climbing with restarts")

    print_step("Loading wordlist...")
    corpus = load_corpus(config)

    baseline = None
    if config.baseline_trials > 0 and len(corpus):
        print_step(f"Random baseline ({config.baseline_trials} alphabets)...")
        baseline = compute_random_baseline(corpus, config.baseline_trials,
                                           config.baseline_seed)
        click.echo(f"    Mean={baseline['mean']:.1f}  "
                   f"Std={baseline['std']:.1f}  Max={baseline['max']}")

    print_step("Searching...")
    t0 = time.time()
    state, tracker = search_alphabet(corpus, config, on_best=_echo_best)
    elapsed = time.time() - t0
    click.echo(f"    Done in {elapsed:.1f}s, {state.iteration} iterations")

    print_step("Building report...")
    report = _build_report(corpus, state, tracker, baseline, elapsed, config)

    with open(report_path, "w") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
    click.echo(f"    Saved: {report_path}")

    matches_path = config.stats_dir / "sweep_matches.txt"
    _save_matches_txt(matched_words(corpus, state.global_best_alphabet),
                      matches_path)
    click.echo(f"    Saved: {matches_path}")

    if config.plot:
        plot_path = config.plots_dir / "sweep_history.png"
        plot_history(tracker, state.iteration, plot_path)
        click.echo(f"    Saved: {plot_path}")

    _print_report(report)
    return report


def score_alphabet(config: SweepConfig, alphabet_text: str) -> dict:
    """Score one explicit alphabet against the wordlist."""
    alphabet = parse_alphabet(alphabet_text)
    corpus = build_corpus(load_wordlist(config.wordlist_path))
    matches = matched_words(corpus, alphabet)
    return {
        "alphabet": format_alphabet(alphabet),
        "score": total_score(corpus, alphabet),
        "upper_bound": corpus.total_weight,
        "n_matched_words": len(matches),
        "top_matches": matches[:config.top_n_words],
    }


def run_baseline(config: SweepConfig) -> dict:
    """Random-alphabet score distribution for the wordlist."""
    corpus = build_corpus(load_wordlist(config.wordlist_path))
    if len(corpus) == 0:
        raise EmptyCorpusError()
    baseline = compute_random_baseline(corpus, config.baseline_trials,
                                       config.baseline_seed)
    baseline["upper_bound"] = corpus.total_weight
    return baseline


def describe_corpus(config: SweepConfig, top_n=20) -> dict:
    """Statistics of the indexed wordlist."""
    corpus = build_corpus(load_wordlist(config.wordlist_path))
    return corpus_summary(corpus, top_n=top_n)
