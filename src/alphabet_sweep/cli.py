"""
Command line interface for Alphabet Sweep.

Entry point: alphasweep
"""
import functools
from pathlib import Path

import click

from .config import SweepConfig
from .errors import SweepError


def _handle_errors(func):
    """Turn domain errors into clean click errors (exit code 1)."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (SweepError, FileNotFoundError, UnicodeDecodeError) as e:
            raise click.ClickException(str(e)) from e
    return wrapper


@click.group()
@click.option("--wordlist", type=click.Path(path_type=Path), default=None,
              help="Wordlist file, one word per line "
                   "(default: english_words.txt).")
@click.option("--output-dir", type=click.Path(path_type=Path), default=None,
              help="Output directory (default: output/).")
@click.option("--force", is_flag=True, default=False,
              help="Re-run even if the output already exists.")
@click.pass_context
def cli(ctx, wordlist, output_dir, force):
    """Find the alphabet ordering that sweeps the most words."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = SweepConfig.from_overrides(
        wordlist_path=wordlist, output_dir=output_dir)
    ctx.obj["force"] = force


@cli.command()
@click.option("--iterations", type=click.IntRange(min=0), default=None,
              help="Maximum evaluated swaps, 0 for no limit "
                   "(default: 1000000).")
@click.option("--time-limit", type=float, default=None,
              help="Stop after this many seconds.")
@click.option("--target", type=int, default=None,
              help="Stop once this score is reached.")
@click.option("--seed", type=int, default=None,
              help="Random seed for a reproducible run.")
@click.option("--initial", type=str, default=None,
              help="Starting alphabet: identity, random or 26 letters.")
@click.option("--stagnation-limit", type=click.IntRange(min=1),
              default=None,
              help="Non-improving swaps before a restart (default: 100).")
@click.option("--perturbation-swaps", type=click.IntRange(min=0),
              default=None,
              help="Random swaps applied on restart (default: 10).")
@click.option("--baseline-trials", type=click.IntRange(min=0), default=None,
              help="Random alphabets for the baseline, 0 to skip "
                   "(default: 200).")
@click.option("--no-plot", is_flag=True, default=False,
              help="Skip the score history plot.")
@click.pass_context
@_handle_errors
def search(ctx, iterations, time_limit, target, seed, initial,
           stagnation_limit, perturbation_swaps, baseline_trials, no_plot):
    """Hill-climb alphabet orderings and save the best one."""
    from .optimize import run

    config = ctx.obj["config"]
    if iterations is not None:
        config.max_iterations = iterations or None
    if time_limit is not None:
        config.time_limit = time_limit
    if target is not None:
        config.target_score = target
    if seed is not None:
        config.seed = seed
    if initial is not None:
        config.initial_alphabet = initial
    if stagnation_limit is not None:
        config.stagnation_limit = stagnation_limit
    if perturbation_swaps is not None:
        config.perturbation_swaps = perturbation_swaps
    if baseline_trials is not None:
        config.baseline_trials = baseline_trials
    if no_plot:
        config.plot = False

    try:
        config.stop_condition()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    run(config, force=ctx.obj["force"])


@cli.command()
@click.argument("alphabet")
@click.option("--top", type=int, default=20,
              help="Matched words to list (default: 20).")
@click.pass_context
@_handle_errors
def score(ctx, alphabet, top):
    """Score one ALPHABET (26 letters) against the wordlist."""
    from .optimize import score_alphabet

    result = score_alphabet(ctx.obj["config"], alphabet)
    click.echo(f"  {result['alphabet']} {result['score']} "
               f"/ {result['upper_bound']}")
    click.echo(f"  {result['n_matched_words']} words matched")
    for word, weight in result["top_matches"][:top]:
        click.echo(f"    {word:20s} ({weight:4d}x)")


@cli.command()
@click.option("--trials", type=click.IntRange(min=1), default=None,
              help="Random alphabets to score (default: 200).")
@click.option("--seed", type=int, default=None,
              help="Random seed (default: 42).")
@click.pass_context
@_handle_errors
def baseline(ctx, trials, seed):
    """Score distribution of uniformly random alphabets."""
    from .optimize import run_baseline

    config = ctx.obj["config"]
    if trials is not None:
        config.baseline_trials = trials
    if seed is not None:
        config.baseline_seed = seed

    bl = run_baseline(config)
    click.echo(f"  Random baseline ({bl['n_trials']} alphabets):")
    click.echo(f"    Mean={bl['mean']:.1f}  Std={bl['std']:.1f}  "
               f"Max={bl['max']}")
    click.echo(f"    Threshold (mean + 4σ): {bl['threshold']:.1f}")
    click.echo(f"    Upper bound: {bl['upper_bound']}")


@cli.command()
@click.option("--top", type=int, default=20,
              help="Heaviest canonical words to list (default: 20).")
@click.pass_context
@_handle_errors
def corpus(ctx, top):
    """Statistics of the indexed wordlist."""
    from .optimize import describe_corpus

    info = describe_corpus(ctx.obj["config"], top_n=top)
    click.echo(f"  Raw words:      {info['n_raw']}")
    click.echo(f"  Blank skipped:  {info['n_skipped']}")
    click.echo(f"  Unique words:   {info['n_unique']}")
    click.echo(f"  Total weight:   {info['total_weight']}")
    click.echo(f"  Collapse ratio: {info['collapse_ratio']:.3f}")
    for w in info["top_words"]:
        click.echo(f"    {w['word']:20s} ({w['weight']:4d}x)")
