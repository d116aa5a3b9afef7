"""
Console helpers shared by the pipeline modules.
"""
import time
import functools

import click


def timer(func):
    """Decorator that reports how long a pipeline stage took."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.time()
        result = func(*args, **kwargs)
        elapsed = time.time() - start
        click.echo(f"  ⏱  {func.__name__} done in {elapsed:.1f}s")
        return result
    return wrapper


def print_header(title: str):
    """Print a formatted section header."""
    width = 60
    click.echo("\n" + "=" * width)
    click.echo(f"  {title}")
    click.echo("=" * width)


def print_step(step: str):
    """Print a progress step."""
    click.echo(f"\n  -> {step}")
