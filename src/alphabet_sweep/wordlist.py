"""
Reading wordlists from disk: one raw word per line.
"""
from pathlib import Path


def load_wordlist(path: Path) -> list[str]:
    """Lines of a wordlist file, line endings removed.

    Validation happens later in build_corpus, so line numbers there match
    the file.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Wordlist not found: {path}")
    return path.read_text(encoding="utf-8").splitlines()
