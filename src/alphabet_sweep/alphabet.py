"""
Alphabet orderings: permutations of the 26 letter identifiers (0-25).

Letters are mapped to identifiers once, at the input boundary; the rest
of the package only ever sees integers.
"""
import random
import string

from .errors import InvalidAlphabetError


LETTERS = string.ascii_uppercase
N_LETTERS = len(LETTERS)
LETTER_IDS = {ch: i for i, ch in enumerate(LETTERS)}


def identity_alphabet() -> list[int]:
    """A..Z in natural order."""
    return list(range(N_LETTERS))


def random_alphabet(rng: random.Random | None = None) -> list[int]:
    """Uniformly random permutation of the 26 identifiers."""
    rng = rng or random.Random()
    alphabet = identity_alphabet()
    rng.shuffle(alphabet)
    return alphabet


def swap(alphabet: list[int], p1: int, p2: int) -> None:
    """Swap two positions in place. Applying it twice is a no-op."""
    alphabet[p1], alphabet[p2] = alphabet[p2], alphabet[p1]


def is_permutation(alphabet) -> bool:
    return sorted(alphabet) == list(range(N_LETTERS))


def format_alphabet(alphabet) -> str:
    """[1, 0, 2, ...] -> 'BAC...'."""
    return "".join(LETTERS[i] for i in alphabet)


def parse_alphabet(text: str) -> list[int]:
    """'BAC...' -> [1, 0, 2, ...], validating it is a full permutation."""
    cleaned = text.strip().upper()
    if len(cleaned) != N_LETTERS:
        raise InvalidAlphabetError(
            f"Alphabet must have {N_LETTERS} letters, got {len(cleaned)}: "
            f"{text!r}")
    unknown = sorted(set(cleaned) - set(LETTERS))
    if unknown:
        raise InvalidAlphabetError(
            f"Alphabet contains non A-Z characters {unknown}: {text!r}")
    alphabet = [LETTER_IDS[ch] for ch in cleaned]
    if not is_permutation(alphabet):
        missing = "".join(ch for ch in LETTERS if ch not in cleaned)
        raise InvalidAlphabetError(
            f"Alphabet is not a permutation (missing {missing}): {text!r}")
    return alphabet


def resolve_initial_alphabet(value: str,
                             rng: random.Random | None = None) -> list[int]:
    """Starting alphabet from a config value.

    "identity" -> A..Z, "random" -> shuffled with rng, anything else is
    parsed as an explicit 26-letter ordering.
    """
    key = value.strip().lower()
    if key == "identity":
        return identity_alphabet()
    if key == "random":
        return random_alphabet(rng)
    return parse_alphabet(value)
