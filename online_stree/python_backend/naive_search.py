'''Pure Python reference implementations of substring search.

These functions scan the text directly and make no attempt at efficiency. They
serve as the baseline the suffix tree is checked against in the tests and the
benchmark.

Helper functions for generating random strings are also included.
'''
import numpy as np


def naive_find_all(text: str, pattern: str) -> list[int]:
    """Returns every offset `i` with ``text[i:i + len(pattern)] == pattern``.

    Occurrences may overlap. The empty pattern occurs at every offset from 0 to
    ``len(text)`` inclusive.

    Args:
        text: The text to scan.
        pattern: The string to look for.

    Returns:
        The sorted list of start offsets.
    """
    if not pattern:
        return list(range(len(text) + 1))
    offsets = []
    start = text.find(pattern)
    while start != -1:
        offsets.append(start)
        start = text.find(pattern, start + 1)
    return offsets


def naive_contains(text: str, pattern: str) -> bool:
    """Checks whether `pattern` occurs in `text`."""
    return pattern in text


def naive_match_length(text: str, pattern: str) -> int:
    """Returns the length of the longest prefix of `pattern` that occurs in `text`."""
    length = 0
    while length < len(pattern) and pattern[:length + 1] in text:
        length += 1
    return length


def generate_random_string(length: int, alphabet: list = ['0', '1']) -> str:
    """Generates a random string of a given length from a specified alphabet.

    Args:
        length: The desired length of the string.
        alphabet: A list of characters to choose from. Defaults to ['0', '1'].

    Returns:
        A randomly generated string.
    """
    if length <= 0:
        return ""
    if not alphabet:
        raise ValueError("Alphabet cannot be empty for generating random string.")
    return ''.join(np.random.choice(alphabet, length))


def generate_random_string_ensemble(num_strings: int, string_length: int, alphabet: list = ['0', '1']) -> list[str]:
    """Generates an ensemble (list) of random strings of equal length."""
    return [generate_random_string(string_length, alphabet) for _ in range(num_strings)]
