"""Slug generation and validation utilities

This module provides helpers for producing random, fixed-length slugs from a
closed alphanumeric alphabet and for validating externally supplied slugs
against that alphabet.

The alphabet deliberately omits the visually ambiguous characters
`i`, `o`, `I` and `O`. It is a literal, closed set of symbols: any other
character (including the Redis namespace separator ':' and glob characters
such as '*') makes a slug invalid.

Functions:
    generate_slug(length=8) -> str:
        Generate a random slug suitable for use as a URL path component.

    is_valid_slug(candidate) -> bool:
        Check that every character of a candidate slug belongs to the alphabet.

Example:
    >>> from slugshortener.utils import generate_slug, is_valid_slug
    >>> slug = generate_slug()
    >>> len(slug)
    8
    >>> is_valid_slug(slug)
    True
    >>> is_valid_slug('url:abc')
    False
"""

import random

from beartype import beartype

from slugshortener.constants import Slug


ALPHABET = 'abcdefghjklmnpqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ0123456789'
ALPHABET_SET = frozenset(ALPHABET)
BASE = len(ALPHABET)  # 24 lowercase + 24 uppercase + 10 digits

# Process-wide random source, seeded from OS entropy (os.urandom).
# NOTE: SystemRandom keeps no state in-process, so concurrent callers
#       can share it without locking.
_random = random.SystemRandom()


@beartype
def generate_slug(length: int = Slug.LENGTH) -> str:
    """Generate a random slug drawn uniformly from ALPHABET.

    Each character is drawn independently (with replacement). No state is
    retained between calls beyond the shared random source.

    Args:
        length (int, optional):
            Number of characters in the slug. Defaults to 8.

    Returns:
        str: A fresh random slug.

    Raises:
        ValueError:
            If length is not a positive integer.

    Example:
        >>> generate_slug()
        'Rk7dPq2x'
    """
    if length <= 0:
        raise ValueError(f'Slug length must be a positive integer (given value: {length}).')
    return ''.join(_random.choices(ALPHABET, k=length))


@beartype
def is_valid_slug(candidate: str) -> bool:
    """Return True if every character of candidate belongs to ALPHABET.

    Only the character set is checked: an empty string or a string of an
    unexpected length is still considered valid.
    """
    return all(char in ALPHABET_SET for char in candidate)
