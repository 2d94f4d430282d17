"""Shortcode generation utility

This module generates random candidate shortcodes and checks the shape of
shortcodes received on lookup.

Functions:
    generate_shortcode(length=7, alphabet=Shortcode.ALPHABET):
        Draw a random shortcode from a cryptographically strong source.
    is_valid_shortcode(shortcode):
        Check whether a string has the shape of a resolvable shortcode.

Example:
    >>> from shortlink.utils import generate_shortcode
    >>> generate_shortcode()
    'kX7mQ2p'
"""

import re
import secrets

from shortlink.constants import Shortcode


SHORTCODE_RE = re.compile(rf'^{Shortcode.PATTERN}$')


def generate_shortcode(length: int = Shortcode.LENGTH, alphabet: str = Shortcode.ALPHABET) -> str:
    """Generate a random shortcode candidate.

    Every symbol is drawn independently with `secrets.choice`, so the output
    is uniformly distributed over `alphabet ** length` (58^7 by default) and
    cannot be predicted from previously issued codes. The function is pure
    with respect to persisted state: uniqueness against the data store is
    the caller's job (see LinkAllocator).

    Args:
        length (int, optional):
            Number of symbols. Defaults to 7.
        alphabet (str, optional):
            Symbols to draw from. Defaults to the 58-symbol alphabet without
            visually ambiguous characters (0/O, 1/l/I).

    Returns:
        str: A random shortcode.

    Raises:
        TypeError / ValueError:
            On a non-integer or non-positive length, or an empty alphabet.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')

    return ''.join(secrets.choice(alphabet) for _ in range(length))


def is_valid_shortcode(shortcode: object) -> bool:
    """Return True if `shortcode` is 3-64 characters of letters, digits, '_' or '-'

    Example:
        >>> is_valid_shortcode('abc123')
        True
        >>> is_valid_shortcode('ab')
        False
        >>> is_valid_shortcode('bad/code')
        False
    """
    return isinstance(shortcode, str) and SHORTCODE_RE.fullmatch(shortcode) is not None
