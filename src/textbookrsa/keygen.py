"""Core Key Generation Utility, drawing key primes from the bundled prime table.

Two primes are drawn uniformly (with replacement) from the table until they form a usable pair, after which the
private exponent is derived from the fixed public exponent with the extended Euclidean algorithm.

Typical usage example:

    (n, e), (n, d) = generate_key_pair()
    (n, e), (n, d, p, q) = generate_key_pair((61, 53), expose_primes=True)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Callable, Sequence
import logging
import secrets
from typing import Literal, overload

from textbookrsa import numtheory
from textbookrsa import primes as prime_table

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT: int = (1 << 8) + 1


def draw_primes(primes: Sequence[int] | None = None,
                pub: int = PUBLIC_EXPONENT,
                choice: Callable[[Sequence[int]], int] = secrets.choice) -> tuple[int, int]:
    """Draws a usable prime pair from the table.

    Both primes are redrawn until they are non-zero, distinct and `(p-1)*(q-1)` is coprime with `pub`.
    There is no iteration cap, a table without two distinct usable primes never returns.

    Args:
        primes: The table to draw from. Defaults to the bundled table.
        pub: The public exponent the pair has to suit. Defaults to 257.
        choice: Uniform selection primitive. Defaults to `secrets.choice`.

    Returns:
        The accepted pair (p, q).
    """
    if primes is None:
        primes = prime_table.get_primes()
    rejected = 0
    while True:
        p = choice(primes)
        q = choice(primes)
        if p != 0 and q != 0 and p != q and numtheory.gcd((p - 1) * (q - 1), pub) == 1:
            break
        rejected += 1
    logger.debug("Accepted prime pair after %d rejected draws", rejected)
    return p, q


@overload
def generate_key_pair(primes: Sequence[int] | None = None,
                      *,
                      expose_primes: Literal[False] = False,
                      choice: Callable[[Sequence[int]], int] = secrets.choice
                      ) -> tuple[tuple[int, int], tuple[int, int]]:
    ...


@overload
def generate_key_pair(primes: Sequence[int] | None = None,
                      *,
                      expose_primes: Literal[True],
                      choice: Callable[[Sequence[int]], int] = secrets.choice
                      ) -> tuple[tuple[int, int], tuple[int, int, int, int]]:
    ...


def generate_key_pair(
    primes: Sequence[int] | None = None,
    *,
    expose_primes: bool = False,
    choice: Callable[[Sequence[int]], int] = secrets.choice
) -> tuple[tuple[int, int], tuple[int, int]] | tuple[tuple[int, int], tuple[int, int, int, int]]:
    """Generates an RSA key pair.

    Draws the primes, then derives the private exponent as the inverse of the public exponent modulo
    `(p-1)*(q-1)`, folded to be non-negative.

    Args:
        primes: The table to draw from. Defaults to the bundled table.
        expose_primes: Whether to export the prime numbers as well or not. Defaults to False.
        choice: Uniform selection primitive. Defaults to `secrets.choice`.

    Returns:
        A tuple of tuples of (public, private) sub-tuples (modulus, exponent) or if exposed for the private
        (modulus, exponent, p, q)
    """
    pub = PUBLIC_EXPONENT
    p, q = draw_primes(primes, pub, choice)
    n = p * q
    phi = (p - 1) * (q - 1)
    d = numtheory.ext_euclid(phi, pub)
    while d < 0:
        d += phi
    if not expose_primes:
        del p, q
        return (n, pub), (n, d)
    return (n, pub), (n, d, p, q)
