"""The prime table the key generator draws from.

The package ships a closed table of known primes as a text resource, one decimal integer per line. It is parsed
lazily on first use and cached as an immutable tuple for the rest of the process. There is no other source of
primes, nothing is generated or tested for primality at runtime.

Typical usage example:

    table = get_primes()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Iterable
import importlib.resources
import logging

logger = logging.getLogger(__name__)

PRIME_RESOURCE = "primes.txt"
_PRIMES: tuple[int, ...] = ()


def parse_primes(lines: Iterable[str]) -> tuple[int, ...]:
    """Parse a prime table, one integer per line.

    Lines that are not integers (blank lines, comments) are skipped silently. No primality check is made, the
    table is trusted.

    Args:
        lines: The raw lines of the table.

    Returns:
        The primes in file order.
    """
    table = []
    for line in lines:
        try:
            table.append(int(line.strip()))
        except ValueError:
            continue
    return tuple(table)


def get_primes() -> tuple[int, ...]:
    """Get the bundled prime table, loading it on first use.

    Accesses the `_PRIMES` global variable as a cache, the bundled resource is only read once per process.

    Returns:
        The bundled primes in ascending order.
    """
    global _PRIMES
    if not _PRIMES:
        resource = importlib.resources.files("textbookrsa") / "data" / PRIME_RESOURCE
        with resource.open("r", encoding="utf-8") as f:
            _PRIMES = parse_primes(f)
        logger.debug("Loaded %d primes from bundled table", len(_PRIMES))
    return _PRIMES
