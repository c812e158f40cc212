"""Number-theoretic primitives backing the key generation and the cipher.

Everything here is pure and stateless: greatest common divisor, the extended Euclidean algorithm and modular
exponentiation. Inputs are expected to be non-negative integers small enough to fit a signed 64-bit word, but
since Python integers are unbounded the intermediate `modulus**2` products never overflow.

Typical usage example:

    gcd(12, 18)
    d = ext_euclid(phi, 257)
    c = mod_pow(72, 257, 3233)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class InvalidArgumentsError(ValueError):
    """Raised when modular exponentiation receives a negative base/exponent or a non-positive modulus."""


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by repeated remainder.

    Args:
        a: Non-negative integer.
        b: Positive integer.

    Returns:
        The greatest common divisor of `a` and `b`.
    """
    while a != 0:
        a, b = b % a, a
    return b


def ext_euclid(a: int, b: int) -> int:
    """Bezout coefficient of `b`, i.e. the inverse of `b` modulo `a` when they are coprime.

    Runs the remainder sequence of (a, b) and carries only the coefficient of `b` along, the coefficient of `a` is
    never needed by the key generator. The result may be negative, it is up to the caller to fold it into `[0, a)`.

    Args:
        a: The modulus, the totient during key generation.
        b: The number to invert, the public exponent during key generation.

    Returns:
        `y` such that `a*x + b*y == gcd(a, b)` for some integer `x`.
    """
    rem, next_rem = a, b
    coeff, next_coeff = 0, 1
    while next_rem != 0:
        quot = rem // next_rem
        rem, next_rem = next_rem, rem - quot * next_rem
        coeff, next_coeff = next_coeff, coeff - quot * next_coeff
    return coeff


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Computes `base**exponent % modulus` by square-and-multiply.

    Every multiplication is followed by a reduction so no intermediate exceeds `modulus**2`.
    Note that an exponent of zero yields 1 regardless of the modulus.

    Args:
        base: Non-negative base.
        exponent: Non-negative exponent.
        modulus: Positive modulus.

    Returns:
        The modular power.

    Raises:
        InvalidArgumentsError: If `base` or `exponent` is negative or `modulus` is not positive.
    """
    if base < 0 or exponent < 0 or modulus <= 0:
        raise InvalidArgumentsError("Invalid mod_pow arguments")
    if exponent == 0:
        return 1
    base %= modulus
    result = 1
    while exponent > 1:
        if exponent % 2:
            result = result * base % modulus
            exponent -= 1
        base = base * base % modulus
        exponent //= 2
    return result * base % modulus
