"""Textbook RSA in an Academic Sense.

Provides key pair generation from a closed table of primes and byte-wise RSA encryption and decryption, without
padding. Furthermore, exposes the number-theoretic primitives used under-the-hood and key/ciphertext marshalling.

Typical usage example:

    pub, priv = generate_keys()
    c = encrypt(b"Hi there!", pub)
    r = decrypt(c, priv)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from textbookrsa.keygen import generate_key_pair
from textbookrsa.keygen import PUBLIC_EXPONENT
from textbookrsa.numtheory import ext_euclid
from textbookrsa.numtheory import gcd
from textbookrsa.numtheory import InvalidArgumentsError
from textbookrsa.numtheory import mod_pow
from textbookrsa.primes import get_primes
from textbookrsa.rsa import decode_ciphertext
from textbookrsa.rsa import decrypt
from textbookrsa.rsa import encode_ciphertext
from textbookrsa.rsa import encrypt
from textbookrsa.rsa import generate_keys
from textbookrsa.rsa import PrivateKey
from textbookrsa.rsa import PublicKey

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.0.1"
__all__ = [
    "PUBLIC_EXPONENT",
    "InvalidArgumentsError",
    "PrivateKey",
    "PublicKey",
    "decode_ciphertext",
    "decrypt",
    "encode_ciphertext",
    "encrypt",
    "ext_euclid",
    "gcd",
    "generate_key_pair",
    "generate_keys",
    "get_primes",
    "mod_pow",
]
