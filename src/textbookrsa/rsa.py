"""Provides the textbook RSA cipher: key classes, byte-wise encryption and decryption and key marshalling.

Every byte of the plaintext is exponentiated on its own, so a ciphertext is a list of integers of the same length
as the message. There is no padding and no chaining. Keys can be written to and read from PEM armoured DER, with
PKCS1 for the public key and a minimal modulus/exponent structure for the private key, since the private key does
not keep its primes. Ciphertexts can be marshalled to base64 for transport.

Typical usage example:

    pub, priv = generate_keys()
    c = pub.encrypt(b"Hi there!")
    r = priv.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
from collections.abc import Iterable, Sequence
import dataclasses
import pathlib
import textwrap
from typing import ClassVar

from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1.type import namedtype
from pyasn1.type import univ
from pyasn1_modules import rfc8017

from textbookrsa import keygen
from textbookrsa import numtheory


class TextbookPrivateKey(univ.Sequence):
    """PKCS1 has no room for a private key without its primes, so we carry our own structure."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("version", univ.Integer()),
        namedtype.NamedType("modulus", univ.Integer()),
        namedtype.NamedType("privateExponent", univ.Integer()),
    )


class RSACiphertext(univ.SequenceOf):
    """One INTEGER per encrypted byte, in message order."""
    componentType = univ.Integer()


@dataclasses.dataclass(frozen=True)
class RSAKey:
    """The overall RSA key class implementation.

    Holds the two components shared by the public and private key and the PEM armour both use. Subclasses pick
    their PEM label and supply the DER body. Instances are immutable.

    Attributes:
        mod: The modulus of the keypair.
        expo: The exponent of the key, whether private or public.
    """
    pem_label: ClassVar[str] = ""
    mod: int
    expo: int

    def c_rsa(self, message: int) -> int:
        """Performs core RSA operation on a single representative.

        Args:
            message: The integer to exponentiate.

        Returns:
            `message**expo % mod`

        Raises:
            InvalidArgumentsError: If `message` is negative or the key is malformed.
        """
        return numtheory.mod_pow(message, self.expo, self.mod)

    def to_der(self) -> bytes:
        raise NotImplementedError

    @classmethod
    def from_der(cls, payload: bytes) -> "RSAKey":
        raise NotImplementedError

    def export(self, file: pathlib.Path) -> None:
        """Writes the key to `file` as PEM armoured DER.

        Nothing is written unless asked for, the key pair otherwise only lives as long as the caller keeps it.

        Args:
            file: The file to export the key to.
        """
        body = textwrap.wrap(base64.b64encode(self.to_der()).decode("ascii"), 64)
        armour = [f"-----BEGIN {self.pem_label}-----", *body, f"-----END {self.pem_label}-----"]
        pathlib.Path(file).write_text("\n".join(armour) + "\n", encoding="ascii")

    @classmethod
    def import_key(cls, file: pathlib.Path):
        """Reads a key of this type back from `file`.

        Args:
            file: The file to import the key from.

        Returns:
            The imported key.

        Raises:
            IOError: If the armour is not the one of this key type or is truncated.
        """
        return cls.from_der(unarmour(file, cls.pem_label))


@dataclasses.dataclass(frozen=True)
class PublicKey(RSAKey):
    """Public half of the pair, encrypts bytes. Marshalled as a PKCS1 RSAPublicKey."""
    pem_label: ClassVar[str] = "RSA PUBLIC KEY"

    def encrypt(self, message: bytes) -> list[int]:
        """Encrypt each byte of the message separately.

        Args:
            message: The message to encrypt.

        Returns:
            One ciphertext integer per byte, in the same order.
        """
        return [self.c_rsa(m) for m in message]

    def to_der(self) -> bytes:
        keydata = rfc8017.RSAPublicKey()
        keydata["modulus"] = self.mod
        keydata["publicExponent"] = self.expo
        return encoder.encode(keydata)

    @classmethod
    def from_der(cls, payload: bytes) -> "PublicKey":
        keydata, _ = decoder.decode(payload, asn1Spec=rfc8017.RSAPublicKey())
        pykeyd = localize.encode(keydata)
        return cls(pykeyd["modulus"], pykeyd["publicExponent"])


@dataclasses.dataclass(frozen=True)
class PrivateKey(RSAKey):
    """Private half of the pair, decrypts ciphertext integers back to bytes."""
    pem_label: ClassVar[str] = "TEXTBOOK RSA PRIVATE KEY"

    def decrypt(self, ciphertext: Iterable[int]) -> bytes:
        """Decrypt each ciphertext integer back to a byte.

        The result of each exponentiation is truncated to its lowest byte.

        Args:
            ciphertext: Integers produced by the matching public key.

        Returns:
            The decrypted message.
        """
        return bytes(self.c_rsa(c) & 0xFF for c in ciphertext)

    def to_der(self) -> bytes:
        keydata = TextbookPrivateKey()
        keydata["version"] = 0
        keydata["modulus"] = self.mod
        keydata["privateExponent"] = self.expo
        return encoder.encode(keydata)

    @classmethod
    def from_der(cls, payload: bytes) -> "PrivateKey":
        """Decodes a `TextbookPrivateKey` structure.

        Raises:
            IOError: If the structure version is unknown.
        """
        keydata, _ = decoder.decode(payload, asn1Spec=TextbookPrivateKey())
        if keydata["version"] != 0:
            raise IOError("Unsupported version of textbook private key.")
        pykeyd = localize.encode(keydata)
        return cls(pykeyd["modulus"], pykeyd["privateExponent"])


def unarmour(file: pathlib.Path, label: str) -> bytes:
    """Strips the PEM armour with the given label off a file and decodes the body.

    Args:
        file: The PEM file.
        label: Expected label, e.g. "RSA PUBLIC KEY".

    Returns:
        The DER payload.

    Raises:
        IOError: If the first line is not the expected header or the footer is missing.
    """
    header, footer = f"-----BEGIN {label}-----", f"-----END {label}-----"
    lines = [line.strip() for line in pathlib.Path(file).read_text(encoding="ascii").splitlines() if line.strip()]
    if not lines or lines[0] != header:
        raise IOError(f"{file} does not start with {header}")
    if footer not in lines:
        raise IOError(f"{file} does not contain footer: {footer}")
    return base64.b64decode("".join(lines[1:lines.index(footer)]))


def generate_keys(primes: Sequence[int] | None = None) -> tuple[PublicKey, PrivateKey]:
    """Generates a matching public and private key.

    Args:
        primes: The prime table to draw from. Defaults to the bundled table.

    Returns:
        The (public, private) key pair.
    """
    (n, pub), (_, d) = keygen.generate_key_pair(primes)
    return PublicKey(n, pub), PrivateKey(n, d)


def encrypt(message: bytes, key: PublicKey) -> list[int]:
    """Encrypts `message` under `key`, see `PublicKey.encrypt`."""
    return key.encrypt(message)


def decrypt(ciphertext: Iterable[int], key: PrivateKey) -> bytes:
    """Decrypts `ciphertext` with `key`, see `PrivateKey.decrypt`."""
    return key.decrypt(ciphertext)


def encode_ciphertext(ciphertext: Iterable[int]) -> str:
    """Marshals a ciphertext into a base64 encoded DER SEQUENCE OF INTEGER.

    Args:
        ciphertext: The ciphertext integers.

    Returns:
        Base64 encoded ciphertext.
    """
    pld = RSACiphertext()
    pld.clear()
    pld.extend(ciphertext)
    return base64.b64encode(encoder.encode(pld)).decode("ascii")


def decode_ciphertext(payload: str) -> list[int]:
    """Unmarshals a ciphertext produced by `encode_ciphertext`.

    Args:
        payload: Base64 encoded ciphertext.

    Returns:
        The ciphertext integers.
    """
    pld, _ = decoder.decode(base64.b64decode(payload.encode("ascii")), asn1Spec=RSACiphertext())
    return [int(c) for c in pld]
