"""The Command Line Interface for the utility, with interactive prompts for anything left out.

Every subcommand can run fully from flags. When a key path, message or ciphertext is missing the user is asked for
it, unless `--non-interactive` is given, in which case the missing value is an error.

Typical usage example:

    textbookrsa
    OR
    python -m textbookrsa -n keygen -p key.pub -P key
    python -m textbookrsa -n encrypt -p key.pub -m "Hello world"
    python -m textbookrsa -n decrypt -P key -c MIIB...
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import typing

from pyasn1 import error

import textbookrsa

COMMANDS = {
    "keygen": "Generate a key pair from the bundled prime table.",
    "encrypt": "Encrypt a message byte by byte with a public key.",
    "decrypt": "Decrypt a ciphertext with a private key.",
}
ENCODINGS = ["utf-8", "utf-16", "ascii"]


class Prompter:
    """Asks the user for missing values, or refuses to when running non-interactively.

    Attributes:
        interactive: Whether prompting is allowed.
        out: Where user facing chatter goes.
    """

    def __init__(self, interactive: bool, out: typing.Callable[[str], None] = print) -> None:
        self.interactive = interactive
        self.out = out

    def say(self, text: str) -> None:
        """Chatter, dropped in non-interactive mode so stdout only carries results."""
        if self.interactive:
            self.out(text)

    def ask(self, name: str, question: str, convert: typing.Callable[[str], typing.Any] = str) -> typing.Any:
        """Asks until `convert` accepts the answer.

        Raises:
            IOError: If prompting is not allowed.
        """
        if not self.interactive:
            raise IOError(f"Argument {name} is missing and non-interactive mode is active.")
        while True:
            answer = input(f"{question}: ").strip()
            if not answer:
                self.out("Please provide a value.")
                continue
            try:
                return convert(answer)
            except ValueError as exc:
                self.out(f"Not usable: {exc}")

    def confirm(self, question: str) -> bool:
        """Yes/no question defaulting to no, always no when non-interactive."""
        if not self.interactive:
            return False
        return input(f"{question} [y/N]: ").strip().lower() in ("y", "yes")


def existing_file(text: str) -> pathlib.Path:
    path = pathlib.Path(text)
    if not path.is_file():
        raise ValueError(f"{path} is not a file")
    return path


def parse_ciphertext(text: str) -> list[int]:
    """Decodes a base64 ciphertext, reporting any malformation as ValueError."""
    try:
        return textbookrsa.decode_ciphertext(text)
    except error.PyAsn1Error as exc:
        raise ValueError(f"malformed ciphertext ({exc})") from exc


corep = argparse.ArgumentParser(prog="textbookrsa", description="Textbook (unpadded) RSA over a closed prime table.")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {textbookrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Fail instead of prompting for input")
corep.add_argument("--verbose", "-V", action="store_true", help="Log debug information to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", help=COMMANDS["keygen"])
keygen.add_argument("--public-key", "-p", type=pathlib.Path, help="Destination of the public key.")
keygen.add_argument("--private-key", "-P", type=pathlib.Path, help="Destination of the private key.")
keygen.add_argument("--overwrite", "-o", action="store_true", help="Replace existing key files.")

encrypt = commands.add_parser("encrypt", help=COMMANDS["encrypt"])
encrypt.add_argument("--public-key", "-p", type=pathlib.Path, help="Public key file.")
plaintext = encrypt.add_mutually_exclusive_group()
plaintext.add_argument("--message", "-m", help="Message text.")
plaintext.add_argument("--message-file", "-f", type=pathlib.Path, help="File holding the message text.")
encrypt.add_argument("--encoding", "-e", choices=ENCODINGS, default="utf-8", help="Message encoding.")

decrypt = commands.add_parser("decrypt", help=COMMANDS["decrypt"])
decrypt.add_argument("--private-key", "-P", type=pathlib.Path, help="Private key file.")
ciphertext = decrypt.add_mutually_exclusive_group()
ciphertext.add_argument("--ciphertext", "-c", help="Base64 ciphertext as printed by encrypt.")
ciphertext.add_argument("--ciphertext-file", "-f", type=pathlib.Path, help="File holding the base64 ciphertext.")
decrypt.add_argument("--encoding", "-e", choices=ENCODINGS, default="utf-8", help="Encoding of the cleartext.")


def run_keygen(args: argparse.Namespace, prompter: Prompter) -> None:
    pub_path = args.public_key or prompter.ask("public_key", "Write the public key to", pathlib.Path)
    priv_path = args.private_key or prompter.ask("private_key", "Write the private key to", pathlib.Path)
    taken = [str(p) for p in (pub_path, priv_path) if p.exists()]
    if taken and not args.overwrite and not prompter.confirm(f"Overwrite {', '.join(taken)}?"):
        print("Destination private or public key already exists!")
        return
    pub, priv = textbookrsa.generate_keys()
    priv.export(priv_path)
    pub.export(pub_path)
    prompter.say(f"Key pair generated, modulus {pub.mod}.")


def run_encrypt(args: argparse.Namespace, prompter: Prompter) -> None:
    pub_path = args.public_key or prompter.ask("public_key", "Public key file", existing_file)
    pub = textbookrsa.PublicKey.import_key(pub_path)
    if args.message is not None:
        message = args.message
    elif args.message_file is not None:
        message = args.message_file.read_text(encoding=args.encoding)
    else:
        message = prompter.ask("message", "Message to encrypt")
    prompter.say("Ciphertext:")
    print(textbookrsa.encode_ciphertext(textbookrsa.encrypt(message.encode(args.encoding), pub)))


def run_decrypt(args: argparse.Namespace, prompter: Prompter) -> None:
    priv_path = args.private_key or prompter.ask("private_key", "Private key file", existing_file)
    priv = textbookrsa.PrivateKey.import_key(priv_path)
    if args.ciphertext is not None:
        ciph = parse_ciphertext(args.ciphertext.strip())
    elif args.ciphertext_file is not None:
        ciph = parse_ciphertext(args.ciphertext_file.read_text(encoding="ascii").strip())
    else:
        ciph = prompter.ask("ciphertext", "Ciphertext (base64)", parse_ciphertext)
    prompter.say("Cleartext:")
    print(textbookrsa.decrypt(ciph, priv).decode(args.encoding))


def choose_command(prompter: Prompter) -> str:
    for name, description in COMMANDS.items():
        prompter.say(f"{name} - {description}")

    def known(answer: str) -> str:
        if answer not in COMMANDS:
            raise ValueError(f"choose one of {', '.join(COMMANDS)}")
        return answer

    return prompter.ask("subcommand", "Subcommand", known)


def main(argv: list[str] | None = None):
    """Parses the command line, fills the gaps interactively and runs the subcommand."""
    args = corep.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    prompter = Prompter(not args.non_interactive)
    prompter.say("Welcome to Textbook RSA! Unpadded RSA is unsecure, please use with care.\n")
    if not args.subcommand:
        args.subcommand = choose_command(prompter)
        # The subcommand parser never ran, so its defaults are still missing.
        commands.choices[args.subcommand].parse_args([], namespace=args)
    match args.subcommand:
        case "keygen":
            run_keygen(args, prompter)
        case "encrypt":
            run_encrypt(args, prompter)
        case "decrypt":
            run_decrypt(args, prompter)
    prompter.say("Goodbye!")


if __name__ == "__main__":
    main()
