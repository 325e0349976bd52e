"""
Command-line interface for generating keys, signing and verifying on secp256k1
"""

import argparse
import logging
from typing import Iterable, Optional

from .crypto.ec import AffinePoint
from .crypto.entropy import RandomSourceFailure
from .crypto.secp256k1 import SECP256K1
from .ecdsa import Signature, generate_key_pair, sign_message, verify_signature
from .ser import (
    SerializationError,
    public_key_from_bytes,
    public_key_to_bytes,
    signature_from_bytes,
    signature_to_bytes,
)

logger = logging.getLogger(__name__)

CURVE = SECP256K1
DEMO_MESSAGE = "Hello, world!"


# --- Argument parsing helpers -------------------------------------------------


def _parse_int(value: str) -> int:
    """Parse a decimal or 0x-prefixed hexadecimal integer"""
    text = value.strip().lower()
    try:
        if text.startswith("0x"):
            return int(text, 16)
        return int(text, 10)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Unable to parse integer: {value}") from e


def _parse_hex_bytes(value: str) -> bytes:
    text = "".join(value.split())
    if text.lower().startswith("0x"):
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid hexadecimal bytes: {value}") from e


def _format_int(value: int, as_hex: bool) -> str:
    return f"{value:#x}" if as_hex else str(value)


# --- Command handlers ---------------------------------------------------------


def _print_public_key(public_key: AffinePoint, as_hex: bool) -> None:
    print(f"Public key X: {_format_int(public_key.x, as_hex)}")
    print(f"Public key Y: {_format_int(public_key.y, as_hex)}")
    print(f"Public key: {public_key_to_bytes(public_key, CURVE).hex()}")


def _print_signature(signature: Signature, as_hex: bool) -> None:
    print(f"Signature R: {_format_int(signature.r, as_hex)}")
    print(f"Signature S: {_format_int(signature.s, as_hex)}")
    print(f"Signature: {signature_to_bytes(signature, CURVE).hex()}")


def _cmd_demo(args: argparse.Namespace) -> int:
    key_pair = generate_key_pair(CURVE)
    print(f"Private key: {_format_int(key_pair.private_key, args.hex)}")
    _print_public_key(key_pair.public_key, args.hex)

    message = DEMO_MESSAGE.encode()
    print(f"Message: {DEMO_MESSAGE}")
    signature = sign_message(message, key_pair.private_key, CURVE)
    _print_signature(signature, args.hex)

    valid = verify_signature(message, signature, key_pair.public_key, CURVE)
    print(f"Signature valid: {valid}")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    key_pair = generate_key_pair(CURVE)
    print(f"Private key: {_format_int(key_pair.private_key, args.hex)}")
    _print_public_key(key_pair.public_key, args.hex)
    return 0


def _cmd_sign(args: argparse.Namespace) -> int:
    signature = sign_message(args.message.encode(), args.private_key, CURVE)
    _print_signature(signature, args.hex)
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    if args.public_key is not None:
        if args.public_key_y is not None:
            raise ValueError("--public-key cannot be combined with --public-key-y")
        public_key = public_key_from_bytes(args.public_key, CURVE)
    elif args.public_key_x is not None and args.public_key_y is not None:
        public_key = AffinePoint(args.public_key_x, args.public_key_y)
    else:
        raise ValueError("Provide --public-key or both --public-key-x and --public-key-y")

    if args.signature is not None:
        if args.signature_s is not None:
            raise ValueError("--signature cannot be combined with --signature-s")
        signature = signature_from_bytes(args.signature, CURVE)
    elif args.signature_r is not None and args.signature_s is not None:
        signature = Signature(args.signature_r, args.signature_s)
    else:
        raise ValueError("Provide --signature or both --signature-r and --signature-s")

    valid = verify_signature(args.message.encode(), signature, public_key, CURVE)
    print("VALID" if valid else "INVALID")
    return 0 if valid else 1


# --- CLI ----------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-x", "--hex",
        action="store_true",
        help="Display keys and signatures in hexadecimal format.",
    )
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    parser = argparse.ArgumentParser(
        prog="pyecdsa",
        description="Generate key pairs, sign messages and verify signatures (secp256k1).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    demo_parser = subparsers.add_parser(
        "demo", parents=[common], help="Run a demo of the ECDSA implementation."
    )
    demo_parser.set_defaults(func=_cmd_demo, command_parser=demo_parser)

    generate_parser = subparsers.add_parser(
        "generate", parents=[common], help="Generate a new key pair."
    )
    generate_parser.set_defaults(func=_cmd_generate, command_parser=generate_parser)

    sign_parser = subparsers.add_parser("sign", parents=[common], help="Sign a message.")
    sign_parser.add_argument(
        "--private-key", required=True, type=_parse_int,
        help="The private key to use for signing (hex or decimal).",
    )
    sign_parser.add_argument("-m", "--message", required=True, help="The message to sign.")
    sign_parser.set_defaults(func=_cmd_sign, command_parser=sign_parser)

    verify_parser = subparsers.add_parser(
        "verify", parents=[common], help="Verify a signed message."
    )
    verify_parser.add_argument("-m", "--message", required=True, help="The signed message.")
    public_key_group = verify_parser.add_mutually_exclusive_group()
    public_key_group.add_argument(
        "--public-key-x", type=_parse_int, help="Public key X coordinate (hex or decimal)."
    )
    public_key_group.add_argument(
        "--public-key", type=_parse_hex_bytes, help="Concatenated x||y public key hex."
    )
    verify_parser.add_argument(
        "--public-key-y", type=_parse_int, help="Public key Y coordinate (hex or decimal)."
    )
    signature_group = verify_parser.add_mutually_exclusive_group()
    signature_group.add_argument(
        "--signature-r", type=_parse_int, help="Signature R component (hex or decimal)."
    )
    signature_group.add_argument(
        "--signature", type=_parse_hex_bytes, help="Concatenated r||s signature hex."
    )
    verify_parser.add_argument(
        "--signature-s", type=_parse_int, help="Signature S component (hex or decimal)."
    )
    verify_parser.set_defaults(func=_cmd_verify, command_parser=verify_parser)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (ValueError, SerializationError) as e:
        args.command_parser.error(str(e))
    except RandomSourceFailure as e:
        logger.error("Random source failure: %s", e)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
