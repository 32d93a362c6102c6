"""
Shielded pool command-line tools.

Compute the values a prover or relayer needs to agree on with the pool.

Usage::

    python -m anchor_spec zeroes --levels 30
    python -m anchor_spec root --levels 30 0x01... 0x02...
    python -m anchor_spec ext-data-hash --recipient 0x.. --relayer 0x.. --ext-amount -10 --fee 1
    python -m anchor_spec public-amount --ext-amount -10 --fee 0
    python -m anchor_spec chain-id-type --chain-id 1 --chain-type substrate

Options:
    -v, --verbose   Enable debug logging
    --no-color      Disable colored logging output
"""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from pydantic import ValidationError as ModelValidationError

from anchor_spec.subspecs.linkable import ChainType, chain_id_type
from anchor_spec.subspecs.merkle import MerkleAccumulator, ZeroTable
from anchor_spec.subspecs.poseidon import PoseidonHasher
from anchor_spec.subspecs.transaction import ExtData, ext_data_hash, public_amount
from anchor_spec.types import Bytes32, PoolError, Uint128

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the CLI with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def _hex_bytes(value: str) -> bytes:
    """argparse type: hex string with or without 0x."""
    try:
        return bytes.fromhex(value.removeprefix("0x"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}") from e


def _element(value: str) -> Bytes32:
    """argparse type: 32-byte hex element."""
    data = _hex_bytes(value)
    if len(data) != 32:
        raise argparse.ArgumentTypeError(f"expected 32 bytes, got {len(data)}")
    return Bytes32(data)


def _chain_type(value: str) -> ChainType:
    """argparse type: chain type name, case-insensitive, dashes allowed."""
    try:
        return ChainType[value.upper().replace("-", "_")]
    except KeyError as e:
        names = ", ".join(t.name.lower() for t in ChainType)
        raise argparse.ArgumentTypeError(f"unknown chain type {value!r} ({names})") from e


# =================================================================
# Sub-commands
# =================================================================


def cmd_zeroes(args: argparse.Namespace) -> None:
    """Print the empty-subtree hash of every level."""
    table = ZeroTable(PoseidonHasher(), args.levels)
    for level, value in enumerate(table):
        print(f"{level:3d} 0x{value.hex()}")


def cmd_root(args: argparse.Namespace) -> None:
    """Insert leaves into a fresh tree and print the resulting root."""
    tree = MerkleAccumulator(args.levels, PoseidonHasher())
    if args.leaves:
        tree.insert_many(args.leaves)
    logger.debug("Inserted %d leaves into a %d-level tree", tree.next_index, args.levels)
    print(f"0x{tree.get_last_root().hex()}")


def cmd_ext_data_hash(args: argparse.Namespace) -> None:
    """Print the binding hash of the given ext data."""
    ext_data = ExtData(
        recipient=args.recipient,
        relayer=args.relayer,
        ext_amount=args.ext_amount,
        fee=Uint128(args.fee),
        encrypted_output1=args.encrypted_output1,
        encrypted_output2=args.encrypted_output2,
    )
    print(f"0x{ext_data_hash(ext_data).hex()}")


def cmd_public_amount(args: argparse.Namespace) -> None:
    """Print the field encoding of `ext_amount - fee`."""
    print(f"0x{public_amount(args.ext_amount, args.fee).hex()}")


def cmd_chain_id_type(args: argparse.Namespace) -> None:
    """Print the 8-byte typed chain id and its integer value."""
    encoded = chain_id_type(args.chain_id, args.chain_type)
    print(f"0x{encoded.hex()} {encoded.to_int()}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every sub-command."""
    parser = argparse.ArgumentParser(
        prog="anchor_spec",
        description="Shielded pool tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    zeroes = commands.add_parser("zeroes", help="Print empty-subtree hashes")
    zeroes.add_argument("--levels", type=int, default=30, help="Tree depth (default: 30)")
    zeroes.set_defaults(handler=cmd_zeroes)

    root = commands.add_parser("root", help="Compute a tree root from leaves")
    root.add_argument("--levels", type=int, default=30, help="Tree depth (default: 30)")
    root.add_argument("leaves", nargs="*", type=_element, help="32-byte hex leaves")
    root.set_defaults(handler=cmd_root)

    ext = commands.add_parser("ext-data-hash", help="Hash transaction ext data")
    ext.add_argument("--recipient", type=_hex_bytes, required=True)
    ext.add_argument("--relayer", type=_hex_bytes, required=True)
    ext.add_argument("--ext-amount", type=int, required=True)
    ext.add_argument("--fee", type=int, default=0)
    ext.add_argument("--encrypted-output1", type=_hex_bytes, default=b"")
    ext.add_argument("--encrypted-output2", type=_hex_bytes, default=b"")
    ext.set_defaults(handler=cmd_ext_data_hash)

    amount = commands.add_parser("public-amount", help="Encode ext_amount - fee")
    amount.add_argument("--ext-amount", type=int, required=True)
    amount.add_argument("--fee", type=int, default=0)
    amount.set_defaults(handler=cmd_public_amount)

    chain = commands.add_parser("chain-id-type", help="Encode a typed chain id")
    chain.add_argument("--chain-id", type=int, required=True)
    chain.add_argument("--chain-type", type=_chain_type, default=ChainType.SUBSTRATE)
    chain.set_defaults(handler=cmd_chain_id_type)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        args.handler(args)
    except (PoolError, ModelValidationError, ValueError, OverflowError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
