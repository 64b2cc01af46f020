"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m allowtree_cli root leaves.txt [--text] [--json]
    python -m allowtree_cli proof leaves.txt (--index N | --leaf HEX) [--json]
    python -m allowtree_cli index leaves.txt --leaf HEX [--json]
    python -m allowtree_cli proofs leaves.txt [--workers N] [--json]
    python -m allowtree_cli verify --root HEX --leaf HEX [--proof HEX ...] [--json]
    python -m allowtree_cli config --show

Environment Variables:
    ALLOWTREE_PROOF_WORKERS     Worker threads for batch proofs (default: executor default)
    ALLOWTREE_PROOF_CHUNK_SIZE  Leaves per batch proof task (default: 256)
    ALLOWTREE_LOG_LEVEL         Log level (default: INFO)
    ALLOWTREE_LOG_FILE          Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from allowtree import __version__
from allowtree.config.runtime import RuntimeConfig, set_default_config
from allowtree.schemas.errors import AllowTreeException
from allowtree_cli.commands import tree, verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_leaf_file_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "leaves",
        type=str,
        help="Path to a leaf file (one hex leaf per line, 0x optional)",
    )
    _add_common_args(parser)


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--text",
        action="store_true",
        default=False,
        help="Treat leaves as UTF-8 text instead of hex (every line is a leaf, no comments)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on error",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="allowtree",
        description="allowtree CLI - Build allow-list Merkle trees, produce and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the Merkle root of a leaf file",
    )
    _add_leaf_file_args(root_parser)
    root_parser.set_defaults(func=tree.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the inclusion proof of one leaf",
    )
    _add_leaf_file_args(proof_parser)
    target = proof_parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--index", "-i",
        type=int,
        default=None,
        help="Position of the leaf in the file",
    )
    target.add_argument(
        "--leaf", "-l",
        type=str,
        default=None,
        help="The leaf itself (hex, or text with --text)",
    )
    proof_parser.set_defaults(func=tree.proof_cmd)

    # --- index command ---
    index_parser = subparsers.add_parser(
        "index",
        help="Print the position of a leaf (exit 2 if absent)",
    )
    _add_leaf_file_args(index_parser)
    index_parser.add_argument(
        "--leaf", "-l",
        type=str,
        required=True,
        help="The leaf to look up (hex, or text with --text)",
    )
    index_parser.set_defaults(func=tree.index_cmd)

    # --- proofs command ---
    proofs_parser = subparsers.add_parser(
        "proofs",
        help="Print the proof of every leaf",
    )
    _add_leaf_file_args(proofs_parser)
    proofs_parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Worker threads (default: from config)",
    )
    proofs_parser.set_defaults(func=tree.proofs_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against a root",
        description="Verify a leaf against a root and proof without the leaf list.",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        required=True,
        help="Expected Merkle root (hex)",
    )
    verify_parser.add_argument(
        "--leaf", "-l",
        type=str,
        required=True,
        help="The unhashed leaf (hex, or text with --text)",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        nargs="*",
        default=[],
        help="Sibling digests, bottom to top (hex)",
    )
    _add_common_args(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show effective configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=True,
        help="Show current configuration (default)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    print(json.dumps(args.runtime_config.to_dict(), indent=2))
    return EXIT_SUCCESS


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.
    """
    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        config = RuntimeConfig()
    return config.with_env_overrides()


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=not found / verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (AllowTreeException, FileNotFoundError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    set_default_config(config)
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (AllowTreeException, FileNotFoundError) as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
