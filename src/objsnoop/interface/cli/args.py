from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

from objsnoop.domain.constants import APP_NAME, CURRENT_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the objsnoop CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Inspect the properties and collections of an object document.",
    )

    # --- Source Selection ---
    p.add_argument(
        "source",
        nargs="?",
        default=None,
        help="Path or http(s) URL of a JSON object document.",
    )
    p.add_argument(
        "--root",
        dest="root_key",
        default=None,
        help="Key of the object to inspect (defaults to the document root).",
    )

    # --- Walk Limits ---
    p.add_argument(
        "--depth",
        dest="expand_depth",
        type=int,
        default=None,
        help="Number of tree levels to expand below the root.",
    )
    p.add_argument(
        "--max-items",
        dest="max_expand_items",
        type=int,
        default=None,
        help="Maximum children created per collection.",
    )
    p.add_argument(
        "--max-string",
        dest="max_string_length",
        type=int,
        default=None,
        help="Truncate string values beyond this length.",
    )
    p.add_argument(
        "--no-properties",
        action="store_true",
        help="Print only the tree, without the root property listing.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective limits as the new defaults.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"{APP_NAME} {CURRENT_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "expand_depth": args.expand_depth,
        "max_expand_items": args.max_expand_items,
        "max_string_length": args.max_string_length,
    }

    if args.no_properties:
        overrides["show_properties"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
