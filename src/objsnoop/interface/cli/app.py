from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: configuration resolution (defaults,
persistent storage and CLI overrides), logging bootstrap, document loading,
scoped introspection of the root object and rendering of the result.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from objsnoop.core.introspector import Introspector
from objsnoop.core.tree.render import render_properties, render_tree
from objsnoop.core.validator import validate_config
from objsnoop.domain.config import get_default_config, load_config, save_config, settings_from_config
from objsnoop.domain.errors import ScopeError
from objsnoop.domain.tree_models import Node
from objsnoop.infra.fs import is_remote_source, normalize_path
from objsnoop.infra.logging import configure_logging, get_logger, logging_config_from, store_context
from objsnoop.infra.stores import DocumentStore, load_document_store
from objsnoop.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve base configuration (Default vs Persistent state)
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    # 3. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 4. Logging bootstrap (console stderr, optional file)
    configure_logging(logging_config_from(clean_conf, args.log_file))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        if not save_config(clean_conf):
            _fail("Could not save the configuration.")
            return 1
        print("Configuration saved.", file=sys.stderr)
        if not args.source:
            return 0

    # 5. Pre-flight source verification
    if not args.source:
        _fail("No source document given.")
        return 2

    source = args.source if is_remote_source(args.source) else normalize_path(args.source, "")
    if not is_remote_source(source) and not os.path.isfile(source):
        _fail(f"Source document does not exist: {source}")
        return 2

    # 6. Load and inspect
    try:
        store = load_document_store(source)
        with store_context(store.store_id):
            return _inspect(store, args.root_key, clean_conf)
    except KeyboardInterrupt:
        logger.warning("Inspection interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except (OSError, ValueError) as e:
        _fail(f"Could not load document: {e}")
        return 1
    except Exception as e:
        logger.critical(f"Inspection failed: {e}", exc_info=True)
        print(f"ERROR: Inspection failed: {e}", file=sys.stderr)
        return 1

# -----------------------------------------------------------------------------
# INSPECTION
# -----------------------------------------------------------------------------

def _inspect(store: DocumentStore, root_key: Optional[str], conf: Dict[str, Any]) -> int:
    """Open a scope on the store, build the tree and print it."""
    handle = store.handle(root_key) if root_key else store.root_handle()
    if handle.is_null:
        _fail("Document declares no root object; use --root.")
        return 2

    introspector = Introspector(settings=settings_from_config(conf))
    logger.info(f"Inspecting '{handle.key}' in document '{store.name}'")

    with store.open() as scope:
        try:
            root = introspector.introspect(handle, scope)
        except ScopeError as e:
            _fail(f"Root '{handle.key}' cannot be resolved: {e}")
            return 2

        introspector.expand_to_depth(root, scope, int(conf["expand_depth"]))
        _print_report(root, bool(conf["show_properties"]))

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known, non-None override values into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "expand_depth", "max_expand_items", "max_string_length",
        "show_properties", "log_level",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_report(root: Node, show_properties: bool) -> None:
    """Print the property listing of the root followed by its tree."""
    if show_properties:
        print(f"Properties of {root.label}:")
        for line in render_properties(root.properties or []):
            print(f"  {line}")
        print("")

    for line in render_tree(root):
        print(line)


def _fail(msg: str) -> None:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
