# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from lessico.api.schema import parse_import_body
from lessico.app import import_vocabulary, list_vocabulary
from lessico.config import configure_logging, get_server_config
from lessico.domain.importing import (
    CommittedImport,
    DependencyMissingError,
    EntryValidationError,
    Resolution,
    StorageError,
)
from lessico.domain.model import EntryKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_PENDING_CONFLICTS = 3


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage Lessico vocabulary dictionaries")
    subparsers = parser.add_subparsers(dest="command", required=True)
    kinds = [kind.value for kind in EntryKind]

    import_parser = subparsers.add_parser("import", help="Bulk-import entries from a JSON file")
    import_parser.add_argument("kind", choices=kinds, help="Dictionary to import into")
    import_parser.add_argument("file", type=Path, help="JSON file holding the entries")
    import_parser.add_argument(
        "--keep",
        action="append",
        default=[],
        metavar="KEY",
        help="Keep the stored record for KEY (repeatable)",
    )
    import_parser.add_argument(
        "--replace",
        action="append",
        default=[],
        metavar="KEY",
        help="Replace the stored record for KEY (repeatable)",
    )
    bulk = import_parser.add_mutually_exclusive_group()
    bulk.add_argument(
        "--keep-all",
        action="store_true",
        help="Keep the stored record for every colliding key",
    )
    bulk.add_argument(
        "--replace-all",
        action="store_true",
        help="Replace the stored record for every colliding key",
    )

    list_parser = subparsers.add_parser("list", help="Print stored entries as JSON")
    list_parser.add_argument("kind", choices=kinds, help="Dictionary to list")

    serve_parser = subparsers.add_parser("serve", help="Run the admin HTTP API")
    serve_parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Interface to bind (defaults to LESSICO_HOST or 127.0.0.1)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (defaults to LESSICO_PORT or 8000)",
    )

    return parser.parse_args(list(argv))


def _load_import_body(args: argparse.Namespace) -> dict[str, Any]:
    """Read the import file and fold the CLI resolutions into it.

    The file holds either the bare key -> entry map or a request object with
    ``entries`` (or the kind name) and optional ``resolveConflicts``.
    """

    kind = EntryKind(args.kind)
    try:
        document = json.loads(args.file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read {args.file}: {exc}") from exc

    if isinstance(document, dict) and ("entries" in document or kind.value in document):
        body: dict[str, Any] = dict(document)
    else:
        body = {"entries": document}

    resolutions: dict[str, str] = dict(body.get("resolveConflicts") or {})
    entries = body.get("entries", body.get(kind.value))
    if (args.keep_all or args.replace_all) and isinstance(entries, dict):
        blanket = Resolution.KEEP if args.keep_all else Resolution.REPLACE
        resolutions.update(dict.fromkeys(entries, blanket.value))
    resolutions.update(dict.fromkeys(args.keep, Resolution.KEEP.value))
    resolutions.update(dict.fromkeys(args.replace, Resolution.REPLACE.value))
    body["resolveConflicts"] = resolutions
    return body


def _run_import(args: argparse.Namespace) -> int:
    kind = EntryKind(args.kind)
    request = parse_import_body(kind, _load_import_body(args))
    outcome = import_vocabulary(kind, request)
    if isinstance(outcome, CommittedImport):
        log.info(
            "Imported %s: created=%s, updated=%s, kept=%s",
            kind.label,
            outcome.created,
            outcome.updated,
            outcome.skipped,
        )
        return 0

    conflicts = [
        {kind.key_field: conflict.key, "existing": conflict.existing, "new": conflict.new}
        for conflict in outcome.conflicts
    ]
    print(json.dumps({"conflicts": conflicts}, indent=2, ensure_ascii=False))
    log.warning(
        "%s conflicts need a decision; rerun with --keep/--replace KEY or --keep-all/--replace-all",
        len(conflicts),
    )
    return EXIT_PENDING_CONFLICTS


def _run_list(args: argparse.Namespace) -> int:
    kind = EntryKind(args.kind)
    entries = list_vocabulary(kind)
    print(json.dumps({kind.value: entries, "total": len(entries)}, indent=2, ensure_ascii=False))
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn  # noqa: PLC0415

    from lessico.api.main import create_app  # noqa: PLC0415

    server = get_server_config()
    host = args.host or server.host
    port = args.port if args.port is not None else server.port
    log.info("Serving admin API on %s:%s", host, port)
    uvicorn.run(create_app(), host=host, port=port)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        if parsed_args.command == "import":
            exit_code = _run_import(parsed_args)
        elif parsed_args.command == "list":
            exit_code = _run_list(parsed_args)
        elif parsed_args.command == "serve":
            exit_code = _run_serve(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except EntryValidationError as exc:
        for issue in exc.issues:
            log.error(  # noqa: TRY400
                "Invalid entry %s: %s", issue.field or "<root>", issue.message
            )
        sys.exit(2)
    except DependencyMissingError as exc:
        log.error("Missing verbs: %s", ", ".join(exc.missing_keys))  # noqa: TRY400
        sys.exit(2)
    except StorageError as exc:
        log.exception(
            "Import aborted by a storage failure after created=%s, updated=%s",
            exc.created,
            exc.updated,
        )
        sys.exit(1)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
