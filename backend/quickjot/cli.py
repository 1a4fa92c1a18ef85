import argparse
import logging
import sys
from typing import Optional, Sequence

from quickjot.client import NotesClient
from quickjot.config import Settings, configure_logging
from quickjot.errors import AllocationExhausted, InvalidInput, NoteError, NotFound

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quickjot", description="Publish, read and edit short notes.")
    parser.add_argument("--api-url", default=None, help="Notes API base URL (default: $QUICKJOT_API_URL)")
    sub = parser.add_subparsers(dest="command", required=True)

    publish = sub.add_parser("publish", help="Publish a new note and print its ID")
    publish.add_argument("content")

    get = sub.add_parser("get", help="Print a note")
    get.add_argument("note_id")

    edit = sub.add_parser("edit", help="Replace the content of a note")
    edit.add_argument("note_id")
    edit.add_argument("content")

    serve = sub.add_parser("serve", help="Run the notes API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def _serve(settings: Settings, host: str, port: int) -> int:
    import uvicorn

    from quickjot.main import create_app

    uvicorn.run(create_app(settings), host=host, port=port)
    return 0


def _run(args: argparse.Namespace, settings: Settings) -> int:
    if args.command == "serve":
        return _serve(settings, args.host, args.port)

    with NotesClient(
        base_url=args.api_url or settings.api_url,
        timeout=settings.request_timeout,
        max_attempts=settings.alloc_max_attempts,
    ) as client:
        if args.command == "publish":
            note = client.publish(args.content)
            print(note.id)
        elif args.command == "get":
            note = client.get(args.note_id)
            print(f"id: {note.id}")
            print(f"created: {note.created_at.isoformat() if note.created_at else '-'}")
            print(f"last edited: {note.last_edited_at.isoformat() if note.last_edited_at else '-'}")
            print()
            print(note.content)
        elif args.command == "edit":
            note = client.update(args.note_id, args.content)
            print(f"Note {note.id} updated.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    try:
        return _run(args, settings)
    except InvalidInput as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
    except NotFound as exc:
        print(str(exc), file=sys.stderr)
    except AllocationExhausted:
        print("Could not generate unique ID. Please try again.", file=sys.stderr)
    except NoteError as exc:
        logger.debug("Request failed", exc_info=True)
        print(f"Something went wrong on our side: {exc}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
