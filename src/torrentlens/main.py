"""
torrentlens command line.

    torrentlens serve [--host H] [--port P] [--storage-dir DIR]
    torrentlens inspect FILE
"""
import argparse
import json
import sys
from pathlib import Path

from .config import Settings
from .exceptions import ConfigurationError
from .logging_config import config_logging
from .torrent import Success, inspect_torrent
from .web import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="torrentlens",
        description="Decode and validate BitTorrent metainfo files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s inspect ubuntu.torrent
  %(prog)s serve --port 8080 --storage-dir uploads/
        """,
    )
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    parser.add_argument("--log-file", type=Path, help="Also write JSON logs to this file")

    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the upload web server")
    serve.add_argument("--host", help="Address to bind (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Port to bind (default: 3000)")
    serve.add_argument("--storage-dir", type=Path, help="Where accepted uploads are saved (default: /tmp)")
    serve.add_argument("--max-upload-size", type=int, help="Largest accepted request body, in bytes")

    inspect = commands.add_parser("inspect", help="Print the JSON response for a .torrent file")
    inspect.add_argument("torrent", type=Path, help="Path to the .torrent file")
    inspect.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")

    return parser


def inspect_file(path: Path, indent: int = 2) -> int:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return 1

    response = inspect_torrent(raw)
    print(json.dumps(response.as_dict(), indent=indent, ensure_ascii=False))
    return 0 if isinstance(response, Success) else 1


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env().override(
            log_level=args.log_level,
            log_file=args.log_file,
            host=getattr(args, "host", None),
            port=getattr(args, "port", None),
            storage_dir=getattr(args, "storage_dir", None),
            max_upload_size=getattr(args, "max_upload_size", None),
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    config_logging(settings.log_level, settings.log_file)

    if args.command == "inspect":
        return inspect_file(args.torrent, args.indent)

    run(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
