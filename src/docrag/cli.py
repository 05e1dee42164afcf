"""Command-line entry point.

    docrag setup [--documents-dir DIR]
    docrag ask "What is in the document?"
    docrag serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import argparse
import logging
import sys

from docrag.config import configure_logging
from docrag.service import SETUP_FAILURE_MESSAGE, RAGService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docrag", description="Local-document RAG backend.")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    setup = sub.add_parser("setup", help="Create the index if needed and ingest documents")
    setup.add_argument("--documents-dir", default=None, help="Override DOCUMENTS_DIR")

    ask = sub.add_parser("ask", help="Answer a question from the index")
    ask.add_argument("question")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: list[str] | None = None, service: RAGService | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("docrag.serving.app:app", host=args.host, port=args.port)
        return 0

    service = service or RAGService()
    if args.command == "setup":
        try:
            report = service.setup(args.documents_dir)
        except Exception:
            logger.exception(SETUP_FAILURE_MESSAGE)
            return 1
        print(report.summary())
        return 0

    answer = service.read(args.question)
    print(answer if answer is not None else "No relevant documents found.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
