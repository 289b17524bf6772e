import argparse
import asyncio
import contextlib
import dataclasses
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from dealbrief.config.settings import Settings
from dealbrief.extraction.events import EventKind, ExtractionEvent, QueueObserver
from dealbrief.generation.exceptions import GenerationError
from dealbrief.ingestion.file_loader import FileLoader
from dealbrief.ingestion.models import DocumentStatus, UploadedDocument
from dealbrief.logging.logger import Log
from dealbrief.search.context import DEFAULT_ANSWER_STYLES, CustomerPersona, MeetingContext
from dealbrief.search.exceptions import SearchError
from dealbrief.session import Session, build_session
from dealbrief.streaming.exceptions import StreamParseError

_ANSWER_FAILURES = (SearchError, StreamParseError, GenerationError)


def _log_event(event: ExtractionEvent) -> None:
    if event.kind is EventKind.PROGRESS:
        if event.value:
            Log.info(f"{event.document_name}: recognition {event.value}%")
        return
    Log.info(f"{event.document_name}: recognition {'started' if event.value else 'finished'}")


async def _report(observer: QueueObserver) -> None:
    while True:
        _log_event(await observer.queue.get())


def _context_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    group = parser.add_argument_group("meeting context")
    group.add_argument("--seller-company", default="")
    group.add_argument("--seller-names", default="")
    group.add_argument("--client-company", default="")
    group.add_argument("--client-names", default="")
    group.add_argument("--products", default="", help="Target products or services.")
    group.add_argument("--domain", default="", help="Product domain.")
    group.add_argument("--focus", default="", help="Primary meeting focus.")
    group.add_argument(
        "--persona",
        choices=[p.value for p in CustomerPersona],
        default=CustomerPersona.BALANCED.value,
    )
    group.add_argument(
        "--style",
        action="append",
        dest="styles",
        help="Required answer section; repeat for several. Defaults to the standard set.",
    )
    group.add_argument("--strategy", default="", help="Executive snapshot of the deal strategy.")
    group.add_argument("--keyword", action="append", dest="keywords", default=[])
    return parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dealbrief",
        description="Ingest sales documents and ask grounded questions about them.",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    context = _context_parser()

    ingest = commands.add_parser("ingest", help="Extract text from files and report status.")
    ingest.add_argument("files", nargs="+", type=Path)

    ask = commands.add_parser(
        "ask", parents=[context], help="Ingest files, then answer a question about them."
    )
    ask.add_argument("question")
    ask.add_argument("files", nargs="+", type=Path)

    suggest = commands.add_parser(
        "suggest", parents=[context], help="Ingest files, then suggest questions to ask."
    )
    suggest.add_argument("files", nargs="+", type=Path)

    analyze = commands.add_parser(
        "analyze", parents=[context], help="Ingest files, then print the strategic analysis."
    )
    analyze.add_argument("files", nargs="+", type=Path)
    analyze.add_argument(
        "--explain",
        metavar="QUESTION",
        help="Also explain the sales strategy behind QUESTION for the analysed buyer.",
    )
    return parser


def context_from_args(args: argparse.Namespace) -> MeetingContext:
    if not hasattr(args, "persona"):
        return MeetingContext()
    return MeetingContext(
        seller_company=args.seller_company,
        seller_names=args.seller_names,
        client_company=args.client_company,
        client_names=args.client_names,
        target_products=args.products,
        product_domain=args.domain,
        meeting_focus=args.focus,
        persona=CustomerPersona(args.persona),
        answer_styles=tuple(args.styles) if args.styles else DEFAULT_ANSWER_STYLES,
        executive_snapshot=args.strategy,
        strategic_keywords=tuple(args.keywords),
    )


def _load(paths: Sequence[Path]) -> list[UploadedDocument]:
    loader = FileLoader()
    documents: list[UploadedDocument] = []
    for path in paths:
        try:
            documents.append(loader.load(path))
        except FileNotFoundError as exc:
            Log.error(str(exc))
    return documents


async def _ingest_ready(session: Session, paths: Sequence[Path]) -> bool:
    documents = await session.ingest(_load(paths))
    failed = [d.name for d in documents if d.status is DocumentStatus.ERROR]
    if failed:
        Log.warning(f"{len(failed)} document(s) failed: {', '.join(failed)}")
    if session.registry.ready_count == 0:
        Log.error("No document is ready")
        return False
    return True


async def _ingest(session: Session, paths: Sequence[Path]) -> int:
    documents = await session.ingest(_load(paths))
    for document in documents:
        print(f"{document.status.value:<10} {document.name} ({len(document.text)} chars)")
    return 0 if session.registry.ready_count else 1


async def _ask(session: Session, question: str) -> int:
    shown = 0
    async for update in session.search.search(question):
        if update.result is not None:
            print(json.dumps(dataclasses.asdict(update.result), indent=2))
            continue
        answer = update.snapshot.value("answer") or ""
        sys.stderr.write(answer[shown:])
        sys.stderr.flush()
        shown = len(answer)
    return 0


async def _suggest(session: Session) -> int:
    for question in await session.search.suggest_questions():
        print(question)
    return 0


async def _analyze(session: Session, explain: str | None) -> int:
    analysis = await session.analyzer.analyze()
    output: dict[str, object] = {"analysis": dataclasses.asdict(analysis)}
    if explain:
        output["explanation"] = await session.analyzer.explain(explain, analysis)
    print(json.dumps(output, indent=2))
    return 0


async def _dispatch(session: Session, args: argparse.Namespace) -> int:
    if args.command == "ingest":
        return await _ingest(session, args.files)
    if not await _ingest_ready(session, args.files):
        return 1
    try:
        if args.command == "ask":
            return await _ask(session, args.question)
        if args.command == "suggest":
            return await _suggest(session)
        return await _analyze(session, args.explain)
    except _ANSWER_FAILURES as exc:
        Log.error(f"{args.command.capitalize()} failed: {exc}")
        return 1


async def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    observer = QueueObserver()
    session = build_session(settings, observer=observer, context=context_from_args(args))
    reporter = asyncio.create_task(_report(observer))
    try:
        return await _dispatch(session, args)
    finally:
        reporter.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await reporter
        for event in observer.drain():
            _log_event(event)
        session.close()


def main() -> None:
    """Entry point: load settings -> build session -> run the command."""
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
