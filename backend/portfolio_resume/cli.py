"""
Command-line client for the resume pipeline.

  portfolio-resume generate https://example.dev [--crawl] [--format docx]
  portfolio-resume modify resume.json "add a skill: Rust"
  portfolio-resume chat https://example.dev

Documents and JSON snapshots go to --out-dir (default: settings.output_dir).
`chat` keeps a ResumeSession, feeding each new resume into the next edit,
and writes the session history next to the documents when it ends.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from portfolio_resume.config import settings
from portfolio_resume.exceptions import InputError, ResumeServiceError
from portfolio_resume.models.resume_models import DocumentFormat, Resume, ScrapeMode
from portfolio_resume.models.session_models import ResumeSession
from portfolio_resume.services.resume_pipeline import ResumeDocument, generate_resume, modify_resume
from portfolio_resume.utils.dependencies import APIKeys, build_llm_selection

logger = logging.getLogger(__name__)

_EXIT_COMMANDS = {"exit", "quit", "q", ":q"}


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level or settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    llm = build_llm_selection(
        args.provider,
        args.model,
        APIKeys(
            groq=settings.groq_api_key,
            google=settings.gemini_api_key,
            openrouter=settings.openrouter_api_key,
        ),
    )
    out_dir = Path(args.out_dir or settings.output_dir)
    fmt = DocumentFormat(args.format)

    try:
        if args.command == "generate":
            mode = ScrapeMode.CRAWL if args.crawl else ScrapeMode.SCRAPE
            result = asyncio.run(generate_resume(args.url, llm, mode=mode, output_format=fmt))
            _save(result, out_dir, "resume")
        elif args.command == "modify":
            resume = _load_resume(args.resume_json)
            result = asyncio.run(modify_resume(resume, args.instruction, llm, output_format=fmt))
            _save(result, out_dir, "resume-modified")
        else:
            mode = ScrapeMode.CRAWL if args.crawl else ScrapeMode.SCRAPE
            asyncio.run(_chat(args.url, llm, mode, fmt, out_dir))
    except ResumeServiceError as e:
        print(f"error ({e.error_type}): {e.message}", file=sys.stderr)
        if e.details:
            print(f"  {e.details}", file=sys.stderr)
        return 1
    return 0


async def _chat(url: str, llm, mode: ScrapeMode, fmt: DocumentFormat, out_dir: Path) -> ResumeSession:
    session = ResumeSession(source_url=url)

    result = await generate_resume(url, llm, mode=mode, output_format=fmt)
    path = _save(result, out_dir, "resume-0")
    session.record(result.resume, document_path=str(path))

    print("Describe a change (or 'quit' to finish).")
    while True:
        try:
            instruction = input("> ").strip()
        except EOFError:
            break
        if not instruction:
            continue
        if instruction.lower() in _EXIT_COMMANDS:
            break
        try:
            result = await modify_resume(session.current, instruction, llm, output_format=fmt)
        except ResumeServiceError as e:
            # A failed edit leaves the current resume untouched
            print(f"error ({e.error_type}): {e.message}", file=sys.stderr)
            continue
        path = _save(result, out_dir, f"resume-{len(session.turns)}")
        session.record(result.resume, instruction=instruction, document_path=str(path))

    history_path = out_dir / "session.json"
    history_path.write_text(session.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
    print(f"Session history: {history_path}")
    return session


def _load_resume(path: str) -> Resume:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise InputError(f"Cannot read resume file {path}", details=str(e)) from e
    try:
        return Resume.model_validate_json(raw)
    except ValidationError as e:
        raise InputError(f"Resume data in {path} is malformed", details=str(e)) from e


def _save(result: ResumeDocument, out_dir: Path, stem: str) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    doc_path = out_dir / f"{stem}.{result.file_extension}"
    doc_path.write_bytes(result.document)
    json_path = out_dir / f"{stem}.json"
    json_path.write_text(json.dumps(result.resume.to_payload(), indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Wrote {doc_path} ({len(result.document)} bytes) and {json_path}")
    return doc_path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portfolio-resume", description="Build and edit a resume from a portfolio website.")
    parser.add_argument("--provider", help="LLM provider (groq, google, openrouter)")
    parser.add_argument("--model", help="Model key from the provider registry")
    parser.add_argument("--format", choices=[f.value for f in DocumentFormat], default="pdf")
    parser.add_argument("--out-dir", help="Where documents are written")
    parser.add_argument("--log-level", help="Logging level (default from settings)")

    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Build a resume from a portfolio URL")
    gen.add_argument("url")
    gen.add_argument("--crawl", action="store_true", help="Read up to 3 pages of the site")

    mod = sub.add_parser("modify", help="Apply one edit to a saved resume JSON")
    mod.add_argument("resume_json")
    mod.add_argument("instruction")

    chat = sub.add_parser("chat", help="Generate, then edit interactively")
    chat.add_argument("url")
    chat.add_argument("--crawl", action="store_true", help="Read up to 3 pages of the site")

    return parser


if __name__ == "__main__":
    raise SystemExit(main())
