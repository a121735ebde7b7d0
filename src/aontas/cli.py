import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import aontas.plugins  # Ensure renderers are registered
from aontas.config import AppConfig
from aontas.core.engine import ExportEngine
from aontas.core.errors import AontasError, ExercisePayloadError
from aontas.core.models import Artifact
from aontas.core.sheets import ExportContext
from aontas.grading.evaluator import grade_all
from aontas.grading.exercises import Mode, parse_exercise_set
from aontas.grading.similarity import score_attempt
from aontas.i18n.i18n import i18n


def _formats(value: str) -> List[str]:
    return [f.strip().lstrip(".").lower() for f in value.split(",") if f.strip()]


def _context(args: argparse.Namespace, cfg: AppConfig) -> ExportContext:
    return ExportContext(
        output_language=args.output_language or cfg.output_language,
        level=args.level or cfg.level,
        output_type=args.output_type or cfg.output_type,
        dyslexia_friendly=cfg.dyslexia_friendly and not args.no_dyslexia,
    )


def _save(artifacts: List[Artifact], out_dir: Path) -> int:
    out_dir.mkdir(parents=True, exist_ok=True)
    failures = 0
    for artifact in artifacts:
        target = out_dir / artifact.filename
        try:
            target.write_bytes(artifact.content)
            print(i18n.t("log_success", file=target.name))
        except OSError as e:
            failures += 1
            print(i18n.t("log_fail", file=target.name, err=str(e)), file=sys.stderr)
    return failures


def _read_text(path: str) -> Optional[str]:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        print(i18n.t("read_fail", file=path, err=str(e)), file=sys.stderr)
        return None


def _load_items(path: str):
    raw = _read_text(path)
    if raw is None:
        return None
    try:
        return parse_exercise_set(raw)
    except ExercisePayloadError as e:
        print(i18n.t("payload_fail", file=path, err=str(e)), file=sys.stderr)
        return None


def export_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    standard = _read_text(args.standard)
    adapted = _read_text(args.adapted)
    if standard is None or adapted is None:
        return 1

    formats = _formats(args.formats) if args.formats else cfg.formats
    out_dir = Path(args.output_dir or cfg.out_dir or ".")
    print(f"{i18n.t('log_start')}: {', '.join(formats)}")
    try:
        artifacts = ExportEngine.export_texts(standard, adapted, _context(args, cfg), formats)
    except AontasError as e:
        print(i18n.t("log_fail", file=args.standard, err=str(e)), file=sys.stderr)
        return 1
    return 1 if _save(artifacts, out_dir) else 0


def worksheet_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    items = _load_items(args.exercises)
    if items is None:
        return 1

    formats = _formats(args.formats) if args.formats else cfg.formats
    out_dir = Path(args.output_dir or cfg.out_dir or ".")
    try:
        artifacts = ExportEngine.export_worksheets(items, args.mode, _context(args, cfg), formats)
    except AontasError as e:
        print(i18n.t("log_fail", file=args.exercises, err=str(e)), file=sys.stderr)
        return 1
    return 1 if _save(artifacts, out_dir) else 0


def grade_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    items = _load_items(args.exercises)
    raw_answers = _read_text(args.answers)
    if items is None or raw_answers is None:
        return 1
    try:
        answers = {int(k): v for k, v in json.loads(raw_answers).items()}
    except (ValueError, AttributeError) as e:
        print(i18n.t("read_fail", file=args.answers, err=str(e)), file=sys.stderr)
        return 1

    results, board = grade_all(items, answers, args.mode)
    for item_id, result in results.items():
        verdict = i18n.t(f"verdict_{result.verdict.value}")
        print(i18n.t("grade_line", id=item_id, verdict=verdict, answer=result.answer))

    if board.graded:
        print(i18n.t("score_line", correct=board.correct, graded=board.graded, ungraded=board.ungraded))
    else:
        print(i18n.t("score_none"))
    return 0


def similarity_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    result = score_attempt(args.expected, args.transcript)
    print(i18n.t("similarity_line", score=result.score, tier=i18n.t(f"tier_{result.tier}")))
    return 0


def _add_context_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--formats", default="", help="Comma-separated formats (txt,pdf,docx)")
    p.add_argument("--output-dir", default="", help="Output directory")
    p.add_argument("--output-language", default="")
    p.add_argument("--level", default="", help="CEFR level, e.g. B1")
    p.add_argument("--output-type", default="", help="e.g. article, report")
    p.add_argument("--no-dyslexia", action="store_true", help="Adapted version not dyslexia-friendly")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Aontas-10 classroom materials CLI")
    parser.add_argument("--lang", default="", help="Language for messages")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Export standard and adapted texts")
    export_parser.add_argument("--standard", required=True, help="Standard text file")
    export_parser.add_argument("--adapted", required=True, help="Adapted text file")
    _add_context_args(export_parser)

    worksheet_parser = subparsers.add_parser("worksheet", help="Export a worksheet and teacher key")
    worksheet_parser.add_argument("exercises", help="Exercise JSON file")
    worksheet_parser.add_argument("--mode", default="standard", choices=[m.value for m in Mode])
    _add_context_args(worksheet_parser)

    grade_parser = subparsers.add_parser("grade", help="Grade answers against an exercise set")
    grade_parser.add_argument("exercises", help="Exercise JSON file")
    grade_parser.add_argument("answers", help="JSON object mapping question id to answer")
    grade_parser.add_argument("--mode", default="standard", choices=[m.value for m in Mode])

    sim_parser = subparsers.add_parser("similarity", help="Score a spoken transcript")
    sim_parser.add_argument("expected")
    sim_parser.add_argument("transcript")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    cfg = AppConfig.load()
    i18n.set_locale(args.lang or cfg.lang)

    commands = {
        "export": export_cmd,
        "worksheet": worksheet_cmd,
        "grade": grade_cmd,
        "similarity": similarity_cmd,
    }
    sys.exit(commands[args.command](args, cfg))

if __name__ == "__main__":
    main()
