"""CLI entrypoint for the household waste and wastewater survey client."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Sequence

from wastesurvey.app.coordinator import SurveyCoordinator
from wastesurvey.common.config_loader import ConfigBundle, load_all_configs
from wastesurvey.common.constants import EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS
from wastesurvey.common.errors import DuplicateDeclined, StoreError, SurveyError, ValidationFailure
from wastesurvey.common.fs import read_yaml
from wastesurvey.common.ids import generate_session_id
from wastesurvey.common.logging import build_logger, log_event
from wastesurvey.common.models import Notice, Record
from wastesurvey.store.client import RecordStoreClient
from wastesurvey.survey.coordinates import directions_url
from wastesurvey.survey.export import export_records_csv
from wastesurvey.survey.forms import RecordDraft, default_draft
from wastesurvey.survey.table import TableView, filter_records


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("ping", help="check that the record store answers")

    list_parser = sub.add_parser("list", help="print matching records, one JSON object per line")
    list_parser.add_argument("--query", default="")
    list_parser.add_argument("--pages", type=int, default=1)

    sub.add_parser("stats", help="print aggregate statistics as JSON")

    add_parser = sub.add_parser("add", help="create a record from a YAML draft")
    add_parser.add_argument("--file", required=True)
    add_parser.add_argument("--image", default=None)
    add_parser.add_argument("--yes", action="store_true", help="save even if the name already exists")

    update_parser = sub.add_parser("update", help="update a record from a YAML draft")
    update_parser.add_argument("record_id")
    update_parser.add_argument("--file", required=True)
    update_parser.add_argument("--image", default=None)
    update_parser.add_argument("--yes", action="store_true")

    delete_parser = sub.add_parser("delete", help="delete a record by id")
    delete_parser.add_argument("record_id")
    delete_parser.add_argument("--yes", action="store_true")

    export_parser = sub.add_parser("export", help="write matching records to CSV")
    export_parser.add_argument("--out", required=True)
    export_parser.add_argument("--query", default="")

    return parser.parse_args(argv)


def print_notice(notice: Notice) -> None:
    line = f"[{notice.level}] {notice.title}"
    if notice.message:
        line = f"{line}: {notice.message}"
    print(line, file=sys.stderr)


def _record_line(record: Record) -> str:
    payload = record.to_wire()
    url = directions_url(record.lat, record.lng)
    if url:
        payload["directions"] = url
    return json.dumps(payload, ensure_ascii=False)


async def _ask(question: str) -> bool:
    answer = await asyncio.to_thread(input, f"{question} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def _confirm_hook(assume_yes: bool):
    async def _confirm(full_name: str, duplicates: Sequence[Record]) -> bool:
        if assume_yes:
            return True
        return await _ask(f'"{full_name}" already exists ({len(duplicates)} records). Save anyway?')

    return _confirm


def _load_draft(path: Path, base: RecordDraft) -> RecordDraft:
    payload = read_yaml(path) or {}
    if not isinstance(payload, dict):
        raise ValidationFailure(f"Draft file must hold a mapping: {path}")
    return RecordDraft.from_mapping(payload, base=base)


async def execute_command(args: argparse.Namespace, coordinator: SurveyCoordinator, bundle: ConfigBundle) -> int:
    if args.command == "ping":
        outcome = await coordinator.check_connection()
        print(coordinator.connection_status)
        return EXIT_SUCCESS if outcome else EXIT_HARD_FAIL

    if args.command == "add":
        base = default_draft(bundle.options, bundle.default_location)
        draft = _load_draft(Path(args.file), base)
        image = Path(args.image) if args.image else None
        record = await coordinator.submit(draft, image=image, confirm_duplicate=_confirm_hook(args.yes))
        print(record.id)
        return EXIT_SUCCESS

    if not await coordinator.refresh():
        return EXIT_HARD_FAIL

    if args.command == "list":
        view = TableView(page_size=bundle.page_size, max_visible=bundle.max_visible)
        view.search(args.query)
        rows, remaining = view.rows(coordinator.records)
        for _ in range(max(args.pages, 1) - 1):
            rows, remaining = view.load_more(coordinator.records)
        for record in rows:
            print(_record_line(record))
        if remaining:
            print(f"{remaining} more records not shown", file=sys.stderr)
        return EXIT_SUCCESS

    if args.command == "stats":
        print(json.dumps(coordinator.statistics().to_dict(), ensure_ascii=False, indent=2))
        return EXIT_SUCCESS

    if args.command == "export":
        rows = filter_records(coordinator.records, args.query)
        path = export_records_csv(Path(args.out), rows)
        print(path)
        return EXIT_SUCCESS

    original = coordinator.find_record(args.record_id)
    if original is None:
        print_notice(Notice(level="error", title="Record not found", message=args.record_id))
        return EXIT_HARD_FAIL

    if args.command == "update":
        draft = _load_draft(Path(args.file), RecordDraft.from_record(original))
        image = Path(args.image) if args.image else None
        record = await coordinator.submit(
            draft,
            original=original,
            image=image,
            confirm_duplicate=_confirm_hook(args.yes),
        )
        print(record.id)
        return EXIT_SUCCESS

    if args.command == "delete":
        if not args.yes and not await _ask(f"Delete the record of {original.full_name}?"):
            return EXIT_PARTIAL
        outcome = await coordinator.delete(original.id)
        return EXIT_SUCCESS if outcome else EXIT_PARTIAL

    raise ValueError(f"Unknown command: {args.command}")


def run_command(args: argparse.Namespace) -> int:
    session_id = generate_session_id()
    log_dir = Path(args.log_dir) if args.log_dir else None
    logger = build_logger(session_id, log_dir=log_dir, level=args.log_level)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    bundle = load_all_configs(Path(args.config_dir), overlay_config_dir=overlay_config_dir)

    with RecordStoreClient.from_config(bundle, logger=logger) as store:
        coordinator = SurveyCoordinator(store, options=bundle.options, notifier=print_notice, logger=logger)
        try:
            return asyncio.run(execute_command(args, coordinator, bundle))
        except DuplicateDeclined:
            return EXIT_PARTIAL
        except (ValidationFailure, StoreError) as exc:
            log_event(
                logger,
                f"{args.command} failed",
                session_id=session_id,
                operation=args.command,
                status="error",
                error_code=exc.error_code,
            )
            return EXIT_HARD_FAIL
        except OSError:
            return EXIT_HARD_FAIL


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except SurveyError as exc:
        print_notice(Notice(level="error", title=exc.error_code, message=str(exc)))
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
