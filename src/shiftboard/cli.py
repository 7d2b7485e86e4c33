from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from shiftboard.core.errors import ShiftboardError, UnknownTemplate, UnknownWorker
from shiftboard.core.periods import Period
from shiftboard.engine.conflicts import detect_conflicts
from shiftboard.engine.reconcile import find_orphans, reconcile_orphans
from shiftboard.engine.stats import period_matrix, workload_table
from shiftboard.io.persistence import JsonFileStore
from shiftboard.models.assignment import Slot
from shiftboard.models.validated import load_config
from shiftboard.models.worker import Worker
from shiftboard.utils.logging_setup import get_logger, setup_logging
from shiftboard.utils.structured_logging import bind_context, clear_context, configure_structlog
from shiftboard.workspace import Workspace

logger = get_logger("shiftboard.cli")


def _period(ws: Workspace, args: argparse.Namespace) -> Period:
    month = getattr(args, "month", None)
    week = getattr(args, "week", None)
    if month:
        return Period.parse(month)
    if week:
        return Period.parse(week, ws.config.week_starts_on)
    return ws.current_week()


def _add_period_options(p: argparse.ArgumentParser, month: bool = True) -> None:
    group = p.add_mutually_exclusive_group()
    group.add_argument("--week", metavar="DATE", help="Week containing DATE (default: current week)")
    if month:
        group.add_argument("--month", metavar="YYYY-MM", help="Calendar month")


def _cmd_workers(ws: Workspace, args: argparse.Namespace) -> int:
    if args.action == "list":
        for w in ws.roster:
            suffix = f" [{w.work_id}]" if w.work_id else ""
            print(f"{w.id}\t{w.display_name}{suffix}")
        return 0

    if args.action == "add":
        ws.roster.add(Worker(id=args.id, display_name=args.name or "", work_id=args.work_id or ""))
        ws.commit()
        print(f"Added {args.id}")
        return 0

    if args.action == "edit":
        worker = ws.roster.get(args.id)
        if worker is None:
            raise UnknownWorker(args.id)
        ws.roster.update(worker.renamed(display_name=args.name, work_id=args.work_id))
        ws.commit()
        print(f"Updated {args.id}")
        return 0

    removed = ws.roster.remove(args.id)
    if removed is None:
        print(f"No worker {args.id!r}", file=sys.stderr)
        return 1
    ws.commit()
    print(f"Removed {args.id}")
    left = sum(1 for ids in find_orphans(ws.store, ws.roster).values() if args.id in ids)
    if left:
        print(f"{args.id} is still listed in {left} slots; run 'reconcile --apply' to clear them")
    return 0


def _cmd_assign(ws: Workspace, args: argparse.Namespace) -> int:
    slot = Slot(date=args.date, shift_type=args.shift)
    stored = ws.store.set_workers(slot, args.ids)
    ws.commit()
    if stored is None:
        print(f"Cleared {slot.key()}")
    else:
        print(f"{slot.key()}: {', '.join(ws.roster.display_name(w) for w in stored.worker_ids)}")
    return 0


def _cmd_move(ws: Workspace, args: argparse.Namespace) -> int:
    result = ws.engine.move(
        Slot(date=args.src_date, shift_type=args.src_shift), args.src_index,
        Slot(date=args.dst_date, shift_type=args.dst_shift), args.dst_index,
    )
    ws.commit()
    print(f"Moved {ws.roster.display_name(result.worker_id)} to {result.destination.slot.key()}")
    return 0


def _cmd_suggest(ws: Workspace, args: argparse.Namespace) -> int:
    period = _period(ws, args)
    bind_context(period=period.label)
    suggestions = ws.engine.suggest_for(period)
    for s in suggestions:
        print(f"{s.slot.key()}\t{ws.roster.display_name(s.worker_ids[0])}")
    if not suggestions:
        print(f"Nothing to suggest for {period.label}")
    if args.apply and suggestions:
        installed = ws.engine.merge(suggestions)
        ws.commit()
        print(f"Applied {len(installed)} suggestions")
    return 0


def _cmd_conflicts(ws: Workspace, args: argparse.Namespace) -> int:
    period = _period(ws, args)
    warnings = detect_conflicts(ws.store.assignments_for_period(period), ws.roster.names())
    for w in warnings:
        print(w)
    if not warnings:
        print(f"No conflicts in {period.label}")
    return 0


def _cmd_show(ws: Workspace, args: argparse.Namespace) -> int:
    period = _period(ws, args)
    print(period.label)
    print(period_matrix(ws.store.list_for_period(period), ws.roster).to_string())
    return 0


def _cmd_stats(ws: Workspace, args: argparse.Namespace) -> int:
    period = _period(ws, args)
    table = workload_table(ws.store.assignments_for_period(period), ws.roster)
    print(period.label)
    print(table.to_string(index=False))
    return 0


def _cmd_reconcile(ws: Workspace, args: argparse.Namespace) -> int:
    orphans = find_orphans(ws.store, ws.roster)
    for slot, ids in orphans.items():
        print(f"{slot.key()}\t{', '.join(ids)}")
    if not orphans:
        print("No orphan worker ids")
        return 0
    if args.apply:
        reconcile_orphans(ws.store, ws.roster)
        ws.commit()
        print(f"Cleaned {len(orphans)} slots")
    return 0


def _cmd_template(ws: Workspace, args: argparse.Namespace) -> int:
    if args.action == "list":
        for name in ws.templates.names():
            print(f"{name}\t{len(ws.templates.get(name).assignments)} entries")
        return 0

    if args.action == "delete":
        ws.templates.delete(args.name)
        ws.commit()
        print(f"Deleted template {args.name!r}")
        return 0

    week = _period(ws, args)
    bind_context(period=week.label, template=args.name)
    if args.action == "capture":
        template = ws.capture_template(args.name, week)
        ws.commit()
        print(f"Captured {len(template.assignments)} entries from {week.label} as {args.name!r}")
        return 0

    installed = ws.install_template(args.name, week.start)
    if installed is None:
        raise UnknownTemplate(args.name)
    ws.commit()
    print(f"Applied {args.name!r} to {week.label} ({len(installed)} assignments)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="shiftboard", description="Shift allocation board")
    p.add_argument("--data-dir", default="data", help="Directory holding the JSON data files (default: data)")
    p.add_argument("--config", help="JSON engine configuration file")
    p.add_argument("-v", "--verbose", action="count", default=0)
    sub = p.add_subparsers(dest="command", required=True)

    workers = sub.add_parser("workers", help="Manage the roster")
    workers.set_defaults(handler=_cmd_workers)
    wsub = workers.add_subparsers(dest="action", required=True)
    wsub.add_parser("list")
    add = wsub.add_parser("add")
    add.add_argument("id")
    add.add_argument("--name", help="Display name (default: the id)")
    add.add_argument("--work-id", dest="work_id")
    edit = wsub.add_parser("edit")
    edit.add_argument("id")
    edit.add_argument("--name", help="New display name")
    edit.add_argument("--work-id", dest="work_id", help="New work id (empty string clears it)")
    remove = wsub.add_parser("remove")
    remove.add_argument("id")

    assign = sub.add_parser("assign", help="Set the workers of one slot (no ids clears it)")
    assign.set_defaults(handler=_cmd_assign)
    assign.add_argument("date")
    assign.add_argument("shift")
    assign.add_argument("ids", nargs="*")

    move = sub.add_parser("move", help="Move one worker between slot positions")
    move.set_defaults(handler=_cmd_move)
    move.add_argument("src_date")
    move.add_argument("src_shift")
    move.add_argument("src_index", type=int)
    move.add_argument("dst_date")
    move.add_argument("dst_shift")
    move.add_argument("dst_index", type=int)

    suggest = sub.add_parser("suggest", help="Suggest workers for open slots")
    suggest.set_defaults(handler=_cmd_suggest)
    _add_period_options(suggest)
    suggest.add_argument("--apply", action="store_true", help="Merge the suggestions and commit")

    for name, handler, help_text in (
        ("conflicts", _cmd_conflicts, "List double bookings"),
        ("show", _cmd_show, "Print the date x shift board"),
        ("stats", _cmd_stats, "Print per-worker workload"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.set_defaults(handler=handler)
        _add_period_options(cmd)

    reconcile = sub.add_parser("reconcile", help="List or strip ids of removed workers")
    reconcile.set_defaults(handler=_cmd_reconcile)
    reconcile.add_argument("--apply", action="store_true")

    template = sub.add_parser("template", help="Week templates")
    template.set_defaults(handler=_cmd_template)
    tsub = template.add_subparsers(dest="action", required=True)
    tsub.add_parser("list")
    for action in ("capture", "apply"):
        t = tsub.add_parser(action)
        t.add_argument("name")
        _add_period_options(t, month=False)
    delete = tsub.add_parser("delete")
    delete.add_argument("name")

    return p


def main(argv: list[str] | None = None, workspace: Optional[Workspace] = None) -> int:
    args = build_parser().parse_args(argv)

    console = "WARNING" if args.verbose == 0 else ("INFO" if args.verbose == 1 else "DEBUG")
    data_dir = Path(args.data_dir)
    setup_logging(console_level=console, log_file=str(data_dir / "shiftboard.log"))
    configure_structlog(level=logging.INFO if args.verbose else logging.WARNING)
    bind_context(command=args.command)

    try:
        if workspace is None:
            workspace = Workspace(JsonFileStore(data_dir), config=load_config(args.config))
            workspace.load()
        return args.handler(workspace, args)
    except (ShiftboardError, ValueError, OSError) as e:
        logger.debug(f"{args.command} failed: {type(e).__name__}: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        clear_context()


if __name__ == "__main__":
    raise SystemExit(main())
