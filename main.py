import argparse
import logging
import shutil
import sys

import pandas as pd

from _version import __version__
from config_paths import load_config
from default_table_initializer import DefaultTableInitializer
from status_bar import render_status, snapshot_context
from table_controller import TableController
from table_state import ASC, DESC, PAGE_SIZE_CHOICES

logger = logging.getLogger("tabula")


def _parse_sort(text: str) -> tuple[str, str | None]:
    field, _, direction = text.partition(":")
    direction = direction.strip().lower() or None
    if direction is not None and direction not in (ASC, DESC):
        raise argparse.ArgumentTypeError(f"Sort direction must be '{ASC}' or '{DESC}'")
    field = field.strip()
    if not field:
        raise argparse.ArgumentTypeError("Sort field required")
    return field, direction


def _parse_column(text: str) -> tuple[str, str]:
    label, _, col_type = text.partition(":")
    label = label.strip()
    if not label:
        raise argparse.ArgumentTypeError("Column label required")
    return label, (col_type.strip() or "text")


def _parse_column_list(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def _page_number(text: str) -> int:
    page = int(text)
    if page < 1:
        raise argparse.ArgumentTypeError("Pages are numbered from 1")
    return page


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabula",
        description="tabula - in-memory table manager with search, sort and paging",
    )
    parser.add_argument("path", nargs="?", help="CSV or JSON file to import")
    parser.add_argument("-v", "--version", action="version", version=__version__)
    parser.add_argument("--search", default="", help="case-insensitive text filter")
    parser.add_argument("--sort", type=_parse_sort, help="FIELD[:asc|desc]")
    parser.add_argument("--page", type=_page_number, default=1)
    parser.add_argument("--page-size", type=int, choices=PAGE_SIZE_CHOICES)
    parser.add_argument(
        "--columns", type=_parse_column_list, help="comma separated visible columns, in order"
    )
    parser.add_argument(
        "--add-column",
        type=_parse_column,
        action="append",
        default=[],
        metavar="LABEL[:TYPE]",
    )
    parser.add_argument("--export", metavar="OUT", help="write the filtered rows to OUT")
    parser.add_argument("--verbose", action="store_true")
    return parser


def render_page(snapshot, visible_columns) -> str:
    if not snapshot.rows:
        return "(no rows)"
    df = pd.DataFrame(
        [row.values for row in snapshot.rows],
        index=pd.Index([row.id for row in snapshot.rows], name="id"),
        columns=visible_columns,
    )
    return df.to_string()


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config()
    state = DefaultTableInitializer(
        page_size=args.page_size or cfg["PAGE_SIZE"],
        visible_columns=cfg["VISIBLE_COLUMNS"],
        seed_demo_rows=cfg["SEED_DEMO_ROWS"] and not args.path,
    ).create()

    messages = []

    def set_status(msg, _seconds=3):
        logger.info(msg)
        messages.append(msg)

    controller = TableController(state, set_status)

    steps = []
    if args.path:
        steps.append(lambda: controller.import_file(args.path))
    for label, col_type in args.add_column:
        steps.append(lambda label=label, col_type=col_type: controller.add_column(label, col_type))
    if args.columns:
        steps.append(lambda: controller.set_column_order(args.columns))
    if args.sort:
        steps.append(lambda: controller.sort_by(*args.sort))

    for step in steps:
        if not step():
            print(messages[-1] if messages else "Failed", file=sys.stderr)
            return 1

    controller.search(args.search)
    controller.set_page(args.page - 1)

    if args.export and not controller.export_file(args.export):
        print(messages[-1], file=sys.stderr)
        return 1

    snapshot = controller.view()
    print(render_page(snapshot, list(state.visible_columns)))
    width = shutil.get_terminal_size((80, 24)).columns
    print(render_status(snapshot_context(snapshot, args.path), width).rstrip())
    return 0


if __name__ == "__main__":
    sys.exit(main())
