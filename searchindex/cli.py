import os
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .config import SearchConfig
from .debug import get_logger, reset_logger
from .formatting import UNKNOWN_COUNTS
from .host import InvalidPattern, TextBuffer
from .search import SearchController


def _load_controller(path: str, pattern: str, config: SearchConfig) -> SearchController:
    buffer = TextBuffer.from_file(path)
    buffer.set_search_pattern(pattern)
    try:
        buffer.compile(pattern)
    except InvalidPattern as exc:
        raise click.BadParameter(exc.reason, param_hint="PATTERN") from exc
    return SearchController(buffer=buffer, config=config)


@click.group()
@click.option(
    '--line-limit',
    type=click.IntRange(min=0),
    default=None,
    help="Skip counting for files with more lines than this (default: $SEARCHINDEX_LINE_LIMIT or 1000000).",
)
@click.option(
    '--first-only',
    is_flag=True,
    default=False,
    help="Count at most one match per line.",
    show_default=True,
)
@click.option(
    '--nowrapscan',
    is_flag=True,
    default=False,
    help="Do not wrap around the end of the file when navigating.",
    show_default=True,
)
@click.option(
    '--debug',
    is_flag=True,
    default=False,
    help='Enable verbose debug logging to searchindex_debug.log',
    show_default=True,
)
@click.pass_context
def main(ctx, line_limit, first_only, nowrapscan, debug):
    """
    Show "[current/total]" search match counters for a text file.
    """
    if debug:
        os.environ['SEARCHINDEX_DEBUG'] = '1'
        reset_logger()
    config = SearchConfig.from_env().with_overrides(
        line_limit=line_limit,
        count_all_per_line=False if first_only else None,
        wrapscan=False if nowrapscan else None,
    )
    get_logger("main").debug("start: config=%s", config)
    ctx.obj = config


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.argument('pattern')
@click.option('--line', 'line', type=click.IntRange(min=1), default=1, show_default=True, help="Cursor line (1-based).")
@click.option('--col', 'col', type=click.IntRange(min=0), default=0, show_default=True, help="Cursor column (0-based).")
@click.pass_obj
def count(config: SearchConfig, path: str, pattern: str, line: int, col: int):
    """Print the counter for PATTERN with the cursor at --line/--col."""
    console = Console()
    search = _load_controller(path, pattern, config)
    search.buffer.set_cursor(line, col)
    text = search.counter_text()
    if not text:
        console.print(f"[bold yellow]No matches:[/bold yellow] {escape(pattern)}")
        raise SystemExit(1)
    click.echo(text)


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.argument('pattern')
@click.option('--limit', type=click.IntRange(min=1), default=None, help="Stop after this many matches.")
@click.pass_obj
def walk(config: SearchConfig, path: str, pattern: str, limit: Optional[int]):
    """Step through every match of PATTERN from the top, like pressing n repeatedly."""
    console = Console()
    search = _load_controller(path, pattern, config)
    table = Table(title=escape(f"{os.path.basename(path)}: {pattern}"))
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Counter")
    table.add_column("Text", overflow="fold")
    rows = 0
    for (lnum, col), counts in search.iter_matches():
        if counts is None:
            counter = UNKNOWN_COUNTS
        else:
            counter = f"[{counts.current}/{counts.total}]"
        table.add_row(str(lnum), str(col), Text(counter), Text(search.buffer.line(lnum)))
        rows += 1
        if limit is not None and rows >= limit:
            break
    if not rows:
        console.print(f"[bold yellow]No matches:[/bold yellow] {escape(pattern)}")
        raise SystemExit(1)
    console.print(table)


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--pattern', default="", help="Initial search pattern.")
@click.pass_obj
def view(config: SearchConfig, path: str, pattern: str):
    """Open PATH in an interactive viewer with a live search counter."""
    from .viewer import SearchViewerApp

    buffer = TextBuffer.from_file(path)
    app = SearchViewerApp(buffer, config=config, pattern=pattern)
    app.run()


if __name__ == "__main__":
    main()
