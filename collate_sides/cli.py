"""
Collate a front-sides PDF with its reverse-sides scan.

Scan the stack once for the fronts, flip it, scan again for the backs, then:

  collate-sides fronts.pdf backs.pdf            # asks before saving
  collate-sides fronts.pdf backs.pdf -o out.pdf --yes

Env:
  COLLATE_OUTPUT_SUFFIX  (optional, default: '-collated')
  COLLATE_LOG_FORMAT     (optional, 'json' or 'console', default: 'json')
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
import typer

from collate_sides.collate import Status, collate
from collate_sides.config import LogFormat, Settings
from collate_sides.pages import PdfPageSequence, ReverseSource

app = typer.Typer(add_completion=False, no_args_is_help=True)
log = structlog.get_logger("collate_sides")

SAVE_PROMPT = (
    "Front sides are successfully collated with reverse sides. "
    "Do you want to save the updated document?"
)

# ---------- logging setup ----------

def configure_logging(verbosity: int, fmt: LogFormat = "json") -> None:
    renderer = structlog.dev.ConsoleRenderer(colors=False) if fmt == "console" else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            {0: logging.INFO, 1: logging.DEBUG}.get(verbosity, logging.DEBUG)
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )

# ---------- host glue ----------

def select_reverse_source(path: Optional[Path]) -> Optional[ReverseSource]:
    if path is None:
        answer = typer.prompt("Reverse sides PDF (leave empty to cancel)", default="", show_default=False)
        if not answer.strip():
            return None
        path = Path(answer.strip())
    return ReverseSource.from_path(path)


def report_error(message: str) -> None:
    typer.echo(f"ERROR: {message}", err=True)


def report_success(confirm_save: bool) -> bool:
    """Tell the user it worked; True means they want it saved."""
    if not confirm_save:
        typer.echo("Front sides are successfully collated with reverse sides.")
        return True
    return typer.confirm(SAVE_PROMPT, default=False)

# ---------- CLI ----------

@app.command()
def main(
    front: Path = typer.Argument(..., exists=True, dir_okay=False, help="PDF holding the front sides, in reading order"),
    reverse: Optional[Path] = typer.Argument(None, help="PDF holding the reverse sides, as scanned (last sheet first)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to save; defaults to <front>$COLLATE_OUTPUT_SUFFIX.pdf"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Save without asking"),
    verbose: int = typer.Option(0, "-v", count=True, help="-v for debug logs"),
):
    """Interleave front sides with reverse sides into one document."""
    settings = Settings.from_env()
    configure_logging(verbose, settings.log_format)

    try:
        doc = PdfPageSequence.open(front)
    except Exception as e:
        log.error("open_failed", path=str(front), error=str(e))
        report_error(f"Could not open \"{front.name}\": {e}")
        raise typer.Exit(2)

    source = select_reverse_source(reverse)
    result = collate(doc, source)

    match result.status:
        case Status.NO_SOURCE_SELECTED:
            typer.echo("No reverse sides document selected.")
            return
        case Status.MISMATCH | Status.FAILED:
            report_error(result.message or "collation failed")
            raise typer.Exit(1)

    if report_success(confirm_save=not yes):
        saved = doc.save(output or settings.default_output(front))
        typer.echo(f"Saved {len(doc)} pages to {saved}")
    else:
        log.info("save_declined", pages=len(doc))
