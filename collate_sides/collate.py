"""
Collate a front-sides document with a reverse-sides scan.

The reverse sides come from a single-sided feeder after the stack was flipped,
so they arrive last-sheet-first. They are appended to the front document and
then pulled forward one at a time into their slots:

    F0 F1 F2 R2 R1 R0  ->  F0 R0 F1 R1 F2 R2
"""
from __future__ import annotations

import dataclasses as dc
import enum
from typing import Optional

import structlog

from collate_sides.pages import PageSequence, ReverseSource

log = structlog.get_logger("collate_sides.collate")

# ---------- errors ----------

class CollationError(Exception):
    pass


def _pages(count: int) -> str:
    return f"{count} page" + (" only" if abs(count) == 1 else "s")


class PageCountMismatch(CollationError):
    def __init__(self, front_count: int, reverse_count: int, front_name: str, reverse_name: str):
        self.front_count = front_count
        self.reverse_count = reverse_count
        self.front_name = front_name
        self.reverse_name = reverse_name
        super().__init__(
            "Both files must contain the same number of pages. "
            f"The current active file \"{front_name}\", that should contain the front sides, "
            f"has {_pages(front_count)}. However, the file \"{reverse_name}\", that should "
            f"contain the reverse (i.e., back) sides, has {_pages(reverse_count)}."
        )

# ---------- models ----------

class Status(enum.Enum):
    COLLATED = "collated"
    MISMATCH = "mismatch"
    NO_SOURCE_SELECTED = "no_source_selected"
    FAILED = "failed"


@dc.dataclass(frozen=True)
class CountCheck:
    ok: bool
    reverse_count: int


@dc.dataclass(frozen=True)
class Move:
    from_index: int
    after_index: int


@dc.dataclass
class CollationResult:
    status: Status
    front_count: int = 0
    reverse_count: int = 0
    front_name: Optional[str] = None
    reverse_name: Optional[str] = None
    moves: int = 0
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is Status.COLLATED

    @property
    def message(self) -> Optional[str]:
        if self.status is Status.FAILED:
            return f"Encountered an unexpected error: {self.error}"
        return str(self.error) if self.error else None

# ---------- core ----------

def validate_counts(front_count: int, total_count: int) -> CountCheck:
    reverse_count = total_count - front_count
    return CountCheck(ok=front_count == reverse_count, reverse_count=reverse_count)


def plan_moves(n: int) -> list[Move]:
    """
    Moves that turn F0..F(n-1), R(n-1)..R0 into F0, R0, ..., F(n-1), R(n-1).

    The tail page is always the next reverse side needed, and everything up to
    index 2*i is settled by the time step i runs. R(n-1) ends up last without
    being touched, so n <= 1 needs no moves at all.
    """
    last = 2 * n - 1
    return [Move(from_index=last, after_index=2 * i) for i in range(n - 1)]


def interleave(sequence: PageSequence, n: int) -> int:
    if n < 0 or len(sequence) != 2 * n:
        raise ValueError(f"interleave needs exactly {2 * n} pages, sequence has {len(sequence)}")
    moves = plan_moves(n)
    for mv in moves:
        sequence.move(mv.from_index, mv.after_index)
    log.debug("interleave_done", pairs=n, moves=len(moves))
    return len(moves)


def rollback(sequence: PageSequence, front_count: int, modified: bool = False) -> None:
    """Drop everything after the front block and put the modified flag back."""
    end = len(sequence) - 1
    if end >= front_count:
        sequence.delete(front_count, end)
    sequence.modified = modified
    log.info("rollback_done", removed=max(end - front_count + 1, 0), pages=len(sequence))


def collate(sequence: PageSequence, source: Optional[ReverseSource]) -> CollationResult:
    if source is None:
        log.info("no_source_selected")
        return CollationResult(status=Status.NO_SOURCE_SELECTED, front_count=len(sequence), front_name=sequence.name)

    front_count = len(sequence)
    modified_before = sequence.modified
    result = CollationResult(
        status=Status.FAILED,
        front_count=front_count,
        front_name=sequence.name,
        reverse_name=source.display_name,
    )
    reordering = False
    try:
        sequence.append(source)
        check = validate_counts(front_count, len(sequence))
        result.reverse_count = check.reverse_count
        log.info("reverse_block_appended", front=front_count, reverse=check.reverse_count, source=source.display_name)

        if not check.ok:
            rollback(sequence, front_count, modified=modified_before)
            err = PageCountMismatch(front_count, check.reverse_count, sequence.name, source.display_name)
            log.warning("page_count_mismatch", front=front_count, reverse=check.reverse_count)
            result.status = Status.MISMATCH
            result.error = err
            return result

        reordering = True
        result.moves = interleave(sequence, front_count)
        result.status = Status.COLLATED
        log.info("collated", pages=len(sequence), moves=result.moves)
        return result
    except Exception as e:
        log.error("collate_failed", error=str(e), source=source.display_name)
        if reordering:
            # fronts and backs are already mixed; a positional delete would drop fronts
            sequence.modified = True
            log.warning("reorder_interrupted", pages=len(sequence))
        elif len(sequence) > front_count:
            try:
                rollback(sequence, front_count, modified=modified_before)
            except Exception as cleanup_err:
                log.error("cleanup_failed", error=str(cleanup_err))
        result.status = Status.FAILED
        result.error = e
        return result
