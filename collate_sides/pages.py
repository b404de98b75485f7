"""
Page sequences the collator edits in place.

`PageSequence` is the contract the core needs from a host document;
`PdfPageSequence` is the PyPDF2-backed host used by the CLI.
"""
from __future__ import annotations

import dataclasses as dc
from pathlib import Path
from typing import Any, Optional, Protocol

import PyPDF2
import structlog

log = structlog.get_logger("collate_sides.pages")


@dc.dataclass(frozen=True)
class ReverseSource:
    path: Path
    display_name: str

    @classmethod
    def from_path(cls, path: Path | str) -> "ReverseSource":
        p = Path(path)
        return cls(path=p, display_name=p.name)


class PageSequence(Protocol):
    name: str
    modified: bool

    def __len__(self) -> int: ...

    def append(self, source: ReverseSource) -> None: ...

    def move(self, from_index: int, after_index: int) -> None: ...

    def delete(self, start: int, end: int) -> None: ...


def move_item(items: list[Any], from_index: int, after_index: int) -> None:
    """
    Relocate items[from_index] so it sits right after items[after_index].

    `after_index` is read against the order before the move; -1 moves to the front.
    """
    n = len(items)
    if not 0 <= from_index < n:
        raise IndexError(f"from_index {from_index} out of range for {n} pages")
    if not -1 <= after_index < n:
        raise IndexError(f"after_index {after_index} out of range for {n} pages")
    item = items.pop(from_index)
    target = after_index + 1 if after_index < from_index else after_index
    items.insert(target, item)


def delete_range(items: list[Any], start: int, end: int) -> None:
    # inclusive on both ends
    n = len(items)
    if not (0 <= start <= end < n):
        raise IndexError(f"cannot delete [{start}, {end}] from {n} pages")
    del items[start:end + 1]


class PdfPageSequence:
    """An open PDF document whose pages can be spliced, reordered and saved."""

    def __init__(self, pages: Optional[list[PyPDF2.PageObject]] = None, name: str = "Untitled.pdf"):
        self.pages: list[PyPDF2.PageObject] = list(pages or [])
        self.name = name
        self.modified = False

    @classmethod
    def open(cls, path: Path | str) -> "PdfPageSequence":
        p = Path(path)
        reader = PyPDF2.PdfReader(p)
        doc = cls(list(reader.pages), name=p.name)
        log.debug("document_opened", path=str(p), pages=len(doc))
        return doc

    def __len__(self) -> int:
        return len(self.pages)

    def append(self, source: ReverseSource) -> None:
        reader = PyPDF2.PdfReader(source.path)
        added = list(reader.pages)
        self.pages.extend(added)
        if added:
            self.modified = True
        log.debug("pages_appended", source=source.display_name, count=len(added))

    def move(self, from_index: int, after_index: int) -> None:
        move_item(self.pages, from_index, after_index)
        self.modified = True

    def delete(self, start: int, end: int) -> None:
        delete_range(self.pages, start, end)
        self.modified = True

    def save(self, path: Path | str) -> Path:
        p = Path(path)
        pdf_writer = PyPDF2.PdfWriter()
        for page in self.pages:
            pdf_writer.add_page(page)
        with open(p, "wb") as output:
            pdf_writer.write(output)
        self.modified = False
        log.info("document_saved", path=str(p), pages=len(self.pages))
        return p
