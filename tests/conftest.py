from __future__ import annotations

from pathlib import Path

import PyPDF2
import pytest
import structlog

from collate_sides.pages import ReverseSource, delete_range, move_item


class ListSequence:
    """In-memory PageSequence; `sources` maps a source path to the pages it yields."""

    def __init__(self, pages, name="fronts.pdf", sources=None, modified=False):
        self.pages = list(pages)
        self.name = name
        self.modified = modified
        self.sources = dict(sources or {})
        self.moves: list[tuple[int, int]] = []

    def __len__(self):
        return len(self.pages)

    def append(self, source: ReverseSource) -> None:
        added = self.sources[str(source.path)]
        self.pages.extend(added)
        if added:
            self.modified = True

    def move(self, from_index: int, after_index: int) -> None:
        move_item(self.pages, from_index, after_index)
        self.moves.append((from_index, after_index))
        self.modified = True

    def delete(self, start: int, end: int) -> None:
        delete_range(self.pages, start, end)
        self.modified = True


def fronts(n):
    return [f"F{i}" for i in range(n)]


def scanned_reverse(n):
    # backs come off the feeder last sheet first
    return [f"R{i}" for i in reversed(range(n))]


def expected(n):
    return [p for i in range(n) for p in (f"F{i}", f"R{i}")]


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_pdf(tmp_path: Path):
    """Write a PDF whose page widths are the given numbers, so pages can be told apart."""
    def _make(name: str, widths: list[int]) -> Path:
        pdf_writer = PyPDF2.PdfWriter()
        for w in widths:
            pdf_writer.add_blank_page(width=w, height=200)
        path = tmp_path / name
        with open(path, "wb") as output:
            pdf_writer.write(output)
        return path
    return _make


def page_widths(path: Path) -> list[int]:
    reader = PyPDF2.PdfReader(path)
    return [round(float(p.mediabox.width)) for p in reader.pages]
