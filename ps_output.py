#!/usr/bin/env python3
# ps_output.py · v0.1.0
"""
Filename allocation and writing for generated documents.

The allocator snapshots the directory once, then hands out `<stem><suffix>`,
`<stem>_1<suffix>`, `<stem>_2<suffix>`, ... skipping anything it has already
handed out or that exists on disk.  It assumes a single writer per directory.
"""
from __future__ import annotations

from pathlib import Path
from typing import Set

from ps_document import AssembledDocument

__version__ = "0.1.0"

ENCODING = "utf-8"


def ensure_output_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


class NameAllocator:
    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.used: Set[str] = set()
        if self.directory.is_dir():
            self.used.update(p.name for p in self.directory.iterdir())

    def _taken(self, name: str) -> bool:
        return name in self.used or (self.directory / name).exists()

    def allocate(self, stem: str, suffix: str) -> Path:
        if not stem or Path(stem).name != stem or stem in (".", ".."):
            raise ValueError(f"Filename stem must not contain a path: {stem!r}")
        name = f"{stem}{suffix}"
        seq = 0
        while self._taken(name):
            seq += 1
            name = f"{stem}_{seq}{suffix}"
        return self.reserve(name)

    def reserve(self, name: str) -> Path:
        if self._taken(name):
            raise FileExistsError(self.directory / name)
        self.used.add(name)
        return self.directory / name


def write_document(allocator: NameAllocator, document: AssembledDocument) -> Path:
    path = allocator.allocate(document.stem, document.suffix)
    path.write_text(document.text, encoding=ENCODING)
    return path
