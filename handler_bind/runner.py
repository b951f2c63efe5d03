"""Batch runner over files and directories."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel

from . import constants
from .api import transform_document
from .transform_types import DEFAULT_CONFIG, TransformConfig

logger = logging.getLogger(__name__)

_SKIPPED_DIRS: frozenset[str] = frozenset({"node_modules", ".git"})


class FileStatus(str, Enum):
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    FAILED = "failed"


class FileResult(BaseModel):
    path: str
    status: FileStatus
    components: int = 0
    handlers: int = 0
    error: str | None = None


class BatchReport(BaseModel):
    results: list[FileResult] = []

    def count(self, status: FileStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def failed(self) -> bool:
        return self.count(FileStatus.FAILED) > 0

    def summary(self) -> str:
        return (
            f"{len(self.results)} file(s): "
            f"{self.count(FileStatus.CHANGED)} changed, "
            f"{self.count(FileStatus.UNCHANGED)} unchanged, "
            f"{self.count(FileStatus.FAILED)} failed"
        )


def collect_files(
    paths: Iterable[str | Path], extensions: tuple[str, ...] = constants.DEFAULT_EXTENSIONS
) -> list[Path]:
    """Expand directories recursively into source files, in sorted order.

    Explicitly named files are kept whatever their extension.
    """
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if not path.is_dir():
            files.append(path)
            continue
        files.extend(
            sorted(
                candidate
                for candidate in path.rglob("*")
                if candidate.is_file()
                and candidate.suffix in extensions
                and not _SKIPPED_DIRS.intersection(candidate.relative_to(path).parts)
            )
        )
    return files


def transform_file(path: Path, config: TransformConfig = DEFAULT_CONFIG, write: bool = False) -> FileResult:
    """Transform one file; write the result back when *write* is set and it changed."""
    source = path.read_text(encoding="utf-8")
    outcome = transform_document(source, config)
    if not outcome.changed:
        return FileResult(path=str(path), status=FileStatus.UNCHANGED)
    if write:
        path.write_text(outcome.output, encoding="utf-8")
        logger.info("Rewrote %s", path)
    return FileResult(
        path=str(path),
        status=FileStatus.CHANGED,
        components=len(outcome.components),
        handlers=sum(len(report.bound) for report in outcome.components),
    )


def run_batch(
    paths: Iterable[str | Path],
    config: TransformConfig | None = None,
    write: bool = False,
    extensions: tuple[str, ...] = constants.DEFAULT_EXTENSIONS,
) -> BatchReport:
    """Transform every file under *paths*.

    A file that fails to read, parse or transform is reported as failed and
    the batch continues with the next one.
    """
    config = config or DEFAULT_CONFIG
    report = BatchReport()
    files = collect_files(paths, extensions)
    for i, path in enumerate(files):
        logger.info("[%d/%d] %s", i + 1, len(files), path)
        try:
            result = transform_file(path, config, write)
        except Exception as exc:
            logger.warning("Failed to transform %s: %s", path, exc)
            result = FileResult(path=str(path), status=FileStatus.FAILED, error=str(exc))
        report.results.append(result)
    return report
