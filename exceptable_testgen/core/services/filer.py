"""
Filer — the output sink for generated source artifacts.

A filer hands out one artifact per qualified name per round. Asking
for the same name twice in a round is an error; the caller decides
whether to start a new round. Writers are context managers, so the
underlying stream is released on every exit path.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".java"


class FilerError(Exception):
    """Raised when an artifact cannot be created or written."""


class SourceArtifact:
    """Handle to a not-yet-written source artifact."""

    def __init__(self, filer: Filer, name: str, path: Path) -> None:
        self.filer = filer
        self.name = name
        self.path = path

    @contextmanager
    def open_writer(self) -> Iterator[TextIO]:
        """Open the artifact for writing.

        Raises:
            FilerError: If the stream cannot be opened or written.
        """
        try:
            stream = self.filer._open(self)
        except OSError as e:
            raise FilerError(f"Cannot create {self.name}: {e}") from e

        try:
            yield stream
        except OSError as e:
            raise FilerError(f"Cannot write {self.name}: {e}") from e
        finally:
            self.filer._close(self, stream)

    def __repr__(self) -> str:
        return f"SourceArtifact({self.name!r})"


class Filer:
    """Writes artifacts below *output_dir*, one directory per package segment."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)
        self._created: list[str] = []

    @property
    def created(self) -> list[str]:
        """Names handed out in the current round, in creation order."""
        return list(self._created)

    def path_for(self, name: str) -> Path:
        """``com.x.FooTest`` → ``<output_dir>/com/x/FooTest.java``."""
        return self.output_dir.joinpath(*name.split(".")).with_suffix(SOURCE_SUFFIX)

    def create_source_file(self, name: str) -> SourceArtifact:
        """Reserve *name* for this round and return its artifact handle.

        Raises:
            FilerError: If *name* is malformed or was already created
                in this round.
        """
        if not name or any(not part for part in name.split(".")):
            raise FilerError(f"Invalid artifact name: {name!r}")
        if name in self._created:
            raise FilerError(f"Attempt to recreate a file for type {name}")

        self._created.append(name)
        path = self.path_for(name)
        logger.debug("Created source artifact %s → %s", name, path)
        return SourceArtifact(self, name, path)

    def reset(self) -> None:
        """Start a new round: previously created names may be created again."""
        self._created.clear()

    # ── Stream hooks ────────────────────────────────────────────

    def _open(self, artifact: SourceArtifact) -> TextIO:
        artifact.path.parent.mkdir(parents=True, exist_ok=True)
        return artifact.path.open("w", encoding="utf-8")

    def _close(self, artifact: SourceArtifact, stream: TextIO) -> None:
        stream.close()


class MemoryFiler(Filer):
    """Filer that keeps artifacts in memory (dry runs and tests)."""

    def __init__(self, output_dir: Path | None = None) -> None:
        super().__init__(output_dir or Path("."))
        self.files: dict[str, str] = {}

    def _open(self, artifact: SourceArtifact) -> TextIO:
        return io.StringIO()

    def _close(self, artifact: SourceArtifact, stream: TextIO) -> None:
        assert isinstance(stream, io.StringIO)
        self.files[artifact.name] = stream.getvalue()
        stream.close()
