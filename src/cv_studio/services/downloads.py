"""Download sinks: where finished export artifacts are delivered."""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

__all__ = [
    "MEDIA_TYPES",
    "DirectoryDownloadSink",
    "DownloadSink",
    "ExportArtifact",
    "MemoryDownloadSink",
]

MEDIA_TYPES: dict[str, str] = {
    "pdf": "application/pdf",
    "png": "image/png",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: bytes
    media_type: str

    @property
    def size(self) -> int:
        return len(self.content)


class DownloadSink(ABC):
    """Receives a complete artifact; partial artifacts never reach a sink."""

    @abstractmethod
    def deliver(self, artifact: ExportArtifact) -> str:
        """Persist *artifact* and return where it ended up."""


class DirectoryDownloadSink(DownloadSink):
    """Write artifacts into a directory.

    The bytes go to a temporary file next to the destination which is then
    renamed into place, so a failed write never leaves a partial file under
    the final name.
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def deliver(self, artifact: ExportArtifact) -> str:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / Path(artifact.filename).name
        fd, temp_name = tempfile.mkstemp(dir=self.directory, prefix=".", suffix=".part")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(artifact.content)
            os.replace(temp_name, target)
        except OSError:
            Path(temp_name).unlink(missing_ok=True)
            raise
        logger.info("Saved %s (%d bytes)", target, artifact.size)
        return str(target)


class MemoryDownloadSink(DownloadSink):
    """Keep delivered artifacts in memory (used by the HTTP API and tests)."""

    def __init__(self) -> None:
        self.artifacts: list[ExportArtifact] = []

    @property
    def last(self) -> ExportArtifact | None:
        return self.artifacts[-1] if self.artifacts else None

    def deliver(self, artifact: ExportArtifact) -> str:
        self.artifacts.append(artifact)
        return f"memory://{artifact.filename}"
