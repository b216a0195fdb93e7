# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Open text documents and the store tracking them."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from urllib.parse import urlparse
from urllib.request import url2pathname

from pydantic import BaseModel, ConfigDict, Field

FILE_SCHEME = "file"


def uri_to_path(uri: str) -> Path:
    """Return the file-system path addressed by ``uri``.

    ``file://`` URIs are percent-decoded; strings without a scheme are taken
    as paths unchanged.

    Args:
        uri: Editor document identifier.

    Returns:
        Path: Path of the document on disk.

    Raises:
        ValueError: If ``uri`` uses a scheme other than ``file``.
    """

    parsed = urlparse(uri)
    if not parsed.scheme or len(parsed.scheme) == 1:
        # No scheme, or a Windows drive letter mistaken for one.
        return Path(uri)
    if parsed.scheme != FILE_SCHEME:
        raise ValueError(f"cannot map '{parsed.scheme}:' URI to a file path: {uri}")
    path = url2pathname(parsed.path)
    if parsed.netloc and parsed.netloc != "localhost":
        path = f"//{parsed.netloc}{path}"
    return Path(path)


def path_to_uri(path: Path) -> str:
    """Return the ``file://`` URI for ``path`` (made absolute first)."""

    return path.resolve().as_uri()


class TextDocument(BaseModel):
    """Snapshot of an open document as seen by the validation pipeline."""

    model_config = ConfigDict(frozen=True)

    uri: str
    text: str = ""
    version: int = Field(default=0)

    @property
    def path(self) -> Path:
        """Return the file-system path backing the document.

        Raises:
            ValueError: If the document URI does not address a local file.
        """

        return uri_to_path(self.uri)

    @classmethod
    def from_path(cls, path: Path, *, version: int = 0) -> TextDocument:
        """Load the document stored at ``path``.

        Args:
            path: File to read as UTF-8 text.
            version: Version number assigned to the snapshot.

        Returns:
            TextDocument: Snapshot whose URI is the ``file://`` form of ``path``.
        """

        return cls(uri=path_to_uri(path), text=path.read_text(encoding="utf-8"), version=version)


class DocumentStore:
    """Thread-safe mapping of open documents keyed by URI."""

    def __init__(self) -> None:
        self._documents: dict[str, TextDocument] = {}
        self._lock = Lock()

    def open(self, document: TextDocument) -> None:
        """Track ``document`` as open, replacing any previous snapshot."""

        with self._lock:
            self._documents[document.uri] = document

    def update(self, document: TextDocument) -> None:
        """Record a newer snapshot of ``document``; unknown documents are opened."""

        self.open(document)

    def close(self, uri: str) -> TextDocument | None:
        """Forget the document at ``uri`` and return its last snapshot."""

        with self._lock:
            return self._documents.pop(uri, None)

    def get(self, uri: str) -> TextDocument | None:
        """Return the current snapshot for ``uri`` when the document is open."""

        with self._lock:
            return self._documents.get(uri)

    def all(self) -> list[TextDocument]:
        """Return every open document in the order they were first opened."""

        with self._lock:
            return list(self._documents.values())

    def __contains__(self, uri: object) -> bool:
        with self._lock:
            return uri in self._documents

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)


__all__ = ["DocumentStore", "TextDocument", "path_to_uri", "uri_to_path"]
