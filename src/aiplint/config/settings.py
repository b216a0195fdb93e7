# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-document settings cache shared by concurrent validation passes."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from threading import Lock
from typing import Protocol, runtime_checkable

from ..core.errors import ConfigurationUnavailable
from ..core.models import DocumentSettings

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class ConfigurationProvider(Protocol):
    """Host-side source of per-document settings."""

    def fetch(self, document_key: str) -> DocumentSettings:
        """Return the settings scoped to ``document_key``.

        Raises:
            ConfigurationUnavailable: If the host cannot answer.
        """


class SettingsCache:
    """Memoize per-document settings with a global fallback.

    Concurrent readers of the same key share a single pending fetch. Entries
    whose fetch failed, for any reason, are dropped and their readers get
    the global settings; the next read asks the provider again.
    """

    def __init__(
        self,
        provider: ConfigurationProvider | None = None,
        global_settings: DocumentSettings | None = None,
    ) -> None:
        self._provider = provider
        self._global = global_settings or DocumentSettings()
        self._entries: dict[str, Future[DocumentSettings]] = {}
        self._lock = Lock()

    @property
    def supports_document_configuration(self) -> bool:
        """Return ``True`` when settings are fetched per document."""

        return self._provider is not None

    @property
    def global_settings(self) -> DocumentSettings:
        with self._lock:
            return self._global

    def get_settings(self, document_key: str) -> DocumentSettings:
        """Return the settings governing ``document_key``.

        Args:
            document_key: Document URI used as the cache key.

        Returns:
            DocumentSettings: Cached, freshly fetched, or global settings.
        """

        if self._provider is None:
            return self.global_settings
        with self._lock:
            pending = self._entries.get(document_key)
            owner = pending is None
            if pending is None:
                pending = Future()
                self._entries[document_key] = pending
        if owner:
            self._resolve(document_key, pending)
        try:
            return pending.result()
        except ConfigurationUnavailable:
            return self.global_settings

    def _resolve(self, document_key: str, pending: Future[DocumentSettings]) -> None:
        assert self._provider is not None
        try:
            settings = self._provider.fetch(document_key)
        except ConfigurationUnavailable as exc:
            LOGGER.warning("settings for %s unavailable, using global defaults: %s", document_key, exc)
            self._fail(document_key, pending, exc)
            return
        except Exception as exc:
            LOGGER.warning("settings provider failed for %s, using global defaults", document_key, exc_info=exc)
            error = ConfigurationUnavailable(f"settings provider failed: {exc!r}")
            error.__cause__ = exc
            self._fail(document_key, pending, error)
            return
        pending.set_result(settings)

    def _fail(
        self,
        document_key: str,
        pending: Future[DocumentSettings],
        error: ConfigurationUnavailable,
    ) -> None:
        with self._lock:
            if self._entries.get(document_key) is pending:
                del self._entries[document_key]
        pending.set_exception(error)

    def invalidate_all(self) -> None:
        """Forget every cached entry."""

        with self._lock:
            self._entries.clear()

    def remove(self, document_key: str) -> None:
        """Forget the entry cached for ``document_key``."""

        with self._lock:
            self._entries.pop(document_key, None)

    def update_global(self, settings: DocumentSettings) -> None:
        """Replace the settings used when no per-document value applies."""

        with self._lock:
            self._global = settings

    def __contains__(self, document_key: object) -> bool:
        with self._lock:
            return document_key in self._entries


__all__ = ["ConfigurationProvider", "SettingsCache"]
