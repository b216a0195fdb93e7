# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the per-document settings cache."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from aiplint.config import SettingsCache
from aiplint.core.errors import ConfigurationUnavailable
from aiplint.core.models import DocumentSettings


class _CountingProvider:
    def __init__(self, value: int = 7, *, unavailable: bool = False) -> None:
        self.value = value
        self.unavailable = unavailable
        self.calls: list[str] = []
        self.release = threading.Event()
        self.release.set()
        self._lock = threading.Lock()

    def fetch(self, document_key: str) -> DocumentSettings:
        with self._lock:
            self.calls.append(document_key)
        self.release.wait(timeout=5)
        if self.unavailable:
            raise ConfigurationUnavailable("host did not answer")
        return DocumentSettings(max_problems=self.value)


def test_without_provider_returns_global() -> None:
    cache = SettingsCache(global_settings=DocumentSettings(max_problems=3))

    assert cache.get_settings("file:///a.proto") == DocumentSettings(max_problems=3)
    assert not cache.supports_document_configuration


def test_default_global_settings() -> None:
    assert SettingsCache().get_settings("file:///a.proto").max_problems == 1000


def test_provider_results_are_memoized() -> None:
    provider = _CountingProvider()
    cache = SettingsCache(provider)

    assert cache.get_settings("a").max_problems == 7
    assert cache.get_settings("a").max_problems == 7
    assert cache.get_settings("b").max_problems == 7
    assert provider.calls == ["a", "b"]
    assert cache.supports_document_configuration


def test_concurrent_readers_share_one_fetch() -> None:
    provider = _CountingProvider()
    provider.release.clear()
    cache = SettingsCache(provider)

    with ThreadPoolExecutor(max_workers=4) as executor:
        futures = [executor.submit(cache.get_settings, "a") for _ in range(4)]
        provider.release.set()
        results = [future.result(timeout=5) for future in futures]

    assert {result.max_problems for result in results} == {7}
    assert provider.calls == ["a"]


def test_unavailable_falls_back_and_is_not_memoized() -> None:
    provider = _CountingProvider(unavailable=True)
    cache = SettingsCache(provider, DocumentSettings(max_problems=2))

    assert cache.get_settings("a").max_problems == 2
    assert "a" not in cache

    provider.unavailable = False
    assert cache.get_settings("a").max_problems == 7
    assert provider.calls == ["a", "a"]


def test_invalidate_all_and_remove_force_refetch() -> None:
    provider = _CountingProvider()
    cache = SettingsCache(provider)
    cache.get_settings("a")
    cache.get_settings("b")

    cache.remove("a")
    assert "a" not in cache
    assert "b" in cache

    cache.invalidate_all()
    assert "b" not in cache
    provider.value = 9
    assert cache.get_settings("b").max_problems == 9


def test_update_global_replaces_default() -> None:
    cache = SettingsCache()

    cache.update_global(DocumentSettings(max_problems=5))

    assert cache.get_settings("a").max_problems == 5
    assert cache.global_settings.max_problems == 5


class _FlakyProvider:
    """Provider whose first fetch fails with an arbitrary error."""

    def __init__(self, error: Exception) -> None:
        self.error: Exception | None = error
        self.calls = 0

    def fetch(self, document_key: str) -> DocumentSettings:
        self.calls += 1
        if self.error is not None:
            error, self.error = self.error, None
            raise error
        return DocumentSettings(max_problems=11)


def test_unexpected_provider_error_falls_back_and_is_not_memoized(caplog: pytest.LogCaptureFixture) -> None:
    provider = _FlakyProvider(RuntimeError("host connection dropped"))
    cache = SettingsCache(provider, DocumentSettings(max_problems=2))

    with caplog.at_level(logging.WARNING, logger="aiplint.config.settings"):
        first = cache.get_settings("a")

    assert first.max_problems == 2
    assert "a" not in cache
    assert "settings provider failed" in caplog.text
    with ThreadPoolExecutor(max_workers=1) as executor:
        second = executor.submit(cache.get_settings, "a").result(timeout=5)
    assert second.max_problems == 11
    assert provider.calls == 2


def test_waiters_on_a_failing_fetch_get_global_settings() -> None:
    provider = _CountingProvider()
    provider.release.clear()
    provider.fetch = _raise_after_release(provider)
    cache = SettingsCache(provider, DocumentSettings(max_problems=4))

    with ThreadPoolExecutor(max_workers=3) as executor:
        futures = [executor.submit(cache.get_settings, "a") for _ in range(3)]
        provider.release.set()
        results = [future.result(timeout=5) for future in futures]

    assert {result.max_problems for result in results} == {4}
    assert "a" not in cache


def _raise_after_release(provider: _CountingProvider):
    def fetch(document_key: str) -> DocumentSettings:
        provider.calls.append(document_key)
        provider.release.wait(timeout=5)
        raise ValueError("malformed host configuration")

    return fetch
