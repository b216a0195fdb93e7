# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host notifications consumed by the validation orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from ..core.documents import TextDocument
from ..core.models import DocumentSettings


@dataclass(frozen=True, slots=True)
class DocumentOpened:
    document: TextDocument


@dataclass(frozen=True, slots=True)
class DocumentChanged:
    document: TextDocument


@dataclass(frozen=True, slots=True)
class DocumentSaved:
    document: TextDocument


@dataclass(frozen=True, slots=True)
class DocumentClosed:
    uri: str


@dataclass(frozen=True, slots=True)
class ConfigurationChanged:
    """Settings changed on the host; ``settings`` carries a new global default."""

    settings: DocumentSettings | None = None


ValidationEvent: TypeAlias = DocumentOpened | DocumentChanged | DocumentSaved | DocumentClosed | ConfigurationChanged

__all__ = [
    "ConfigurationChanged",
    "DocumentChanged",
    "DocumentClosed",
    "DocumentOpened",
    "DocumentSaved",
    "ValidationEvent",
]
