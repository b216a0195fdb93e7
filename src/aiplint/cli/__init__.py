# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line interface for aiplint; the Typer application lives in :mod:`aiplint.cli.app`."""
