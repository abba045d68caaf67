# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Exceptions raised by the layout engine.

"""
Exceptions for raptorgraph.

Layout calls never raise for graph input (empty, degenerate, or dangling
edges). These exceptions signal caller mistakes: an unknown layout name,
an unreadable configuration file, or an invalid option value.
"""


class RaptorGraphError(Exception):
    """Base class for all raptorgraph errors."""


class UnknownLayoutError(RaptorGraphError, KeyError):
    """Requested layout algorithm is not registered."""

    def __init__(self, name: str, available=()):
        self.name = name
        self.available = sorted(available)
        super().__init__(name)

    def __str__(self) -> str:
        return (f"Unknown layout '{self.name}'. "
                f"Available: {', '.join(self.available)}")


class ConfigError(RaptorGraphError):
    """Configuration file could not be read or parsed."""
