"""Exception hierarchy for depwalk.

Everything raised on purpose by the package derives from ``DepwalkError`` so
entry points can report failures uniformly.
"""

from __future__ import annotations


class DepwalkError(Exception):
    """Base exception for all depwalk errors."""


class MalformedScanError(DepwalkError):
    """Scanner output is not a collection of module records.

    Individual bad records are skipped during the build; this is raised only
    when the payload as a whole has the wrong shape, which usually means the
    scanner's output format changed.
    """


class ScanReadError(DepwalkError):
    """A scan file could not be read from disk."""


class ConfigError(DepwalkError):
    """Invalid configuration file or value."""
