"""Exceptions raised by the scoring core.

Scoring itself degrades to neutral defaults instead of raising; these cover
the few cases that must reach the caller.
"""


class ScoringError(Exception):
    """Base class for scoring failures."""


class CatalogError(ScoringError):
    """A curated table is missing or internally inconsistent.

    Raised while loading a catalog, never per request.
    """


class InvalidBenchmarkResults(ScoringError, TypeError):
    """The benchmark result set handed to the engine is not a mapping."""


class UnknownDomainError(ScoringError, KeyError):
    """No catalog is registered for the requested document domain."""

    def __init__(self, domain: str) -> None:
        super().__init__(domain)
        self.domain = domain

    def __str__(self) -> str:
        return f"Unknown scoring domain: {self.domain}"
