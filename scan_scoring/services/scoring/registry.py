"""Lazy-loading engine registry, one ScoringEngine per document domain."""

import logging

from scan_scoring.config import settings
from scan_scoring.errors import UnknownDomainError
from scan_scoring.services.scoring.catalog import available_domains
from scan_scoring.services.scoring.engine import ScoringEngine

logger = logging.getLogger(__name__)

_registry: dict[str, ScoringEngine] = {}


def _catalog_dir() -> str | None:
    return settings.catalog_dir or None


def _create_engine(domain: str) -> ScoringEngine:
    """Factory: an engine for any domain with a catalog file."""
    if domain not in available_domains(_catalog_dir()):
        raise UnknownDomainError(domain)
    return ScoringEngine(domain, _catalog_dir())


def get_engine(domain: str) -> ScoringEngine:
    """Get the engine for a domain, creating and loading it on first access."""
    if domain not in _registry:
        _registry[domain] = _create_engine(domain)
    engine = _registry[domain]
    engine.ensure_loaded()
    return engine


def preload(*domains: str) -> None:
    """Pre-load several domains (e.g. at startup)."""
    for domain in domains:
        get_engine(domain)


def loaded_versions() -> dict[str, str]:
    """Catalog version per loaded domain."""
    return {
        domain: engine.catalog.version
        for domain, engine in _registry.items()
        if engine.is_loaded
    }


def clear() -> None:
    """Drop all engines. Useful for testing."""
    _registry.clear()
