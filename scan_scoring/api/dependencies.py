"""Shared dependencies for API routes."""

from fastapi import HTTPException

from scan_scoring.errors import UnknownDomainError
from scan_scoring.services.scoring import registry
from scan_scoring.services.scoring.engine import ScoringEngine


def get_scoring_engine(domain: str) -> ScoringEngine:
    try:
        return registry.get_engine(domain)
    except UnknownDomainError as e:
        raise HTTPException(status_code=404, detail=str(e))
