from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from scan_scoring.api.dependencies import get_scoring_engine
from scan_scoring.config import settings
from scan_scoring.errors import InvalidBenchmarkResults
from scan_scoring.models.requests import CompareRequest, ScoreRequest
from scan_scoring.models.responses import HealthResponse, WeightsResponse
from scan_scoring.models.schemas.breakdown import ScoreBreakdown
from scan_scoring.models.schemas.comparison import ComparisonResult
from scan_scoring.services.scoring import registry
from scan_scoring.services.scoring.engine import ScoringEngine

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", catalogs=registry.loaded_versions())


@router.get("/{domain}/weights", response_model=WeightsResponse)
@limiter.limit(settings.rate_limit)
async def weights(
    request: Request,
    job_title: str | None = None,
    experience_level: str | None = None,
    industry: str | None = None,
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    profile = engine.resolve_profile(job_title, experience_level, industry)
    return WeightsResponse(
        domain=engine.domain,
        catalog_version=engine.version,
        profile=profile,
        weights=dict(engine.resolver.weights_for(profile)),
    )


@router.post("/{domain}/score", response_model=ScoreBreakdown)
@limiter.limit(settings.rate_limit)
async def score(
    request: Request,
    body: ScoreRequest,
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    prefs = body.preferences
    try:
        return engine.score_document(
            body.benchmark_results,
            body.detected_sections,
            prefs.job_title,
            prefs.experience_level,
            prefs.industry,
        )
    except InvalidBenchmarkResults as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{domain}/compare", response_model=ComparisonResult)
@limiter.limit(settings.rate_limit)
async def compare(
    request: Request,
    body: CompareRequest,
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    try:
        documents = [
            engine.scored_document(
                doc.benchmark_results,
                name=doc.name,
                detected_sections=doc.detected_sections,
                section_issues=doc.section_issues,
                preferences=body.preferences,
            )
            for doc in (body.document_a, body.document_b)
        ]
    except InvalidBenchmarkResults as e:
        raise HTTPException(status_code=400, detail=str(e))
    return engine.compare(documents[0], documents[1], body.preferences)
