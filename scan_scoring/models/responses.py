from pydantic import BaseModel

from scan_scoring.models.schemas.profile import ResolvedProfile


class HealthResponse(BaseModel):
    status: str = "ok"
    catalogs: dict[str, str] = {}  # domain -> loaded catalog version


class WeightsResponse(BaseModel):
    domain: str
    catalog_version: str = ""
    profile: ResolvedProfile = ResolvedProfile()
    weights: dict[str, int] = {}
