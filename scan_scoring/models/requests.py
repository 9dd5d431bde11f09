from typing import Any

from pydantic import BaseModel, Field

from scan_scoring.models.schemas.profile import RoleProfile


class ScoreRequest(BaseModel):
    # Left untyped so a non-mapping reaches the engine and is reported as 400
    benchmark_results: Any = Field(..., description="Benchmark id -> {passed, score | match_percentage}")
    detected_sections: list[str] = Field([], max_length=50, description="Section headings found in the document")
    preferences: RoleProfile = RoleProfile()


class DocumentIn(BaseModel):
    name: str = Field("", max_length=200)
    benchmark_results: Any = Field(..., description="Benchmark id -> {passed, score | match_percentage}")
    detected_sections: list[str] = Field([], max_length=50)
    section_issues: dict[str, int] = {}


class CompareRequest(BaseModel):
    document_a: DocumentIn
    document_b: DocumentIn
    preferences: RoleProfile = RoleProfile()
