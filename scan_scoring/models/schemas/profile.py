"""Caller targeting context, raw and resolved."""

from typing import Literal

from pydantic import BaseModel

ExperienceLevel = Literal["entry", "mid", "senior", "executive"]


class RoleProfile(BaseModel):
    """Optional targeting preferences supplied by the caller."""
    job_title: str | None = None
    experience_level: str | None = None
    industry: str | None = None


class ResolvedProfile(BaseModel):
    """RoleProfile after the single normalization step.

    Every field is either a usable value or None; downstream scoring never
    re-checks raw strings. Frozen so it can key the weight-table memo.
    """
    model_config = {"frozen": True}

    bucket: str = "default"
    job_title: str | None = None
    experience_level: ExperienceLevel | None = None
    industry: str | None = None  # lower-cased
