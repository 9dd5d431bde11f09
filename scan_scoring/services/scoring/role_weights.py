"""Role-aware benchmark weights.

A caller's (job title, experience level, industry) is normalized once into a
ResolvedProfile, then turned into a weight table:

  1. base table of the first role bucket whose keywords match the title
  2. experience-level multipliers, rounded half-up
  3. every matching industry group in declared order, rounded after each

Weights never drop below 1. Resolution is pure, so tables are memoized on
the inputs that actually change them.
"""

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from scan_scoring.models.schemas.catalog import RoleBucketMatcher
from scan_scoring.models.schemas.profile import ExperienceLevel, ResolvedProfile, RoleProfile
from scan_scoring.services.scoring.catalog import DEFAULT_BUCKET, BenchmarkCatalog
from scan_scoring.services.scoring.numeric import round_half_up

logger = logging.getLogger(__name__)

MIN_WEIGHT = 1

_LEVEL_ALIASES: dict[str, ExperienceLevel] = {
    "entry": "entry",
    "entry-level": "entry",
    "entry level": "entry",
    "junior": "entry",
    "intern": "entry",
    "graduate": "entry",
    "mid": "mid",
    "mid-level": "mid",
    "mid level": "mid",
    "intermediate": "mid",
    "senior": "senior",
    "senior-level": "senior",
    "senior level": "senior",
    "lead": "senior",
    "executive": "executive",
    "exec": "executive",
    "director": "executive",
    "c-level": "executive",
}


def _clean(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def normalize_experience_level(value: object) -> ExperienceLevel | None:
    cleaned = _clean(value)
    if cleaned is None:
        return None
    return _LEVEL_ALIASES.get(cleaned.lower())


def match_role_bucket(job_title: str | None, matchers: Sequence[RoleBucketMatcher]) -> str:
    """First bucket with a keyword group fully contained in the title."""
    if not job_title:
        return DEFAULT_BUCKET
    title = job_title.lower()
    for matcher in matchers:
        for group in matcher.match_any:
            if group and all(keyword.lower() in title for keyword in group):
                return matcher.bucket
    return DEFAULT_BUCKET


def matching_groups(industry: str | None, keyword_groups: Sequence[Sequence[str]]) -> tuple[int, ...]:
    """Indices of groups with any keyword contained in the industry string."""
    if not industry:
        return ()
    industry = industry.lower()
    return tuple(
        index
        for index, keywords in enumerate(keyword_groups)
        if any(keyword.lower() in industry for keyword in keywords)
    )


def _scale(weight: int, multiplier: float) -> int:
    return max(MIN_WEIGHT, round_half_up(weight * multiplier))


class RoleWeightResolver:
    def __init__(self, catalog: BenchmarkCatalog) -> None:
        self._catalog = catalog
        # (bucket, level, industry group indices) -> weight table
        self._memo: dict[tuple, Mapping[str, int]] = {}

    def resolve_profile(
        self,
        job_title: str | None = None,
        experience_level: str | None = None,
        industry: str | None = None,
    ) -> ResolvedProfile:
        """Normalize raw caller input. Missing, blank or unrecognized values become None."""
        title = _clean(job_title)
        industry_clean = _clean(industry)
        level = normalize_experience_level(experience_level)
        if experience_level is not None and level is None and _clean(experience_level):
            logger.debug("Unrecognized experience level %r, ignoring", experience_level)

        bucket = match_role_bucket(title, self._catalog.role_buckets)
        if title and bucket == DEFAULT_BUCKET:
            logger.debug("No role bucket for title %r, using default weights", title)

        return ResolvedProfile(
            bucket=bucket,
            job_title=title,
            experience_level=level,
            industry=industry_clean.lower() if industry_clean else None,
        )

    def profile_from(self, preferences: RoleProfile | ResolvedProfile | None) -> ResolvedProfile:
        if preferences is None:
            return self.resolve_profile()
        if isinstance(preferences, ResolvedProfile):
            return preferences
        return self.resolve_profile(
            preferences.job_title, preferences.experience_level, preferences.industry
        )

    def resolve(
        self,
        job_title: str | None = None,
        experience_level: str | None = None,
        industry: str | None = None,
    ) -> Mapping[str, int]:
        return self.weights_for(self.resolve_profile(job_title, experience_level, industry))

    def weights_for(self, profile: ResolvedProfile) -> Mapping[str, int]:
        """Read-only weight table for an already-resolved profile."""
        groups = matching_groups(
            profile.industry, [m.keywords for m in self._catalog.industry_modifiers]
        )
        key = (profile.bucket, profile.experience_level, groups)
        table = self._memo.get(key)
        if table is None:
            table = MappingProxyType(self._build(profile.bucket, profile.experience_level, groups))
            self._memo[key] = table
        return table

    def _build(
        self, bucket: str, level: ExperienceLevel | None, groups: tuple[int, ...]
    ) -> dict[str, int]:
        weights = dict(self._catalog.bucket_weights(bucket))

        if level:
            for benchmark, multiplier in self._catalog.experience_modifiers.get(level, {}).items():
                if benchmark in weights:
                    weights[benchmark] = _scale(weights[benchmark], multiplier)

        for index in groups:
            modifier = self._catalog.industry_modifiers[index]
            for benchmark, multiplier in modifier.multipliers.items():
                if benchmark in weights:
                    weights[benchmark] = _scale(weights[benchmark], multiplier)

        return weights
