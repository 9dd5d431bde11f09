"""BenchmarkCatalog: loads and verifies one domain's curated tables.

Catalogs are YAML files (`<domain>.yaml`) shipped in scan_scoring/catalogs.
A catalog is loaded once per process and exposed read-only, so concurrent
scoring calls share it without locking. Any inconsistency between tables is
a configuration bug and raises CatalogError at load time.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import yaml
from pydantic import ValidationError

from scan_scoring.errors import CatalogError
from scan_scoring.models.schemas.catalog import (
    CatalogConfig,
    ComparisonConstants,
    GapRule,
    IndustryCombo,
    IndustryModifier,
    JudgmentConversion,
    RoleBucketMatcher,
    SectionDefinition,
    SynergyRule,
)

logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "default"
CATALOG_DIR = Path(__file__).resolve().parents[2] / "catalogs"

# Importance tables must sum to 1.0 within this tolerance
IMPORTANCE_TOLERANCE = 0.01


def _freeze(table: Mapping) -> Mapping:
    return MappingProxyType(dict(table))


class BenchmarkCatalog:
    """Read-only view over a validated CatalogConfig."""

    def __init__(self, config: CatalogConfig) -> None:
        problems = validate_catalog(config)
        if problems:
            raise CatalogError(
                f"Catalog '{config.domain}' v{config.version} is inconsistent: "
                + "; ".join(problems)
            )

        self.domain: str = config.domain
        self.version: str = config.version
        self.document_noun: str = config.document_noun
        self.score_range: tuple[float, float] = config.score_range
        self.judgment_conversion: JudgmentConversion | None = config.judgment_conversion
        self.comparison: ComparisonConstants = config.comparison

        self.benchmark_ids: tuple[str, ...] = tuple(config.benchmarks)
        self.labels: Mapping[str, str] = _freeze(
            {bid: entry.label or bid for bid, entry in config.benchmarks.items()}
        )

        default_importance = config.section_importance[DEFAULT_BUCKET]
        self.sections: tuple[SectionDefinition, ...] = tuple(
            section.model_copy(update={"importance": default_importance.get(section.name, 0.0)})
            for section in config.sections
        )
        self._sections_by_name = _freeze({s.name: s for s in self.sections})

        self.role_buckets: tuple[RoleBucketMatcher, ...] = config.role_buckets
        self.base_weights: Mapping[str, Mapping[str, int]] = _freeze(
            {bucket: _freeze(table) for bucket, table in config.weights.items()}
        )
        self.experience_modifiers: Mapping[str, Mapping[str, float]] = _freeze(
            {level: _freeze(table) for level, table in config.experience_modifiers.items()}
        )
        self.industry_modifiers: tuple[IndustryModifier, ...] = config.industry_modifiers
        self.section_importance: Mapping[str, Mapping[str, float]] = _freeze(
            {bucket: _freeze(table) for bucket, table in config.section_importance.items()}
        )
        self.level_importance: Mapping[str, Mapping[str, float]] = _freeze(
            {level: _freeze(table) for level, table in config.level_importance.items()}
        )
        self.critical_benchmarks: tuple[str, ...] = config.critical_benchmarks
        self.industry_combos: tuple[IndustryCombo, ...] = config.industry_combos

    def __repr__(self) -> str:
        return f"BenchmarkCatalog(domain={self.domain!r}, version={self.version!r})"

    @property
    def section_names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.sections)

    def has_benchmark(self, benchmark_id: str) -> bool:
        return benchmark_id in self.labels

    def label(self, benchmark_id: str) -> str:
        return self.labels.get(benchmark_id, benchmark_id)

    def section(self, name: str) -> SectionDefinition | None:
        return self._sections_by_name.get(name)

    def bucket_weights(self, bucket: str) -> Mapping[str, int]:
        """Base weight table for a bucket, `default` on a miss."""
        return self.base_weights.get(bucket) or self.base_weights[DEFAULT_BUCKET]

    def importance_for(self, bucket: str, experience_level: str | None = None) -> Mapping[str, float]:
        """Section importance table for a resolved profile.

        A per-level table (when the catalog defines one for the level) wins
        over the bucket table; an unknown bucket falls back to `default`.
        """
        if experience_level and experience_level in self.level_importance:
            return self.level_importance[experience_level]
        return self.section_importance.get(bucket) or self.section_importance[DEFAULT_BUCKET]


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

def validate_catalog(config: CatalogConfig) -> list[str]:
    """Cross-check the tables of a catalog. Returns a list of problems."""
    problems: list[str] = []
    known = set(config.benchmarks)
    section_names = [s.name for s in config.sections]
    known_sections = set(section_names)

    low, high = config.score_range
    if low >= high:
        problems.append(f"score_range {config.score_range} is empty")

    if len(known_sections) != len(section_names):
        problems.append("duplicate section names")

    # Weight tables: default must exist, every bucket covers the catalog
    if DEFAULT_BUCKET not in config.weights:
        problems.append("weights: missing 'default' bucket")
    for bucket, table in config.weights.items():
        missing = known - set(table)
        unknown = set(table) - known
        if missing:
            problems.append(f"weights[{bucket}] missing {sorted(missing)}")
        if unknown:
            problems.append(f"weights[{bucket}] has unknown {sorted(unknown)}")
        non_positive = sorted(b for b, w in table.items() if w < 1)
        if non_positive:
            problems.append(f"weights[{bucket}] non-positive {non_positive}")

    for matcher in config.role_buckets:
        if matcher.bucket not in config.weights:
            problems.append(f"role_buckets: '{matcher.bucket}' has no weight table")
        if not matcher.match_any or any(not group for group in matcher.match_any):
            problems.append(f"role_buckets: '{matcher.bucket}' has an empty keyword group")

    for section in config.sections:
        unknown = set(section.benchmarks) - known
        if unknown:
            problems.append(f"section '{section.name}' has unknown {sorted(unknown)}")
        members = set(section.benchmarks)
        for rule in section.rules:
            if isinstance(rule, SynergyRule):
                referenced = set(rule.benchmarks)
            elif isinstance(rule, GapRule):
                referenced = {rule.benchmark, rule.correlated}
            else:
                referenced = set()
            if not referenced <= members:
                problems.append(
                    f"section '{section.name}' rule references non-members "
                    f"{sorted(referenced - members)}"
                )

    for level, table in config.experience_modifiers.items():
        problems.extend(_check_multipliers(f"experience_modifiers[{level}]", table, known))
    for index, modifier in enumerate(config.industry_modifiers):
        if not modifier.keywords:
            problems.append(f"industry_modifiers[{index}] has no keywords")
        problems.extend(
            _check_multipliers(f"industry_modifiers[{index}]", modifier.multipliers, known)
        )

    # Importance tables
    if DEFAULT_BUCKET not in config.section_importance:
        problems.append("section_importance: missing 'default' bucket")
    for bucket, table in config.section_importance.items():
        if bucket not in config.weights:
            problems.append(f"section_importance: unknown bucket '{bucket}'")
        problems.extend(_check_importance(f"section_importance[{bucket}]", table, known_sections))
    for level, table in config.level_importance.items():
        problems.extend(_check_importance(f"level_importance[{level}]", table, known_sections))

    unknown_critical = set(config.critical_benchmarks) - known
    if unknown_critical:
        problems.append(f"critical_benchmarks has unknown {sorted(unknown_critical)}")

    for index, combo in enumerate(config.industry_combos):
        if not combo.keywords:
            problems.append(f"industry_combos[{index}] has no keywords")
        for rule in combo.rules:
            unknown = set(rule.sections) - known_sections
            if unknown:
                problems.append(f"industry_combos[{index}] references unknown sections {sorted(unknown)}")

    return problems


def _check_multipliers(where: str, table: Mapping[str, float], known: set[str]) -> list[str]:
    problems = []
    unknown = set(table) - known
    if unknown:
        problems.append(f"{where} has unknown {sorted(unknown)}")
    if any(m <= 0 for m in table.values()):
        problems.append(f"{where} has a non-positive multiplier")
    return problems


def _check_importance(where: str, table: Mapping[str, float], known_sections: set[str]) -> list[str]:
    problems = []
    unknown = set(table) - known_sections
    if unknown:
        problems.append(f"{where} has unknown sections {sorted(unknown)}")
    if any(v < 0 for v in table.values()):
        problems.append(f"{where} has a negative importance")
    total = sum(table.values())
    if abs(total - 1.0) > IMPORTANCE_TOLERANCE:
        problems.append(f"{where} sums to {total:.3f}, expected 1.0")
    return problems


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def catalog_path(domain: str, catalog_dir: str | Path | None = None) -> Path:
    return Path(catalog_dir or CATALOG_DIR) / f"{domain}.yaml"


def available_domains(catalog_dir: str | Path | None = None) -> list[str]:
    """Domains with a catalog file in the catalog directory."""
    directory = Path(catalog_dir or CATALOG_DIR)
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.glob("*.yaml"))


def parse_catalog(raw: object, source: str = "<memory>") -> BenchmarkCatalog:
    """Build a catalog from already-parsed YAML/JSON data."""
    if not isinstance(raw, Mapping):
        raise CatalogError(f"{source}: catalog root must be a mapping")
    try:
        config = CatalogConfig.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(f"{source}: invalid catalog: {e}") from e
    return BenchmarkCatalog(config)


def load_catalog(domain: str, catalog_dir: str | Path | None = None) -> BenchmarkCatalog:
    """Load and verify `<domain>.yaml`."""
    path = catalog_path(domain, catalog_dir)
    if not path.exists():
        raise CatalogError(f"No catalog for domain '{domain}' at {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"{path}: malformed YAML: {e}") from e

    catalog = parse_catalog(raw, source=str(path))
    if catalog.domain != domain:
        raise CatalogError(f"{path}: declares domain '{catalog.domain}', expected '{domain}'")

    logger.info(
        "Loaded %s catalog v%s: %d benchmarks, %d sections, %d role buckets",
        catalog.domain,
        catalog.version,
        len(catalog.benchmark_ids),
        len(catalog.sections),
        len(catalog.base_weights),
    )
    return catalog
