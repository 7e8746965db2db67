"""
Scoring engine for candidate fit.
Runs every criterion of a scheme, totals the points and classifies the verdict.
"""

from dataclasses import replace
import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .benchmarks import BenchmarkTables
from .config import Config, ScoringPolicy, default_config
from .models import CandidateProfile, JobContext
from .registry import ScoringScheme, build_scheme
from .report import ScoreBreakdown, ScoreReport, Verdict

logger = logging.getLogger(__name__)

ProfileInput = Union[CandidateProfile, Mapping[str, Any]]
JobInput = Union[JobContext, Mapping[str, Any], None]


def classify_verdict(total_raw: int, policy: ScoringPolicy) -> Verdict:
    """
    Determine verdict from raw points.

    Args:
        total_raw: Sum of criterion points before normalisation
        policy: Thresholds; each band is inclusive of its lower bound

    Returns:
        Likely, Borderline or Unlikely
    """
    if total_raw >= policy.pass_threshold:
        return Verdict.LIKELY
    elif total_raw >= policy.borderline_threshold:
        return Verdict.BORDERLINE
    return Verdict.UNLIKELY


def normalise_total(total_raw: int, total_max_points: int) -> int:
    """Raw points as a whole percentage of the maximum, rounded half up."""
    return int(math.floor(total_raw / total_max_points * 100 + 0.5))


class ScoringEngine:
    """Calculates fit scores for candidate profiles under one scheme."""

    def __init__(self, scheme: ScoringScheme, tables: BenchmarkTables):
        """
        Initialize scoring engine.

        Args:
            scheme: Criteria and verdict policy to apply
            tables: Read-only benchmark tables shared across calls
        """
        self.scheme = scheme
        self.tables = tables

    def score(self, profile: CandidateProfile, job: Optional[JobContext] = None) -> ScoreReport:
        """
        Score a candidate profile, optionally against a job.

        Args:
            profile: Candidate profile
            job: Job context; population-neutral defaults apply when absent

        Returns:
            ScoreReport with breakdown and one note per criterion
        """
        points: Dict[str, int] = {}
        notes = []

        # Order only affects the order of notes
        for criterion in self.scheme.criteria:
            result = criterion.run(profile, job, self.tables)
            points[criterion.name] = result.points
            notes.append(result.rationale)

        breakdown = replace(ScoreBreakdown(), **points)
        total_raw = breakdown.total()
        policy = self.scheme.policy
        report = ScoreReport(
            total=normalise_total(total_raw, policy.total_max_points),
            total_raw=total_raw,
            breakdown=breakdown,
            verdict=classify_verdict(total_raw, policy),
            notes=tuple(notes),
            scheme=self.scheme.name,
        )

        logger.debug(
            f"[{self.scheme.name}] scored {job.title if job and job.title else 'general bar'}: "
            f"raw={total_raw}/{policy.total_max_points} verdict={report.verdict.value}"
        )
        return report


class Engines(dict):
    """Engines keyed by scheme name, remembering which one a config made the default."""

    def __init__(self, engines: Mapping[str, ScoringEngine], default_scheme: str):
        super().__init__(engines)
        self.default_scheme = default_scheme


def build_engines(config: Config) -> Engines:
    """Build one engine per configured scheme, sharing a single set of tables."""
    tables = config.benchmarks.to_tables()
    engines = {
        name: ScoringEngine(build_scheme(name, scheme), tables)
        for name, scheme in config.schemes.items()
    }
    return Engines(engines, default_scheme=config.default_scheme)


# Built at import; tables and schemes are immutable and safe to share
_DEFAULT_CONFIG = default_config()
_DEFAULT_ENGINES = build_engines(_DEFAULT_CONFIG)


def _coerce_profile(profile: ProfileInput) -> CandidateProfile:
    if isinstance(profile, CandidateProfile):
        return profile
    return CandidateProfile.model_validate(profile or {})


def _coerce_job(job: JobInput) -> Optional[JobContext]:
    if job is None or isinstance(job, JobContext):
        return job
    return JobContext.model_validate(job)


def _resolve_engine(
    scheme: Optional[str],
    engines: Optional[Mapping[str, ScoringEngine]],
) -> ScoringEngine:
    engines = engines if engines is not None else _DEFAULT_ENGINES
    # Plain dicts fall back to the built-in default
    name = scheme or getattr(engines, "default_scheme", None) or _DEFAULT_CONFIG.default_scheme
    if name not in engines:
        raise KeyError(
            f"Unknown scoring scheme: {name}. Available schemes: {', '.join(engines)}"
        )
    return engines[name]


def score_fit(
    profile: ProfileInput,
    job: JobInput = None,
    scheme: Optional[str] = None,
    engines: Optional[Mapping[str, ScoringEngine]] = None,
) -> ScoreReport:
    """
    Score a candidate against a job or the general employability bar.

    Args:
        profile: CandidateProfile or a plain mapping of profile fields
        job: JobContext, plain mapping, or None
        scheme: Scheme name; defaults to the configured default scheme
        engines: Engines from build_engines(); defaults to the built-in config

    Returns:
        ScoreReport

    Raises:
        pydantic.ValidationError: If the profile or job violates its type contract
        KeyError: If the scheme is not configured
    """
    engine = _resolve_engine(scheme, engines)
    return engine.score(_coerce_profile(profile), _coerce_job(job))


def compare_schemes(
    profile: ProfileInput,
    job: JobInput = None,
    schemes: Optional[Iterable[str]] = None,
    engines: Optional[Mapping[str, ScoringEngine]] = None,
) -> Dict[str, ScoreReport]:
    """
    Score the same input under several schemes side by side.

    Args:
        profile: CandidateProfile or plain mapping
        job: JobContext, plain mapping, or None
        schemes: Scheme names to run; defaults to every configured scheme

    Returns:
        Mapping of scheme name to report, in the order requested
    """
    available = engines if engines is not None else _DEFAULT_ENGINES
    names = list(schemes) if schemes is not None else list(available)
    candidate = _coerce_profile(profile)
    context = _coerce_job(job)
    return {
        name: _resolve_engine(name, available).score(candidate, context)
        for name in names
    }


def rank_jobs(
    profile: ProfileInput,
    jobs: Iterable[JobInput],
    scheme: Optional[str] = None,
    engines: Optional[Mapping[str, ScoringEngine]] = None,
) -> List[Tuple[JobContext, ScoreReport]]:
    """
    Score one candidate against many jobs, best fit first.

    Args:
        profile: CandidateProfile or plain mapping
        jobs: JobContext objects or plain mappings, e.g. from a JobCatalog
        scheme: Scheme name; defaults to the configured default scheme

    Returns:
        (job, report) pairs by descending total; ties keep input order
    """
    engine = _resolve_engine(scheme, engines)
    candidate = _coerce_profile(profile)
    scored = []
    for job in jobs:
        context = _coerce_job(job)
        scored.append((context, engine.score(candidate, context)))
    return sorted(scored, key=lambda pair: -pair[1].total)
