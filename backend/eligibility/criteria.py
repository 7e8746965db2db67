"""
Criterion evaluators for fit scoring.
Each evaluator scores one dimension of fit with points and a rationale.

Every evaluator shares the signature
``(profile, job, tables, max_points, **params) -> CriterionResult``
and never raises: missing data degrades to a documented default.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from .benchmarks import BenchmarkTables, normalise
from .models import CandidateProfile, EducationLevel, JobContext, OrgSize, PlanTier


@dataclass(frozen=True)
class CriterionResult:
    """Outcome of a single criterion."""
    points: int
    rationale: str


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_points(value: float, max_points: int) -> int:
    """Round half up and bound to [0, max_points]."""
    return int(clamp(math.floor(value + 0.5), 0, max_points))


def _money(value: float) -> str:
    return f"${value:,.0f}"


# Neutral skill coverage used when a job lists no requirements
NEUTRAL_SKILL_COVERAGE = 0.7


def skill_coverage(
    profile: CandidateProfile,
    job: Optional[JobContext],
    neutral: float = NEUTRAL_SKILL_COVERAGE,
) -> float:
    """
    Share of job requirements covered by the candidate's skills.

    Args:
        profile: Candidate profile
        job: Job context (optional)
        neutral: Coverage returned when the job lists no requirements

    Returns:
        Coverage ratio in [0, 1]
    """
    required = {normalise(r) for r in (job.requirements if job else [])} - {""}
    if not required:
        return neutral
    skills = {normalise(s) for s in profile.skills}
    return len(skills & required) / len(required)


# ---------------------------------------------------------------------------
# Salary
# ---------------------------------------------------------------------------

def score_salary(
    profile: CandidateProfile,
    job: Optional[JobContext],
    tables: BenchmarkTables,
    max_points: int,
    neutral_fraction: float = 0.5,
    under_tolerance: float = 0.5,
    over_tolerance: float = 0.5,
    benchmark_tolerance: float = 0.1,
    benchmark_partial_fraction: float = 0.5,
    experience_threshold_years: float = 8,
) -> CriterionResult:
    """
    Score expected salary against the job band or, failing that, the sector benchmark.

    Thresholds are inclusive: landing exactly on a bound satisfies it.
    """
    expected = profile.expected_salary
    if expected is None:
        points = round_points(max_points * neutral_fraction, max_points)
        return CriterionResult(
            points,
            f"Salary: missing expected salary; treated as within benchmark ({points} pts).",
        )

    if job is not None and job.has_salary_band:
        return _score_against_band(
            expected, job, max_points, under_tolerance, over_tolerance
        )

    band = tables.resolve_sector_band(job.industry if job else None)
    years = profile.years_experience or 0
    benchmark = band.for_years(years, experience_threshold_years)
    ratio = expected / benchmark

    if ratio >= 1.0:
        return CriterionResult(
            max_points,
            f"Salary: meets or exceeds sector benchmark of {_money(benchmark)} ({max_points} pts).",
        )
    if ratio >= 1.0 - benchmark_tolerance:
        points = round_points(max_points * benchmark_partial_fraction, max_points)
        return CriterionResult(
            points,
            f"Salary: within {benchmark_tolerance:.0%} of sector benchmark "
            f"({_money(benchmark)}) ({points} pts).",
        )
    return CriterionResult(
        0,
        f"Salary: falls below the indicative benchmark of {_money(benchmark)} (0 pts).",
    )


def _score_against_band(
    expected: float,
    job: JobContext,
    max_points: int,
    under_tolerance: float,
    over_tolerance: float,
) -> CriterionResult:
    # A missing bound collapses onto the one that is present
    effective_max = job.salary_max if job.salary_max is not None else job.salary_min
    effective_min = job.salary_min if job.salary_min is not None else effective_max
    band_text = f"{_money(effective_min)}-{_money(effective_max)}"

    if effective_min <= expected <= effective_max:
        return CriterionResult(
            max_points,
            f"Salary: expected {_money(expected)} fits within job band {band_text} ({max_points} pts).",
        )

    if expected < effective_min:
        gap = (effective_min - expected) / effective_min
        if gap > under_tolerance:
            return CriterionResult(
                0,
                f"Salary: expected {_money(expected)} is {gap:.0%} below job minimum "
                f"{_money(effective_min)} (0 pts).",
            )
        points = round_points(max_points * clamp(1 - gap * 0.5, 0.5, 1), max_points)
        return CriterionResult(
            points,
            f"Salary: expected {_money(expected)} is {gap:.0%} below job minimum "
            f"{_money(effective_min)}; negotiating room ({points} pts).",
        )

    over = (expected - effective_max) / effective_max
    if over > over_tolerance:
        return CriterionResult(
            0,
            f"Salary: expected {_money(expected)} is {over:.0%} above job maximum "
            f"{_money(effective_max)} (0 pts).",
        )
    points = round_points(max_points * clamp(1 - over, 0.1, 0.85), max_points)
    return CriterionResult(
        points,
        f"Salary: expected {_money(expected)} is {over:.0%} above job maximum "
        f"{_money(effective_max)}; may need compromise ({points} pts).",
    )


# ---------------------------------------------------------------------------
# Qualifications
# ---------------------------------------------------------------------------

def _coverage_suffix(profile: CandidateProfile, job: Optional[JobContext]) -> str:
    if job is None or not job.requirements:
        return ""
    coverage = skill_coverage(profile, job)
    return f" Skill coverage {coverage:.0%} of listed requirements."


def score_recognised_qualifications(
    profile: CandidateProfile,
    job: Optional[JobContext],
    tables: BenchmarkTables,
    max_points: int,
    partial_fraction: float = 0.5,
) -> CriterionResult:
    """Full points for a recognised institution or certification, partial for a degree."""
    suffix = _coverage_suffix(profile, job)

    recognised = (
        tables.is_recognised_institution(profile.education_institution)
        or tables.has_recognised_certification(profile.certifications)
    )
    if recognised:
        return CriterionResult(
            max_points,
            f"Qualifications: degree or certification recognised by global accreditation "
            f"({max_points} pts).{suffix}",
        )

    level = profile.education_level
    if level is not None and level.rank >= EducationLevel.BACHELORS.rank:
        points = round_points(max_points * partial_fraction, max_points)
        return CriterionResult(
            points,
            f"Qualifications: {level.value} degree recognised but outside top tier "
            f"({points} pts).{suffix}",
        )

    return CriterionResult(
        0,
        f"Qualifications: no recognised degree or certification detected (0 pts).{suffix}",
    )


_YEARS_PATTERN = re.compile(r"(\d+)\s*\+?\s*(?:years?|yrs?)", re.IGNORECASE)


def infer_required_education(requirements) -> Optional[EducationLevel]:
    """Infer the minimum education level named in job requirements."""
    joined = " ".join(requirements).lower()
    if "phd" in joined:
        return EducationLevel.PHD
    if "master's" in joined or "masters" in joined:
        return EducationLevel.MASTERS
    if "bachelor's" in joined or "degree" in joined:
        return EducationLevel.BACHELORS
    if "diploma" in joined:
        return EducationLevel.DIPLOMA
    return None


def infer_required_years(description: str, requirements) -> int:
    """Largest 'N years' figure mentioned in the description or requirements."""
    combined = "\n".join([description or ""] + list(requirements))
    return max((int(m) for m in _YEARS_PATTERN.findall(combined)), default=0)


def score_blended_qualifications(
    profile: CandidateProfile,
    job: Optional[JobContext],
    tables: BenchmarkTables,
    max_points: int,
    education_weight: float = 0.4,
    skills_weight: float = 0.4,
    experience_weight: float = 0.2,
) -> CriterionResult:
    """Blend education, skill coverage and experience into one qualification score."""
    requirements = job.requirements if job else []
    notes = []

    level = profile.education_level
    required_level = infer_required_education(requirements)
    if level is not None and required_level is not None:
        delta = level.rank - required_level.rank
        if delta >= 0:
            education = 1.0
            notes.append("education matches or exceeds requirement")
        else:
            education = clamp(0.6 + 0.1 * delta, 0.3, 0.8)
            notes.append("education below preferred requirement")
    elif level is not None:
        education = clamp(0.6 + level.rank * 0.1, 0.6, 0.95)
        notes.append("education evaluated against typical expectations")
    else:
        education = 0.5
        notes.append("education level missing; conservative score applied")

    coverage = skill_coverage(profile, job)
    if requirements:
        notes.append(f"skill coverage {coverage:.0%}")
    else:
        notes.append("no listed requirements; neutral skill coverage")

    years = profile.years_experience or 0
    required_years = infer_required_years(job.description if job else "", requirements)
    if required_years == 0:
        experience = clamp(years / 5, 0.4, 1)
    else:
        experience = clamp(years / required_years, 0, 1.1)
        if years >= required_years:
            notes.append("experience meets job expectations")
        else:
            notes.append(f"experience below stated {required_years} years")
    experience = clamp(experience, 0.3, 1)

    blended = (
        education * education_weight
        + coverage * skills_weight
        + experience * experience_weight
    ) * max_points
    points = round_points(blended, max_points)
    return CriterionResult(points, f"Qualifications: {'; '.join(notes)} ({points} pts).")


# ---------------------------------------------------------------------------
# Employer context
# ---------------------------------------------------------------------------

_SIZE_BASE_RATE = {
    OrgSize.MNC: 0.9,
    OrgSize.GOV: 0.8,
    OrgSize.STARTUP: 0.7,
    OrgSize.SME: 0.65,
}
_UNKNOWN_SIZE_RATE = 0.6


def score_employer_support(
    profile: CandidateProfile,
    job: Optional[JobContext],
    tables: BenchmarkTables,
    max_points: int,
    baseline_fraction: float = 0.25,
    min_fraction: float = 0.4,
    max_fraction: float = 1.0,
    local_hq_bonus: float = 0.05,
    label: str = "Support",
) -> CriterionResult:
    """
    Score employer context from organisation size, local HQ and plan tier.

    Without employer metadata a fixed baseline applies.
    """
    employer = job.employer if job else None
    if employer is None:
        points = round_points(max_points * baseline_fraction, max_points)
        return CriterionResult(
            points,
            f"{label}: employer data unavailable; applying conservative baseline ({points} pts).",
        )

    rate = _SIZE_BASE_RATE.get(employer.size, _UNKNOWN_SIZE_RATE)
    if employer.local_hq:
        rate += local_hq_bonus
    plan = profile.plan or PlanTier.FREEMIUM
    rate = clamp(rate * plan.multiplier, min_fraction, max_fraction)

    points = round_points(max_points * rate, max_points)
    size = employer.size.value if employer.size else "unknown-size"
    hq = ", locally headquartered" if employer.local_hq else ""
    return CriterionResult(
        points,
        f"{label}: employer fit evaluated for {size} organisation{hq} on {plan.value} plan ({points} pts).",
    )


def score_diversity(
    profile: CandidateProfile,
    job: Optional[JobContext],
    tables: BenchmarkTables,
    max_points: int,
    baseline_fraction: float = 0.25,
) -> CriterionResult:
    """Scale points by the employer's diversity score, or apply a baseline."""
    employer = job.employer if job else None
    if employer is None or employer.diversity_score is None:
        points = round_points(max_points * baseline_fraction, max_points)
        return CriterionResult(
            points,
            f"Diversity: employer mix data unavailable; applying conservative baseline ({points} pts).",
        )

    score = clamp(employer.diversity_score, 0, 1)
    points = round_points(max_points * score, max_points)
    if score >= 0.75:
        signal = "strong inclusivity signals"
    elif score >= 0.5:
        signal = "moderate inclusivity"
    else:
        signal = "limited inclusivity"
    return CriterionResult(points, f"Diversity: employer shows {signal} ({points} pts).")


# ---------------------------------------------------------------------------
# Bonuses
# ---------------------------------------------------------------------------

def score_shortage_bonus(
    profile: CandidateProfile,
    job: Optional[JobContext],
    tables: BenchmarkTables,
    max_points: int,
) -> CriterionResult:
    """Full bonus when the title or a requirement names a shortage occupation."""
    if job is not None:
        for text in [job.title] + list(job.requirements):
            occupation = tables.find_shortage_occupation(text)
            if occupation:
                return CriterionResult(
                    max_points,
                    f"Skills bonus: role aligns with shortage occupation "
                    f"'{occupation}' (+{max_points} pts).",
                )
    return CriterionResult(0, "Skills bonus: role not in shortage occupation list (+0 pts).")


def score_strategic_bonus(
    profile: CandidateProfile,
    job: Optional[JobContext],
    tables: BenchmarkTables,
    max_points: int,
) -> CriterionResult:
    """Strategic programme bonus; no participation data is collected yet."""
    return CriterionResult(0, "Strategic bonus: no programme participation data supplied (+0 pts).")
