"""
Pytest configuration and shared fixtures.
"""

import pytest

from eligibility.benchmarks import DEFAULT_TABLES
from eligibility.models import CandidateProfile, EmployerMeta, JobContext


@pytest.fixture
def tables():
    """Built-in benchmark tables."""
    return DEFAULT_TABLES


@pytest.fixture
def ml_candidate() -> CandidateProfile:
    """Masters graduate from a recognised institution."""
    return CandidateProfile(
        education_level="Masters",
        education_institution="National University of Singapore",
        years_experience=5,
        expected_salary=7500,
        skills=["python", "tensorflow"],
    )


@pytest.fixture
def ml_job() -> JobContext:
    """Shortage-list role without a salary band."""
    return JobContext(
        title="Senior Machine Learning Engineer",
        industry="technology",
        requirements=["python", "tensorflow", "machine learning"],
    )


@pytest.fixture
def junior_candidate() -> CandidateProfile:
    """Diploma holder asking far above the market."""
    return CandidateProfile(
        education_level="Diploma",
        skills=["excel"],
        expected_salary=15000,
        years_experience=1,
    )


@pytest.fixture
def banded_job() -> JobContext:
    """Job with an explicit salary band and no shortage title."""
    return JobContext(
        salary_min=5000,
        salary_max=7000,
        requirements=["python", "machine learning"],
    )


@pytest.fixture
def employer_job() -> JobContext:
    """Job carrying full employer metadata."""
    return JobContext(
        title="Software Engineer",
        industry="Technology",
        salary_min=7000,
        salary_max=9000,
        requirements=["typescript", "react", "node.js", "3+ years experience"],
        employer=EmployerMeta(size="MNC", local_hq=True, diversity_score=0.8),
    )
