"""
Tests for the criterion evaluators.
"""

import pytest

from eligibility.criteria import (
    NEUTRAL_SKILL_COVERAGE,
    infer_required_education,
    infer_required_years,
    round_points,
    score_blended_qualifications,
    score_diversity,
    score_employer_support,
    score_recognised_qualifications,
    score_salary,
    score_shortage_bonus,
    score_strategic_bonus,
    skill_coverage,
)
from eligibility.models import CandidateProfile, EducationLevel, EmployerMeta, JobContext


def _job(**kwargs) -> JobContext:
    return JobContext(**kwargs)


class TestRoundPoints:
    def test_rounds_half_up(self):
        assert round_points(10.5, 20) == 11
        assert round_points(12.5, 20) == 13

    def test_clamps_to_bounds(self):
        assert round_points(-3, 20) == 0
        assert round_points(25, 20) == 20


class TestSalaryMissing:
    def test_neutral_default(self, tables):
        result = score_salary(CandidateProfile(), None, tables, 20)
        assert result.points == 10
        assert "missing expected salary" in result.rationale

    def test_neutral_default_is_configurable(self, tables):
        result = score_salary(CandidateProfile(), None, tables, 40, neutral_fraction=0.75)
        assert result.points == 30


class TestSalaryAgainstBand:
    def test_within_band(self, tables):
        profile = CandidateProfile(expected_salary=8000)
        result = score_salary(profile, _job(salary_min=7000, salary_max=9000), tables, 20)
        assert result.points == 20
        assert "fits within job band" in result.rationale

    @pytest.mark.parametrize("expected", [7000, 9000])
    def test_band_edges_are_inclusive(self, tables, expected):
        profile = CandidateProfile(expected_salary=expected)
        result = score_salary(profile, _job(salary_min=7000, salary_max=9000), tables, 20)
        assert result.points == 20

    def test_slightly_under_minimum(self, tables):
        profile = CandidateProfile(expected_salary=6000)
        result = score_salary(profile, _job(salary_min=7000, salary_max=9000), tables, 20)
        # gap 1/7 -> 20 * (1 - 0.0714)
        assert result.points == 19
        assert "below job minimum" in result.rationale

    def test_under_minimum_at_tolerance(self, tables):
        profile = CandidateProfile(expected_salary=3500)
        result = score_salary(profile, _job(salary_min=7000, salary_max=9000), tables, 20)
        assert result.points == 15

    def test_far_under_minimum(self, tables):
        profile = CandidateProfile(expected_salary=3000)
        result = score_salary(profile, _job(salary_min=7000, salary_max=9000), tables, 20)
        assert result.points == 0

    def test_over_maximum_is_capped(self, tables):
        profile = CandidateProfile(expected_salary=8100)
        result = score_salary(profile, _job(salary_min=6000, salary_max=8000), tables, 20)
        assert result.points == 17
        assert "above job maximum" in result.rationale

    def test_over_maximum_reduced(self, tables):
        profile = CandidateProfile(expected_salary=10000)
        result = score_salary(profile, _job(salary_min=6000, salary_max=8000), tables, 20)
        assert result.points == 15

    def test_far_over_maximum(self, tables, junior_candidate, banded_job):
        result = score_salary(junior_candidate, banded_job, tables, 20)
        assert result.points == 0
        assert "above job maximum" in result.rationale

    def test_missing_min_defaults_to_max(self, tables):
        profile = CandidateProfile(expected_salary=6000)
        result = score_salary(profile, _job(salary_max=6000), tables, 20)
        assert result.points == 20

    def test_band_takes_priority_over_sector(self, tables):
        profile = CandidateProfile(expected_salary=4000)
        job = _job(industry="technology", salary_min=3500, salary_max=4500)
        assert score_salary(profile, job, tables, 20).points == 20


class TestSalaryAgainstSector:
    def test_meets_benchmark_inclusive(self, tables):
        profile = CandidateProfile(expected_salary=5600)
        result = score_salary(profile, _job(industry="Technology"), tables, 20)
        assert result.points == 20
        assert "$5,600" in result.rationale

    def test_within_ten_percent(self, tables):
        profile = CandidateProfile(expected_salary=5100)
        result = score_salary(profile, _job(industry="technology"), tables, 20)
        assert result.points == 10

    def test_below_benchmark(self, tables):
        profile = CandidateProfile(expected_salary=4000)
        result = score_salary(profile, _job(industry="technology"), tables, 20)
        assert result.points == 0

    def test_experienced_band_from_eight_years(self, tables):
        profile = CandidateProfile(expected_salary=7000, years_experience=8)
        assert score_salary(profile, _job(industry="technology"), tables, 20).points == 10

        junior = CandidateProfile(expected_salary=7000, years_experience=7)
        assert score_salary(junior, _job(industry="technology"), tables, 20).points == 20

    def test_unknown_sector_uses_default_band(self, tables):
        profile = CandidateProfile(expected_salary=5400)
        assert score_salary(profile, _job(industry="Aerospace"), tables, 20).points == 20

    def test_no_job_uses_default_band(self, tables):
        profile = CandidateProfile(expected_salary=5000)
        assert score_salary(profile, None, tables, 20).points == 10


class TestRecognisedQualifications:
    def test_recognised_institution_case_insensitive(self, tables):
        profile = CandidateProfile(education_institution="  national university OF singapore ")
        result = score_recognised_qualifications(profile, None, tables, 20)
        assert result.points == 20

    def test_recognised_certification(self, tables):
        profile = CandidateProfile(certifications=["Scrum Master", "cfa"])
        assert score_recognised_qualifications(profile, None, tables, 20).points == 20

    def test_degree_outside_top_tier(self, tables):
        profile = CandidateProfile(education_level=EducationLevel.BACHELORS,
                                   education_institution="Regional University")
        result = score_recognised_qualifications(profile, None, tables, 20)
        assert result.points == 10
        assert "outside top tier" in result.rationale

    @pytest.mark.parametrize("level", [EducationLevel.DIPLOMA, None])
    def test_no_recognised_degree(self, tables, level):
        profile = CandidateProfile(education_level=level)
        assert score_recognised_qualifications(profile, None, tables, 20).points == 0

    def test_reports_skill_coverage(self, tables, ml_candidate, ml_job):
        result = score_recognised_qualifications(ml_candidate, ml_job, tables, 20)
        assert "Skill coverage 67%" in result.rationale


class TestSkillCoverage:
    def test_case_insensitive_intersection(self):
        profile = CandidateProfile(skills=["Python", " SQL "])
        job = _job(requirements=["python", "sql", "spark", "airflow"])
        assert skill_coverage(profile, job) == 0.5

    def test_neutral_without_requirements(self):
        assert skill_coverage(CandidateProfile(skills=["python"]), _job()) == NEUTRAL_SKILL_COVERAGE
        assert skill_coverage(CandidateProfile(), None) == NEUTRAL_SKILL_COVERAGE


class TestBlendedQualifications:
    def test_inference_helpers(self):
        assert infer_required_education(["PhD preferred"]) == EducationLevel.PHD
        assert infer_required_education(["Master's in CS"]) == EducationLevel.MASTERS
        assert infer_required_education(["Degree in Engineering"]) == EducationLevel.BACHELORS
        assert infer_required_education(["Diploma holders welcome"]) == EducationLevel.DIPLOMA
        assert infer_required_education(["python"]) is None
        assert infer_required_years("At least 3 years in fintech", ["5+ yrs python"]) == 5
        assert infer_required_years("", []) == 0

    def test_empty_inputs(self, tables):
        # 0.5 education, 0.7 coverage, 0.4 experience
        result = score_blended_qualifications(CandidateProfile(), None, tables, 30)
        assert result.points == 17
        assert "education level missing" in result.rationale

    def test_meets_requirements(self, tables):
        profile = CandidateProfile(education_level="Masters", skills=["python"], years_experience=5)
        job = _job(requirements=["Bachelor's degree", "python", "5+ years experience"])
        result = score_blended_qualifications(profile, job, tables, 30)
        assert result.points == 22
        assert "experience meets job expectations" in result.rationale

    def test_below_requirements(self, tables):
        profile = CandidateProfile(education_level="Diploma", years_experience=1)
        job = _job(requirements=["PhD", "rust", "10 years experience"])
        result = score_blended_qualifications(profile, job, tables, 30)
        # education 0.3, coverage 0, experience 0.3
        assert result.points == 5
        assert "below" in result.rationale


class TestEmployerSupport:
    def test_baseline_without_employer(self, tables):
        result = score_employer_support(CandidateProfile(), None, tables, 20)
        assert result.points == 5
        assert "unavailable" in result.rationale

    def test_size_hq_and_plan(self, tables):
        profile = CandidateProfile(plan="pro")
        job = _job(employer=EmployerMeta(size="MNC", local_hq=True))
        assert score_employer_support(profile, job, tables, 20).points == 19

    def test_freemium_default_plan(self, tables):
        job = _job(employer=EmployerMeta(size="MNC"))
        assert score_employer_support(CandidateProfile(), job, tables, 20).points == 16

    def test_capped_at_max_fraction(self, tables):
        profile = CandidateProfile(plan="ultimate")
        job = _job(employer=EmployerMeta(size="MNC", local_hq=True))
        assert score_employer_support(profile, job, tables, 20).points == 20

    def test_unknown_size(self, tables):
        job = _job(employer=EmployerMeta(local_hq=False))
        result = score_employer_support(CandidateProfile(), job, tables, 20)
        assert result.points == 11
        assert "unknown-size" in result.rationale

    def test_floor_at_min_fraction(self, tables):
        job = _job(employer=EmployerMeta(size="SME"))
        result = score_employer_support(CandidateProfile(), job, tables, 20, min_fraction=0.6)
        assert result.points == 12

    def test_label_prefixes_rationale(self, tables):
        result = score_employer_support(CandidateProfile(), None, tables, 20, label="Employer")
        assert result.rationale.startswith("Employer:")


class TestDiversity:
    def test_baseline(self, tables):
        result = score_diversity(CandidateProfile(), None, tables, 20)
        assert result.points == 5
        assert "unavailable" in result.rationale

    def test_scaled_by_score(self, tables):
        job = _job(employer=EmployerMeta(size="Gov", diversity_score=0.8))
        result = score_diversity(CandidateProfile(), job, tables, 20)
        assert result.points == 16
        assert "strong" in result.rationale

    def test_zero_score_is_data(self, tables):
        job = _job(employer=EmployerMeta(diversity_score=0.0))
        result = score_diversity(CandidateProfile(), job, tables, 20)
        assert result.points == 0
        assert "limited" in result.rationale


class TestBonuses:
    def test_shortage_title_fragment(self, tables, ml_job):
        result = score_shortage_bonus(CandidateProfile(), ml_job, tables, 20)
        assert result.points == 20
        assert "machine learning engineer" in result.rationale

    def test_shortage_in_requirement(self, tables):
        job = _job(title="Consultant", requirements=["Data & AI Engineer experience"])
        assert score_shortage_bonus(CandidateProfile(), job, tables, 20).points == 20

    def test_partial_phrase_does_not_match(self, tables, banded_job):
        assert score_shortage_bonus(CandidateProfile(), banded_job, tables, 20).points == 0

    def test_no_job(self, tables):
        assert score_shortage_bonus(CandidateProfile(), None, tables, 20).points == 0

    def test_strategic_is_zero(self, tables, ml_candidate, ml_job):
        result = score_strategic_bonus(ml_candidate, ml_job, tables, 10)
        assert result.points == 0
        assert "no programme participation data" in result.rationale
