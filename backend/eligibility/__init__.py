"""
Eligibility fit-scoring package.
Scores candidate profiles against jobs with pluggable, deterministic criteria.
"""

from .benchmarks import DEFAULT_TABLES, BenchmarkTables, SalaryBand
from .config import Config, load_config, default_config
from .criteria import CriterionResult
from .engine import (
    Engines,
    ScoringEngine,
    build_engines,
    classify_verdict,
    compare_schemes,
    rank_jobs,
    score_fit,
)
from .models import CandidateProfile, EducationLevel, EmployerMeta, JobContext, OrgSize, PlanTier
from .registry import EVALUATORS, Criterion, ScoringScheme, build_scheme
from .report import ScoreBreakdown, ScoreReport, Verdict, improvement_tips

__all__ = [
    'BenchmarkTables',
    'CandidateProfile',
    'Config',
    'Criterion',
    'CriterionResult',
    'DEFAULT_TABLES',
    'EVALUATORS',
    'EducationLevel',
    'EmployerMeta',
    'Engines',
    'JobContext',
    'OrgSize',
    'PlanTier',
    'SalaryBand',
    'ScoreBreakdown',
    'ScoreReport',
    'ScoringEngine',
    'ScoringScheme',
    'Verdict',
    'build_engines',
    'build_scheme',
    'classify_verdict',
    'compare_schemes',
    'default_config',
    'improvement_tips',
    'load_config',
    'rank_jobs',
    'score_fit',
]
