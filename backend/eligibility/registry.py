"""
Criterion registry.

This module maintains a registry of all available criterion evaluators.
Use build_scheme() to turn a SchemeConfig into a ready-to-run ScoringScheme.
"""

from dataclasses import dataclass
from functools import partial
import inspect
from typing import Any, Callable, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from .benchmarks import BenchmarkTables
from .config import SchemeConfig, ScoringPolicy
from .criteria import (
    CriterionResult,
    score_blended_qualifications,
    score_diversity,
    score_employer_support,
    score_recognised_qualifications,
    score_salary,
    score_shortage_bonus,
    score_strategic_bonus,
)
from .models import CandidateProfile, JobContext

Evaluator = Callable[..., CriterionResult]


# Registry of available evaluators
# Maps evaluator key (from config) to evaluator function
EVALUATORS: Dict[str, Evaluator] = {
    "salary": score_salary,
    "recognised_qualifications": score_recognised_qualifications,
    "blended_qualifications": score_blended_qualifications,
    "employer_support": score_employer_support,
    "diversity": score_diversity,
    "shortage_bonus": score_shortage_bonus,
    "strategic_bonus": score_strategic_bonus,
}

# Positional arguments every evaluator receives; everything else is a param
_SHARED_ARGS = ("profile", "job", "tables", "max_points")


@dataclass(frozen=True)
class Criterion:
    """A named criterion with its maximum points and bound evaluator."""
    name: str
    max_points: int
    evaluate: Callable[[CandidateProfile, Optional[JobContext], BenchmarkTables, int], CriterionResult]

    def run(
        self,
        profile: CandidateProfile,
        job: Optional[JobContext],
        tables: BenchmarkTables,
    ) -> CriterionResult:
        return self.evaluate(profile, job, tables, self.max_points)


@dataclass(frozen=True)
class ScoringScheme:
    """Ordered criteria plus the verdict policy that applies to their total."""
    name: str
    criteria: List[Criterion]
    policy: ScoringPolicy


def get_evaluator(key: str) -> Evaluator:
    """
    Get evaluator function by key.

    Raises:
        ValueError: If evaluator key is not registered
    """
    evaluator = EVALUATORS.get(key)
    if not evaluator:
        raise ValueError(
            f"Unknown evaluator: {key}. "
            f"Available evaluators: {', '.join(EVALUATORS.keys())}"
        )
    return evaluator


def _check_params(criterion: str, signature: inspect.Signature, params: Dict[str, Any]) -> Dict[str, Any]:
    """Validate each param strictly against the evaluator's annotation."""
    checked = {}
    for key, value in params.items():
        annotation = signature.parameters[key].annotation
        if annotation is inspect.Parameter.empty:
            checked[key] = value
            continue
        try:
            checked[key] = TypeAdapter(annotation).validate_python(value, strict=True)
        except ValidationError:
            raise ValueError(
                f"Invalid value for parameter '{key}' in criterion '{criterion}': "
                f"expected {getattr(annotation, '__name__', annotation)}, got {value!r}"
            ) from None
    return checked


def build_scheme(name: str, config: SchemeConfig) -> ScoringScheme:
    """
    Resolve evaluators and bind their parameters.

    Args:
        name: Scheme name, echoed in every report
        config: Validated scheme configuration

    Returns:
        ScoringScheme ready for the engine

    Raises:
        ValueError: If an evaluator key or parameter is unknown, or a parameter has the wrong type
    """
    criteria = []
    for entry in config.criteria:
        evaluator = get_evaluator(entry.evaluator)
        signature = inspect.signature(evaluator)
        accepted = set(signature.parameters) - set(_SHARED_ARGS)
        unknown = sorted(set(entry.params) - accepted)
        if unknown:
            raise ValueError(
                f"Unknown parameter(s) for evaluator '{entry.evaluator}' "
                f"in criterion '{entry.name}': {', '.join(unknown)}"
            )
        criteria.append(Criterion(
            name=entry.name,
            max_points=entry.max_points,
            evaluate=partial(evaluator, **_check_params(entry.name, signature, entry.params)),
        ))
    return ScoringScheme(name=name, criteria=criteria, policy=config.policy)
