"""
Configuration module for the fit-scoring engine.
Loads and validates scoring schemes and benchmark tables from YAML using Pydantic models.
"""

from dataclasses import fields
from typing import Dict, List, Union
import logging
import os

from pydantic import BaseModel, Field, ValidationError, model_validator
import yaml

from . import benchmarks
from .benchmarks import BenchmarkTables, SalaryBand
from .report import ScoreBreakdown

logger = logging.getLogger(__name__)


class CriterionConfig(BaseModel):
    """One scoring criterion: breakdown name, evaluator key and its parameters."""
    name: str
    evaluator: str
    max_points: int = Field(gt=0)
    params: Dict[str, Union[float, str]] = Field(default_factory=dict)


class ScoringPolicy(BaseModel):
    """Verdict thresholds (applied to raw points) and the normalisation denominator."""
    pass_threshold: int
    borderline_threshold: int = Field(ge=0)
    total_max_points: int = Field(gt=0)

    @model_validator(mode="after")
    def _check_thresholds(self) -> "ScoringPolicy":
        if self.pass_threshold <= self.borderline_threshold:
            raise ValueError(
                f"pass_threshold ({self.pass_threshold}) must exceed "
                f"borderline_threshold ({self.borderline_threshold})"
            )
        return self


class SchemeConfig(BaseModel):
    """An ordered list of criteria plus the policy that classifies their total."""
    criteria: List[CriterionConfig]
    policy: ScoringPolicy

    @model_validator(mode="after")
    def _check_criteria(self) -> "SchemeConfig":
        allowed = {f.name for f in fields(ScoreBreakdown)}
        names = [c.name for c in self.criteria]
        unknown = [n for n in names if n not in allowed]
        if unknown:
            raise ValueError(
                f"Unknown criterion name(s): {', '.join(unknown)}. "
                f"Available names: {', '.join(sorted(allowed))}"
            )
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate criterion names in scheme: {names}")

        total = sum(c.max_points for c in self.criteria)
        if total != self.policy.total_max_points:
            raise ValueError(
                f"total_max_points ({self.policy.total_max_points}) does not match "
                f"the sum of criterion max_points ({total})"
            )
        return self


class SalaryBandConfig(BaseModel):
    early: float = Field(gt=0)
    experienced: float = Field(gt=0)


class BenchmarkConfig(BaseModel):
    """Benchmark tables; defaults mirror the built-in reference data."""
    sectors: Dict[str, SalaryBandConfig] = Field(
        default_factory=lambda: {
            k: SalaryBandConfig(early=v.early, experienced=v.experienced)
            for k, v in benchmarks.DEFAULT_SECTOR_BANDS.items()
        }
    )
    default_band: SalaryBandConfig = Field(
        default_factory=lambda: SalaryBandConfig(
            early=benchmarks.DEFAULT_BAND.early,
            experienced=benchmarks.DEFAULT_BAND.experienced,
        )
    )
    institutions: List[str] = Field(
        default_factory=lambda: list(benchmarks.RECOGNISED_INSTITUTIONS)
    )
    certifications: List[str] = Field(
        default_factory=lambda: list(benchmarks.RECOGNISED_CERTIFICATIONS)
    )
    shortage_occupations: List[str] = Field(
        default_factory=lambda: list(benchmarks.SHORTAGE_OCCUPATIONS)
    )

    def to_tables(self) -> BenchmarkTables:
        return BenchmarkTables.build(
            sectors={
                k: SalaryBand(early=v.early, experienced=v.experienced)
                for k, v in self.sectors.items()
            },
            default_band=SalaryBand(
                early=self.default_band.early,
                experienced=self.default_band.experienced,
            ),
            institutions=self.institutions,
            certifications=self.certifications,
            shortage_occupations=self.shortage_occupations,
        )


def _points_scheme() -> SchemeConfig:
    return SchemeConfig(
        criteria=[
            CriterionConfig(name="salary", evaluator="salary", max_points=20,
                            params={"neutral_fraction": 0.5}),
            CriterionConfig(name="qualifications", evaluator="recognised_qualifications",
                            max_points=20),
            CriterionConfig(name="diversity", evaluator="diversity", max_points=20,
                            params={"baseline_fraction": 0.25}),
            CriterionConfig(name="support", evaluator="employer_support", max_points=20,
                            params={"baseline_fraction": 0.25, "label": "Support"}),
            CriterionConfig(name="skills", evaluator="shortage_bonus", max_points=20),
            CriterionConfig(name="strategic", evaluator="strategic_bonus", max_points=10),
        ],
        policy=ScoringPolicy(pass_threshold=40, borderline_threshold=20, total_max_points=110),
    )


def _weighted_scheme() -> SchemeConfig:
    return SchemeConfig(
        criteria=[
            CriterionConfig(name="salary", evaluator="salary", max_points=40,
                            params={"neutral_fraction": 0.75}),
            CriterionConfig(name="qualifications", evaluator="blended_qualifications",
                            max_points=30),
            CriterionConfig(name="employer", evaluator="employer_support", max_points=20,
                            params={"baseline_fraction": 0.5, "label": "Employer"}),
            CriterionConfig(name="diversity", evaluator="diversity", max_points=10,
                            params={"baseline_fraction": 0.5}),
        ],
        policy=ScoringPolicy(pass_threshold=70, borderline_threshold=50, total_max_points=100),
    )


class Config(BaseModel):
    """Main configuration model."""
    default_scheme: str = "points"
    schemes: Dict[str, SchemeConfig] = Field(
        default_factory=lambda: {"points": _points_scheme(), "weighted": _weighted_scheme()}
    )
    benchmarks: BenchmarkConfig = Field(default_factory=BenchmarkConfig)

    @model_validator(mode="after")
    def _check_default_scheme(self) -> "Config":
        if self.default_scheme not in self.schemes:
            raise ValueError(
                f"default_scheme '{self.default_scheme}' is not defined. "
                f"Available schemes: {', '.join(self.schemes)}"
            )
        return self


def default_config() -> Config:
    """Built-in schemes and benchmark tables, no file needed."""
    return Config()


def load_config(path: str = "config.yaml") -> Config:
    """
    Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file (default: config.yaml)

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML syntax is invalid
        ValueError: If the file is empty or the config structure is invalid
    """
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"Configuration file not found: {path}\n"
            f"Please copy config.example.yaml to {path} and customize it."
        )

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(
            f"Invalid YAML syntax in {path}: {e}"
        )

    if data is None:
        raise ValueError(f"Configuration file {path} is empty")

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration structure in {path}: {e}\n"
            f"Please check config.example.yaml for the correct format."
        )

    logger.info(f"Loaded scoring config from {path}: schemes={', '.join(config.schemes)}")
    return config
