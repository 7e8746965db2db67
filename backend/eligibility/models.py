"""
Input models for fit scoring.
Candidate profiles and job contexts arrive from storage, parsed resumes or
external listings, so every field is optional and validated on construction.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class EducationLevel(str, Enum):
    """Highest completed education, ordered Diploma < Bachelors < Masters < PhD."""
    DIPLOMA = "Diploma"
    BACHELORS = "Bachelors"
    MASTERS = "Masters"
    PHD = "PhD"

    @property
    def rank(self) -> int:
        return _EDUCATION_RANK[self]


_EDUCATION_RANK = {
    EducationLevel.DIPLOMA: 1,
    EducationLevel.BACHELORS: 2,
    EducationLevel.MASTERS: 3,
    EducationLevel.PHD: 4,
}


class PlanTier(str, Enum):
    """Subscription tier, ordered freemium < standard < pro < ultimate."""
    FREEMIUM = "freemium"
    STANDARD = "standard"
    PRO = "pro"
    ULTIMATE = "ultimate"

    @property
    def multiplier(self) -> float:
        return _PLAN_MULTIPLIER[self]


_PLAN_MULTIPLIER = {
    PlanTier.FREEMIUM: 0.9,
    PlanTier.STANDARD: 0.95,
    PlanTier.PRO: 1.0,
    PlanTier.ULTIMATE: 1.05,
}


class OrgSize(str, Enum):
    """Employer organisation size category."""
    MNC = "MNC"
    GOV = "Gov"
    STARTUP = "Startup"
    SME = "SME"


class _InputModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _null_lists_to_empty(cls, value, info):
        # Stored records often carry null for an empty list
        if value is None and info.field_name in _LIST_FIELDS:
            return []
        return value


_LIST_FIELDS = {"certifications", "skills", "requirements"}


class CandidateProfile(_InputModel):
    """Candidate attributes used by the criterion evaluators."""
    name: Optional[str] = None
    education_level: Optional[EducationLevel] = Field(default=None, alias="educationLevel")
    education_institution: Optional[str] = Field(default=None, alias="educationInstitution")
    certifications: List[str] = Field(default_factory=list)
    years_experience: Optional[float] = Field(default=None, ge=0, alias="yearsExperience")
    skills: List[str] = Field(default_factory=list)
    expected_salary: Optional[float] = Field(default=None, gt=0, alias="expectedSalarySGD")
    plan: Optional[PlanTier] = PlanTier.FREEMIUM

    @field_validator("expected_salary", mode="before")
    @classmethod
    def _zero_salary_is_missing(cls, value):
        # Parsed resumes report 0 when no figure was found
        if value == 0:
            return None
        return value


class EmployerMeta(_InputModel):
    """Employer metadata attached to a job."""
    size: Optional[OrgSize] = None
    local_hq: bool = Field(default=False, alias="localHQ")
    diversity_score: Optional[float] = Field(default=None, ge=0, le=1, alias="diversityScore")


class JobContext(_InputModel):
    """Job opening the candidate is scored against."""
    title: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    salary_min: Optional[float] = Field(default=None, gt=0, alias="salaryMinSGD")
    salary_max: Optional[float] = Field(default=None, gt=0, alias="salaryMaxSGD")
    description: Optional[str] = None
    requirements: List[str] = Field(default_factory=list)
    employer: Optional[EmployerMeta] = None

    @model_validator(mode="after")
    def _check_salary_band(self) -> "JobContext":
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError(
                f"salary_min ({self.salary_min}) exceeds salary_max ({self.salary_max})"
            )
        return self

    @property
    def has_salary_band(self) -> bool:
        return self.salary_min is not None or self.salary_max is not None
