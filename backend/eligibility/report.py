"""
Score report value objects.
The report is built once per scoring call and never mutated afterwards.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .models import CandidateProfile


class Verdict(str, Enum):
    """Categorical fit verdict, ordered Unlikely < Borderline < Likely."""
    LIKELY = "Likely"
    BORDERLINE = "Borderline"
    UNLIKELY = "Unlikely"

    @property
    def rank(self) -> int:
        return {"Unlikely": 0, "Borderline": 1, "Likely": 2}[self.value]


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Per-criterion points for one report.

    A field is None when its criterion is not part of the active scheme.
    """
    salary: Optional[int] = None
    qualifications: Optional[int] = None
    employer: Optional[int] = None
    diversity: Optional[int] = None
    support: Optional[int] = None
    skills: Optional[int] = None
    strategic: Optional[int] = None

    def items(self) -> Iterator[Tuple[str, int]]:
        """Active criteria in field order."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                yield f.name, value

    def total(self) -> int:
        return sum(value for _, value in self.items())

    def to_dict(self) -> Dict[str, int]:
        return dict(self.items())


@dataclass(frozen=True)
class ScoreReport:
    """Result of scoring a candidate against a job or the general bar."""
    total: int  # 0-100, normalised percentage
    total_raw: int  # sum of breakdown points
    breakdown: ScoreBreakdown
    verdict: Verdict
    notes: Tuple[str, ...] = ()  # one per criterion, evaluation order
    scheme: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation for presentation layers."""
        return {
            "scheme": self.scheme,
            "total": self.total,
            "totalRaw": self.total_raw,
            "breakdown": self.breakdown.to_dict(),
            "verdict": self.verdict.value,
            "notes": list(self.notes),
        }


def improvement_tips(profile: CandidateProfile) -> List[str]:
    """
    Suggest resume edits that would give the scorer more to work with.

    Args:
        profile: Candidate profile, typically freshly parsed from a resume

    Returns:
        Ordered list of tips
    """
    tips = []
    if not profile.skills:
        tips.append('Add a dedicated "Skills" section with specific technologies.')
    else:
        tips.append("Reorder your skills section to highlight the most in-demand tools first.")
    if profile.expected_salary is None:
        tips.append("Include a salary expectation to speed up hiring conversations.")
    if not profile.years_experience:
        tips.append("Call out years of experience in summary bullet points.")
    return tips
