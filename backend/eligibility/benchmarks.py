"""
Benchmark tables for fit scoring.
Static reference data shared read-only by every scoring call.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional


@dataclass(frozen=True)
class SalaryBand:
    """Indicative monthly salary benchmark for a sector."""
    early: float  # below the experience threshold
    experienced: float  # at or above the experience threshold

    def for_years(self, years: float, threshold: float) -> float:
        return self.experienced if years >= threshold else self.early


def normalise(text: Optional[str]) -> str:
    """Lowercase and trim free text for table lookups."""
    return (text or "").strip().lower()


@dataclass(frozen=True)
class BenchmarkTables:
    """Read-only lookup data used by the criterion evaluators."""
    sectors: Mapping[str, SalaryBand]
    default_band: SalaryBand
    institutions: frozenset = field(default_factory=frozenset)
    certifications: frozenset = field(default_factory=frozenset)
    shortage_occupations: tuple = ()

    @classmethod
    def build(
        cls,
        sectors: Mapping[str, SalaryBand],
        default_band: SalaryBand,
        institutions: Iterable[str] = (),
        certifications: Iterable[str] = (),
        shortage_occupations: Iterable[str] = (),
    ) -> "BenchmarkTables":
        """
        Normalise names and freeze collections.

        Shortage occupations keep their declared order so containment checks
        and their rationale are reproducible.
        """
        return cls(
            sectors=MappingProxyType({normalise(k): v for k, v in sectors.items()}),
            default_band=default_band,
            institutions=frozenset(normalise(n) for n in institutions),
            certifications=frozenset(normalise(n) for n in certifications),
            shortage_occupations=tuple(
                dict.fromkeys(normalise(n) for n in shortage_occupations)
            ),
        )

    def resolve_sector_band(self, industry: Optional[str]) -> SalaryBand:
        """
        Find the salary band for an industry label.

        Args:
            industry: Free-text industry or sector label

        Returns:
            Exact match, else the first sector contained in the label,
            else the default band
        """
        key = normalise(industry)
        if not key:
            return self.default_band

        direct = self.sectors.get(key)
        if direct:
            return direct

        for sector, band in self.sectors.items():
            if sector in key:
                return band
        return self.default_band

    def is_recognised_institution(self, name: Optional[str]) -> bool:
        key = normalise(name)
        return bool(key) and key in self.institutions

    def has_recognised_certification(self, names: Iterable[str]) -> bool:
        return any(normalise(n) in self.certifications for n in names)

    def find_shortage_occupation(self, text: Optional[str]) -> Optional[str]:
        """Return the first shortage occupation contained in text, if any."""
        key = normalise(text)
        if not key:
            return None
        for occupation in self.shortage_occupations:
            if occupation in key:
                return occupation
        return None


DEFAULT_SECTOR_BANDS = {
    "technology": SalaryBand(early=5600, experienced=7200),
    "finance": SalaryBand(early=6000, experienced=7600),
    "financial services": SalaryBand(early=6000, experienced=7600),
    "product": SalaryBand(early=5500, experienced=7000),
    "healthcare": SalaryBand(early=5400, experienced=6900),
    "manufacturing": SalaryBand(early=5300, experienced=6800),
    "logistics": SalaryBand(early=5200, experienced=6600),
    "professional services": SalaryBand(early=5600, experienced=7100),
    "advanced manufacturing": SalaryBand(early=5600, experienced=7200),
    "energy": SalaryBand(early=5700, experienced=7300),
}

DEFAULT_BAND = SalaryBand(early=5400, experienced=6900)

RECOGNISED_INSTITUTIONS = [
    "National University of Singapore",
    "Nanyang Technological University",
    "Singapore Management University",
    "Massachusetts Institute of Technology",
    "Stanford University",
    "Harvard University",
    "University of Cambridge",
    "University of Oxford",
    "Imperial College London",
    "ETH Zurich",
    "University of Tokyo",
    "University of Melbourne",
    "Tsinghua University",
    "Peking University",
    "London School of Economics",
    "University of Chicago",
    "California Institute of Technology",
    "Cornell University",
    "University of Hong Kong",
    "University of Sydney",
]

RECOGNISED_CERTIFICATIONS = [
    "CFA",
    "ACCA",
    "CPA Australia",
    "FRMP",
    "CFA Charterholder",
    "Bar Admission",
    "PE License",
    "PMP",
    "SIE Exam",
    "SMC Registered Doctor",
    "Singapore Bar",
]

SHORTAGE_OCCUPATIONS = [
    "artificial intelligence engineer",
    "ai engineer",
    "machine learning engineer",
    "data scientist",
    "analytics engineer",
    "cloud architect",
    "cybersecurity specialist",
    "software architect",
    "semiconductor engineer",
    "quantum engineer",
    "robotics engineer",
    "marine engineer",
    "green finance specialist",
    "biomedical engineer",
    "precision engineering manager",
    "renewable energy engineer",
]

DEFAULT_TABLES = BenchmarkTables.build(
    sectors=DEFAULT_SECTOR_BANDS,
    default_band=DEFAULT_BAND,
    institutions=RECOGNISED_INSTITUTIONS,
    certifications=RECOGNISED_CERTIFICATIONS,
    shortage_occupations=SHORTAGE_OCCUPATIONS,
)
