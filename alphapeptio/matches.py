"""Peptide-spectrum match data model.

Minimal identification model filled by the readers:

- ModificationAnnotation: one decoded modification (site, mass, fixed/variable)
- PeptideCandidate: peptide sequence with its variable modifications
- MatchAssumption: one candidate assigned to a spectrum, with scores
- SpectrumMatch: all assumptions for one (spectrum file, spectrum title) pair
- ParseResult: every SpectrumMatch of a file plus the software version

Sites are 1-based, following the proteomics convention used by the
search engines (N-terminal modifications sit on residue 1).
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ModificationType(Enum):
    """Whether a modification was searched as fixed or variable."""
    FIXED = "fixed"
    VARIABLE = "variable"


@dataclass
class ModificationAnnotation:
    """A modification decoded from a result file.

    ``identifier`` combines the mass shift and the modified residue
    (e.g. ``"15.994915@M"``), which is how modification catalogs resolve
    the concrete modification downstream.
    """

    site: int
    mass: float
    fixed_or_variable: ModificationType
    identifier: str
    name: str = ""

    @property
    def is_variable(self) -> bool:
        return self.fixed_or_variable is ModificationType.VARIABLE


@dataclass
class PeptideCandidate:
    """Peptide sequence with its variable modifications."""

    sequence: str
    variable_modifications: List[ModificationAnnotation] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.sequence)


@dataclass
class MatchAssumption:
    """One candidate peptide proposed for a spectrum by a search engine.

    Attributes
    ----------
    candidate : PeptideCandidate
        Proposed peptide
    rank : int
        Rank of the candidate for this spectrum (1 = best)
    advocate : int
        Id of the search engine that produced the assumption
    charge : int
        Identification charge
    raw_score : float
        Score as reported by the engine
    score : float
        E-value-like transformed score (lower is better)
    identification_file : str
        Name of the result file the assumption was read from
    scan_number, protein_accessions, mz, retention_time, percolator_q_value
        Optional row metadata, carried as-is
    """

    candidate: PeptideCandidate
    rank: int
    advocate: int
    charge: int
    raw_score: float
    score: float
    identification_file: str
    scan_number: Optional[str] = None
    protein_accessions: List[str] = field(default_factory=list)
    mz: Optional[float] = None
    retention_time: Optional[float] = None
    percolator_q_value: Optional[float] = None

    def with_candidate(self, candidate: PeptideCandidate) -> 'MatchAssumption':
        """Copy of this assumption for another candidate, scores unchanged."""
        clone = copy.copy(self)
        clone.candidate = candidate
        clone.protein_accessions = list(self.protein_accessions)
        return clone


@dataclass
class SpectrumMatch:
    """All match assumptions for one spectrum, grouped by advocate."""

    spectrum_file: str
    spectrum_title: str
    assumptions_by_advocate: Dict[int, List[MatchAssumption]] = field(default_factory=dict)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.spectrum_file, self.spectrum_title)

    def add_assumption(self, advocate: int, assumption: MatchAssumption) -> None:
        self.assumptions_by_advocate.setdefault(advocate, []).append(assumption)

    def get_assumptions(self, advocate: int) -> List[MatchAssumption]:
        return self.assumptions_by_advocate.get(advocate, [])

    def all_assumptions(self) -> List[MatchAssumption]:
        assumptions = []
        for advocate_assumptions in self.assumptions_by_advocate.values():
            assumptions.extend(advocate_assumptions)
        return assumptions


@dataclass
class ParseResult:
    """Output of one parse pass over a result file."""

    spectrum_matches: List[SpectrumMatch]
    software_version: Optional[str] = None

    def __len__(self) -> int:
        return len(self.spectrum_matches)

    @property
    def n_assumptions(self) -> int:
        return sum(len(match.all_assumptions()) for match in self.spectrum_matches)
