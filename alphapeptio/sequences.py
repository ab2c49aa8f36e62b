"""Expansion of ambiguous amino acid codes.

Some search engines report peptides containing ambiguity codes (B, J, Z, X).
Each code stands for a small set of concrete residues; expanding a sequence
enumerates every concrete peptide it may represent (full Cartesian product
over the ambiguous positions).

Examples
--------
>>> has_combination("PEPJIDE")
True
>>> get_combinations("PEPJIDE")
['PEPIIDE', 'PEPLIDE']
"""

import copy
import itertools
from typing import List

from .constants import AMBIGUOUS_AA_MAP
from .matches import PeptideCandidate


def has_combination(sequence: str) -> bool:
    """True if the sequence contains at least one ambiguity code."""
    return any(aa in AMBIGUOUS_AA_MAP for aa in sequence)


def get_combinations(sequence: str) -> List[str]:
    """Enumerate all concrete sequences an ambiguous sequence stands for.

    Parameters
    ----------
    sequence : str
        Uppercased peptide sequence

    Returns
    -------
    List[str]
        Concrete sequences, same length as the input, in product order
        (first ambiguous position varies slowest). A sequence without
        ambiguity codes is returned unchanged as the only element.

    Notes
    -----
    The number of combinations grows multiplicatively: a single X already
    gives 20 sequences, two X give 400.
    """
    choices = [AMBIGUOUS_AA_MAP.get(aa, (aa,)) for aa in sequence]
    return [''.join(residues) for residues in itertools.product(*choices)]


def expand_candidate(candidate: PeptideCandidate) -> List[PeptideCandidate]:
    """Expand a candidate into one candidate per concrete sequence.

    Modification sites are kept; every expanded candidate gets its own
    deep copy of the variable modifications.
    """
    return [
        PeptideCandidate(
            sequence=sequence,
            variable_modifications=copy.deepcopy(candidate.variable_modifications),
        )
        for sequence in get_combinations(candidate.sequence)
    ]
