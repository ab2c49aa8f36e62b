"""Decode modification annotations written by MS Amanda.

MS Amanda reports the modifications of a peptide in a single column, as a
semicolon-separated list of annotations:

    N-Term(acetylation of protein n-term|42.010565|variable);C4(carbamidomethyl c|57.021464|fixed)

Each annotation is ``<location>(<name>|<mass>|<fixed or variable>)`` where the
location is ``N-Term``, ``C-Term`` or a residue letter followed by its 1-based
position (``C4``, ``M3``). Newer MS Amanda versions may append more
pipe-separated fields; only the first three are read.

Fixed modifications are implied by the search settings and are dropped, only
variable modifications end up on the peptide candidate.

Examples
--------
>>> mods = parse_modifications(
...     "N-Term(acetylation|42.010565|variable);C4(carbamidomethyl|57.021464|fixed)",
...     "ABCDEF",
... )
>>> [(mod.site, mod.identifier) for mod in mods]
[(1, '42.010565@A')]
"""

from typing import List

from .exceptions import ModificationGrammarError
from .matches import ModificationAnnotation, ModificationType
from .parsing import Tokenizer, read_double


N_TERM_LOCATION = "n-term"
C_TERM_LOCATION = "c-term"

# name, mass, fixed/variable
N_REQUIRED_DETAILS = 3


# =============================================================================
# Single Annotation
# =============================================================================

def parse_site(location: str, sequence: str, annotation: str) -> int:
    """Resolve an annotation location to a 1-based site on the sequence.

    Parameters
    ----------
    location : str
        'N-Term', 'C-Term' or residue letter + 1-based position ('C4')
    sequence : str
        Uppercased peptide sequence
    annotation : str
        Full annotation text, for error messages

    Returns
    -------
    int
        1-based site; not checked against the sequence length

    Raises
    ------
    ModificationGrammarError
        If the location cannot be read
    """
    lowered = location.lower()
    if lowered == N_TERM_LOCATION:
        site = 1
    elif lowered == C_TERM_LOCATION:
        site = len(sequence)
    else:
        # residue letter is not checked against the sequence
        position = location[1:]
        if not position.isdecimal():
            raise ModificationGrammarError(annotation, f"invalid location {location!r}")
        site = int(position)
    return site


def parse_annotation(annotation: str, sequence: str) -> ModificationAnnotation:
    """Parse one ``<location>(<name>|<mass>|<fixed or variable>)`` annotation.

    Parameters
    ----------
    annotation : str
        A single annotation, e.g. "M3(oxidation|15.994915|variable)"
    sequence : str
        Uppercased peptide sequence the annotation refers to

    Returns
    -------
    ModificationAnnotation
        Decoded annotation, fixed or variable

    Raises
    ------
    ModificationGrammarError
        On a malformed location, fewer than three details, a bad mass,
        or a variable modification outside the sequence
    """
    tokenizer = Tokenizer(annotation)

    location = tokenizer.read_until("(")
    if location is None:
        raise ModificationGrammarError(annotation, "missing '('")

    body = tokenizer.read_until_last(")")
    if body is None:
        raise ModificationGrammarError(annotation, "missing ')'")

    site = parse_site(location, sequence, annotation)

    details = body.lower().split("|")
    if len(details) < N_REQUIRED_DETAILS:
        raise ModificationGrammarError(
            annotation,
            f"expected name|mass|fixed-or-variable, got {len(details)} field(s)",
        )
    name, mass_text, status = details[:N_REQUIRED_DETAILS]

    try:
        mass = read_double(mass_text)
    except ValueError:
        raise ModificationGrammarError(annotation, f"invalid mass {mass_text!r}") from None

    # anything but 'variable' is part of the search settings
    if status.strip() == ModificationType.VARIABLE.value:
        fixed_or_variable = ModificationType.VARIABLE
    else:
        fixed_or_variable = ModificationType.FIXED

    if 1 <= site <= len(sequence):
        residue = sequence[site - 1]
    elif fixed_or_variable is ModificationType.VARIABLE:
        raise ModificationGrammarError(
            annotation, f"site {site} outside peptide {sequence!r}"
        )
    else:
        # fixed annotations are dropped later, keep the written residue
        residue = location[:1].upper()

    return ModificationAnnotation(
        site=site,
        mass=mass,
        fixed_or_variable=fixed_or_variable,
        identifier=f"{mass}@{residue}",
        name=name,
    )


# =============================================================================
# Modification Column
# =============================================================================

def parse_annotations(modifications: str, sequence: str) -> List[ModificationAnnotation]:
    """Parse every annotation of a modification column, fixed ones included."""
    modifications = modifications.strip().rstrip(";")
    if not modifications:
        return []
    return [parse_annotation(annotation, sequence) for annotation in modifications.split(";")]


def parse_modifications(modifications: str, sequence: str) -> List[ModificationAnnotation]:
    """Parse a modification column and keep the variable modifications.

    Parameters
    ----------
    modifications : str
        Semicolon-separated annotations; empty string for none
    sequence : str
        Uppercased peptide sequence

    Returns
    -------
    List[ModificationAnnotation]
        Variable modifications, in column order

    Raises
    ------
    ModificationGrammarError
        If any annotation is malformed (the whole column is rejected)
    """
    return [
        annotation
        for annotation in parse_annotations(modifications, sequence)
        if annotation.is_variable
    ]
