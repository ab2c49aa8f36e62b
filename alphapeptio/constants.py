"""Amino acid alphabet, ambiguity codes and search engine identifiers.

Constants shared by the identification file readers. The amino acid tables
follow the same one-letter conventions as the rest of the package:

- 20 standard residues
- Ambiguity codes (B, J, Z, X) that stand for a small set of concrete residues
- Advocate ids identifying the search engine behind a match

Sources
-------
- IUPAC one-letter codes: https://www.insdc.org/submitting-standards/feature-table/#7.5.3
"""

# =============================================================================
# Amino Acid Alphabet
# =============================================================================

# Standard 20 amino acids, in the order used when expanding X
STANDARD_AMINO_ACIDS = (
    'A', 'R', 'N', 'D', 'C', 'E', 'Q', 'G', 'H', 'I',
    'L', 'K', 'M', 'F', 'P', 'S', 'T', 'W', 'Y', 'V',
)

# Ambiguity codes mapped to the concrete residues they stand for
# U (selenocysteine) and O (pyrrolysine) are real residues, not ambiguities
AMBIGUOUS_AA_MAP = {
    'B': ('N', 'D'),  # Asn/Asp
    'J': ('I', 'L'),  # Ile/Leu
    'Z': ('Q', 'E'),  # Gln/Glu
    'X': STANDARD_AMINO_ACIDS,  # Unknown
}

# =============================================================================
# Search Engines
# =============================================================================

# Advocate index of MS Amanda (same numbering as compomics-utilities)
ADVOCATE_MS_AMANDA = 33

MS_AMANDA_SOFTWARE_NAME = "MS Amanda"

# =============================================================================
# File Formats
# =============================================================================

MS_AMANDA_EXTENSION = ".ms-amanda.csv"

# Leading line written by MS Amanda 1.0.0.3196 and newer
MS_AMANDA_VERSION_PREFIX = "#version: "

# Token used by MS Amanda for missing percolator values
NOT_AVAILABLE = "NA"
