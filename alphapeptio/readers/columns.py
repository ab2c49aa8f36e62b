"""Column schema of MS Amanda result files and header resolution.

The schema is declared once as a table of ColumnSpec entries. A ColumnIndex
maps each declared column to its position in a given file, built from the
header line. Mandatory columns must be present; optional ones resolve to
None when absent.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import SchemaError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnSpec:
    """One column of the result file: lookup key, header text, mandatory flag."""
    key: str
    header: str
    mandatory: bool = False


# Header names are matched case-insensitively, exactly as written by MS Amanda
MS_AMANDA_COLUMNS: Tuple[ColumnSpec, ...] = (
    ColumnSpec('scan_number', "Scan Number", mandatory=True),
    ColumnSpec('title', "Title", mandatory=True),
    ColumnSpec('sequence', "Sequence", mandatory=True),
    ColumnSpec('modifications', "Modifications", mandatory=True),
    ColumnSpec('protein_accessions', "Protein Accessions", mandatory=True),
    ColumnSpec('amanda_score', "Amanda Score", mandatory=True),
    ColumnSpec('rank', "Rank", mandatory=True),
    ColumnSpec('mz', "m/z", mandatory=True),
    ColumnSpec('charge', "Charge", mandatory=True),
    ColumnSpec('filename', "Filename", mandatory=True),
    ColumnSpec('weighted_probability', "Weighted Probability"),
    ColumnSpec('rt', "RT"),
    ColumnSpec('matched_peaks', "Nr of matched peaks"),
    ColumnSpec('missed_cleavages', "number of missed cleavages"),
    ColumnSpec('residues', "number of residues"),
    ColumnSpec('fragment_ions', "number of considered fragment ions"),
    ColumnSpec('delta_m', "delta M"),
    ColumnSpec('avg_ms2_error', "avg MS2 error[ppm]"),
    ColumnSpec('assigned_intensity_fraction', "assigned intensity fraction"),
    ColumnSpec('binom_score', "binom score"),
    ColumnSpec('search_depth', "SearchDepth"),
    ColumnSpec('id', "Id"),
    ColumnSpec('percolator_q_value', "percolator:Q value"),
)


class ColumnIndex:
    """Read-only mapping from column key to zero-based position.

    Parameters
    ----------
    positions : Dict[str, int]
        Resolved positions, keyed by ColumnSpec.key
    schema : Sequence[ColumnSpec]
        Declared columns

    Examples
    --------
    >>> schema = (ColumnSpec('title', "Title", True), ColumnSpec('sequence', "Sequence", True))
    >>> index = ColumnIndex.from_header("title\\tSEQUENCE", schema)
    >>> index['sequence']
    1
    """

    def __init__(self, positions: Dict[str, int], schema: Sequence[ColumnSpec] = MS_AMANDA_COLUMNS):
        self.positions: Mapping[str, int] = MappingProxyType(dict(positions))
        self.schema = tuple(schema)
        mandatory = [self.positions[spec.key] for spec in self.schema if spec.mandatory]
        # rows must be at least this long
        self.min_row_length = max(mandatory) + 1 if mandatory else 0

    @classmethod
    def from_header(
        cls,
        header_line: str,
        schema: Sequence[ColumnSpec] = MS_AMANDA_COLUMNS,
    ) -> 'ColumnIndex':
        """Build the index from a tab-separated header line.

        Raises
        ------
        SchemaError
            If any mandatory column is missing
        """
        by_header = {spec.header.lower(): spec for spec in schema}

        positions = {}
        for i, header in enumerate(header_line.split("\t")):
            spec = by_header.get(header.lower())
            if spec is not None:
                # a repeated header keeps its last position
                positions[spec.key] = i

        missing = [spec.header for spec in schema if spec.mandatory and spec.key not in positions]
        if missing:
            raise SchemaError(
                f"Mandatory columns are missing in the MS Amanda csv file: {', '.join(missing)}. "
                f"Please check the file!",
                missing=missing,
            )

        logger.debug(f"Resolved {len(positions)} of {len(schema)} known columns")

        return cls(positions, schema)

    def __contains__(self, key: str) -> bool:
        return key in self.positions

    def __getitem__(self, key: str) -> int:
        return self.positions[key]

    def get(self, row: List[str], key: str) -> Optional[str]:
        """Cell of ``row`` for column ``key``; None if the column is absent.

        Optional columns may also be missing from short rows, which gives None.
        """
        position = self.positions.get(key)
        if position is None or position >= len(row):
            return None
        return row[position]
