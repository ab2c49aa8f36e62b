"""Flatten spectrum matches into a table.

One row per match assumption, suitable for writing to TSV or for
downstream rescoring/FDR tools that work on flat PSM tables.

Examples
--------
>>> result = read_ms_amanda("search.ms-amanda.csv")
>>> df = spectrum_matches_to_dataframe(result.spectrum_matches)
>>> df.to_csv("search_psms.tsv", sep="\\t", index=False)
"""

from typing import List, Sequence

import numpy as np

from .matches import ModificationAnnotation, SpectrumMatch


PSM_COLUMNS = [
    'spectrum_file',
    'spectrum_title',
    'scan_number',
    'advocate',
    'rank',
    'sequence',
    'modifications',
    'charge',
    'mz',
    'retention_time',
    'raw_score',
    'score',
    'percolator_q_value',
    'protein_accessions',
    'identification_file',
]


def format_modifications(modifications: Sequence[ModificationAnnotation]) -> str:
    """Write variable modifications as 'identifier:site' joined by ';'.

    Examples
    --------
    >>> format_modifications([])
    ''
    """
    return ';'.join(f"{mod.identifier}:{mod.site}" for mod in modifications)


def spectrum_matches_to_dataframe(spectrum_matches: List[SpectrumMatch]):
    """Convert spectrum matches to a pandas DataFrame (one row per PSM).

    Parameters
    ----------
    spectrum_matches : List[SpectrumMatch]
        Output of a reader's parse_all()

    Returns
    -------
    pd.DataFrame
        Columns listed in PSM_COLUMNS. Missing optional values are NaN.
    """
    import pandas as pd

    records = []
    for spectrum_match in spectrum_matches:
        for advocate, assumptions in spectrum_match.assumptions_by_advocate.items():
            for assumption in assumptions:
                records.append({
                    'spectrum_file': spectrum_match.spectrum_file,
                    'spectrum_title': spectrum_match.spectrum_title,
                    'scan_number': assumption.scan_number,
                    'advocate': advocate,
                    'rank': assumption.rank,
                    'sequence': assumption.candidate.sequence,
                    'modifications': format_modifications(assumption.candidate.variable_modifications),
                    'charge': assumption.charge,
                    'mz': assumption.mz,
                    'retention_time': assumption.retention_time,
                    'raw_score': assumption.raw_score,
                    'score': assumption.score,
                    'percolator_q_value': assumption.percolator_q_value,
                    'protein_accessions': ';'.join(assumption.protein_accessions),
                    'identification_file': assumption.identification_file,
                })

    df = pd.DataFrame.from_records(records, columns=PSM_COLUMNS)

    # None -> NaN for the optional numeric columns
    for column in ('mz', 'retention_time', 'raw_score', 'score', 'percolator_q_value'):
        df[column] = np.asarray(
            [np.nan if value is None else value for value in df[column]],
            dtype=np.float64,
        )
    for column in ('advocate', 'rank', 'charge'):
        df[column] = df[column].astype(np.int64)

    return df
