"""Pytest configuration for AlphaPeptIO tests.

Fixtures write small MS Amanda result files to a temporary directory, so
reader tests exercise the real file handling path.
"""

import pytest


MS_AMANDA_HEADER = [
    "Scan Number",
    "Title",
    "Sequence",
    "Modifications",
    "Protein Accessions",
    "Amanda Score",
    "Weighted Probability",
    "Rank",
    "m/z",
    "Charge",
    "RT",
    "Filename",
]

DEFAULT_ROW = {
    "Scan Number": "2",
    "Title": "spectrum%201",
    "Sequence": "PEPTIDEK",
    "Modifications": "",
    "Protein Accessions": "P12345",
    "Amanda Score": "150.0",
    "Weighted Probability": "0.001",
    "Rank": "1",
    "m/z": "464.7318",
    "Charge": "2",
    "RT": "PT2700.460000S",
    "Filename": "run01.mgf",
}


@pytest.fixture
def ms_amanda_header():
    """Canonical MS Amanda header (mandatory + some optional columns)."""
    return list(MS_AMANDA_HEADER)


@pytest.fixture
def make_row():
    """Build one tab-separated data row; keyword overrides by column name."""
    def _make_row(header=None, **values):
        header = header if header is not None else MS_AMANDA_HEADER
        row = dict(DEFAULT_ROW)
        row.update({key.replace('_', ' '): value for key, value in values.items()})
        return "\t".join(row.get(column, "") for column in header)
    return _make_row


@pytest.fixture
def write_amanda_file(tmp_path):
    """Write an MS Amanda file and return its path.

    Parameters of the returned function: list of data rows, optional header
    (list of column names), optional version line text, file name.
    """
    def _write(rows, header=None, version=None, name="search.ms-amanda.csv"):
        header = header if header is not None else MS_AMANDA_HEADER
        lines = []
        if version is not None:
            lines.append(f"#version: {version}")
        lines.append("\t".join(header))
        lines.extend(rows)
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
