"""Reader for MS Amanda identification result files (.ms-amanda.csv).

MS Amanda exports its peptide-spectrum matches as a tab-separated file:

    #version: 2.1.3.1                       (optional, MS Amanda >= 1.0.0.3196)
    Scan Number<TAB>Title<TAB>Sequence<TAB>...
    2<TAB>spectrum%201<TAB>PEPTIDEK<TAB>...

The header drives the column mapping, so column order may vary between
MS Amanda versions and unknown columns are ignored. Each data row becomes a
MatchAssumption, grouped into one SpectrumMatch per (spectrum file, title).

Design principles:
1. Streaming: the file is read line by line, never loaded at once
2. Strict: a bad score, rank, charge or modification aborts the whole parse
   (rows are not recoverable); informational cells (m/z, RT, q-value) are best effort
3. Forward compatible: extra columns and extra modification fields are ignored

Examples
--------
>>> reader = MsAmandaReader("search.ms-amanda.csv")
>>> reader.software_version
'2.1.3.1'
>>> matches = reader.parse_all(expand_aa_combinations=True)
>>> matches[0].get_assumptions(ADVOCATE_MS_AMANDA)[0].candidate.sequence
'PEPTIDEK'
"""

import gzip
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, TextIO, Tuple, TypeVar, Union

from ..constants import (
    ADVOCATE_MS_AMANDA,
    MS_AMANDA_EXTENSION,
    MS_AMANDA_SOFTWARE_NAME,
    MS_AMANDA_VERSION_PREFIX,
)
from ..exceptions import RowFormatError, SchemaError
from ..matches import MatchAssumption, ParseResult, PeptideCandidate, SpectrumMatch
from ..modifications import parse_modifications
from ..parsing import (
    decode_title,
    parse_retention_time,
    read_double,
    read_int,
    read_optional_double,
    score_to_evalue,
)
from ..sequences import expand_candidate, has_combination
from .columns import MS_AMANDA_COLUMNS, ColumnIndex

logger = logging.getLogger(__name__)

T = TypeVar('T')


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class MsAmandaReaderParams:
    """Parameters for reading MS Amanda result files."""

    # Expand ambiguous residues (B, J, Z, X) into concrete peptides
    expand_aa_combinations: bool = True

    # Text encoding of the result file (a leading BOM is skipped)
    encoding: str = "utf-8-sig"

    # URL-decode spectrum titles ('%20' -> ' ')
    decode_titles: bool = True


# =============================================================================
# File Access
# =============================================================================

def open_result_file(path: Path, encoding: str = "utf-8-sig") -> TextIO:
    """Open a result file for reading, gzip-compressed if it ends with .gz."""
    if path.suffix.lower() == '.gz':
        return gzip.open(path, 'rt', encoding=encoding)
    return open(path, encoding=encoding)


def _numbered_lines(handle: TextIO) -> Iterator[Tuple[int, str]]:
    for line_number, line in enumerate(handle, start=1):
        yield line_number, line.rstrip("\r\n")


def parse_version_line(line: str) -> Optional[str]:
    """Software version from a '#version: ...' line, None for any other line.

    Examples
    --------
    >>> parse_version_line("#Version: 2.1.3.1 ")
    '2.1.3.1'
    >>> parse_version_line("Scan Number\\tTitle") is None
    True
    """
    if line.lower().startswith(MS_AMANDA_VERSION_PREFIX):
        return line[len(MS_AMANDA_VERSION_PREFIX):].strip()
    return None


def extract_version(path: Union[str, Path], encoding: str = "utf-8-sig") -> Optional[str]:
    """Read the MS Amanda version from the first line of a result file.

    Returns None when the file has no version line (files written before
    MS Amanda 1.0.0.3196) or is empty.
    """
    with open_result_file(Path(path), encoding) as handle:
        first_line = handle.readline()
    return parse_version_line(first_line.rstrip("\r\n"))


def _parse_field(
    parser: Callable[[str], T],
    text: Optional[str],
    column: str,
    line_number: int,
    line: str,
) -> T:
    try:
        return parser(text if text is not None else "")
    except ValueError:
        raise RowFormatError(f"Invalid {column} value {text!r}", line_number, line) from None


def _parse_metadata(
    parser: Callable[[str], Optional[T]],
    text: Optional[str],
    column: str,
    line_number: int,
) -> Optional[T]:
    """Best-effort parse of an informational cell; None if it cannot be read."""
    try:
        return parser(text)
    except ValueError:
        logger.debug(f"Ignoring unreadable {column} value {text!r} on line {line_number}")
        return None


# =============================================================================
# Reader
# =============================================================================

class MsAmandaReader:
    """Reads peptide-spectrum matches from an MS Amanda csv result file.

    Parameters
    ----------
    path : str or Path
        Path to the .ms-amanda.csv file (optionally gzip-compressed)
    params : MsAmandaReaderParams, optional
        Reader settings; defaults to MsAmandaReaderParams()

    Attributes
    ----------
    software_version : str or None
        MS Amanda version from the first line, if present
    """

    extension = MS_AMANDA_EXTENSION
    software_name = MS_AMANDA_SOFTWARE_NAME
    advocate = ADVOCATE_MS_AMANDA
    has_de_novo_tags = False

    def __init__(
        self,
        path: Union[str, Path],
        params: Optional[MsAmandaReaderParams] = None,
    ):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"MS Amanda file not found: {self.path}")

        self.params = params if params is not None else MsAmandaReaderParams()
        self.software_version = self.extract_version()

    def extract_version(self) -> Optional[str]:
        """MS Amanda version from the first line of the file, if present."""
        version = extract_version(self.path, self.params.encoding)
        logger.debug(f"MS Amanda version of {self.path.name}: {version}")
        return version

    def get_software_versions(self) -> Dict[str, List[Optional[str]]]:
        return {self.software_name: [self.software_version]}

    def parse_all(
        self,
        expand_aa_combinations: Optional[bool] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[SpectrumMatch]:
        """Read all spectrum matches of the file.

        Parameters
        ----------
        expand_aa_combinations : bool, optional
            Expand ambiguous residues into concrete peptides
            (default: params.expand_aa_combinations)
        cancel_event : threading.Event, optional
            Any object with ``is_set()``. Polled between rows; once set,
            reading stops and the matches gathered so far are returned.

        Returns
        -------
        List[SpectrumMatch]
            One match per (spectrum file, spectrum title), in order of first
            appearance

        Raises
        ------
        SchemaError
            If mandatory columns are missing
        RowFormatError
            If a score, rank or charge cannot be parsed
        ModificationGrammarError
            If a modification annotation is malformed
        """
        return self.parse(expand_aa_combinations, cancel_event).spectrum_matches

    def parse(
        self,
        expand_aa_combinations: Optional[bool] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> ParseResult:
        """Like parse_all, but also returns the software version."""
        if expand_aa_combinations is None:
            expand_aa_combinations = self.params.expand_aa_combinations

        logger.info(f"Reading MS Amanda file: {self.path.name}")

        # spectrum file -> spectrum title -> match
        results: Dict[str, Dict[str, SpectrumMatch]] = {}
        n_assumptions = 0

        with open_result_file(self.path, self.params.encoding) as handle:
            lines = _numbered_lines(handle)
            version, columns = self._read_header(lines)

            for line_number, line in lines:
                if not line.strip():
                    continue

                spectrum_file, spectrum_title, assumptions = self._parse_row(
                    line, line_number, columns, expand_aa_combinations
                )

                matches_in_file = results.setdefault(spectrum_file, {})
                spectrum_match = matches_in_file.get(spectrum_title)
                if spectrum_match is None:
                    spectrum_match = SpectrumMatch(spectrum_file, spectrum_title)
                    matches_in_file[spectrum_title] = spectrum_match

                for assumption in assumptions:
                    spectrum_match.add_assumption(self.advocate, assumption)
                n_assumptions += len(assumptions)

                if cancel_event is not None and cancel_event.is_set():
                    logger.warning(
                        f"Reading {self.path.name} cancelled after line {line_number}, "
                        f"returning partial results"
                    )
                    break

        spectrum_matches = [
            spectrum_match
            for matches_in_file in results.values()
            for spectrum_match in matches_in_file.values()
        ]

        logger.info(
            f"✓ Read {n_assumptions:,} PSMs for {len(spectrum_matches):,} spectra "
            f"from {self.path.name}"
        )

        return ParseResult(spectrum_matches=spectrum_matches, software_version=version)

    def _read_header(self, lines: Iterator[Tuple[int, str]]) -> Tuple[Optional[str], ColumnIndex]:
        """Consume the optional version line and the header line."""
        first = next(lines, None)
        if first is None:
            raise SchemaError(f"MS Amanda file is empty: {self.path.name}")

        _, header_line = first
        version = parse_version_line(header_line)
        if version is not None:
            second = next(lines, None)
            if second is None:
                raise SchemaError(f"MS Amanda file has no header line: {self.path.name}")
            _, header_line = second

        return version, ColumnIndex.from_header(header_line, MS_AMANDA_COLUMNS)

    def _parse_row(
        self,
        line: str,
        line_number: int,
        columns: ColumnIndex,
        expand_aa_combinations: bool,
    ) -> Tuple[str, str, List[MatchAssumption]]:
        """Parse one data row into (spectrum file, spectrum title, assumptions)."""
        row = line.split("\t")
        if len(row) < columns.min_row_length:
            raise RowFormatError(
                f"Expected at least {columns.min_row_length} columns, found {len(row)}",
                line_number,
                line,
            )

        spectrum_title = row[columns['title']].strip()
        if self.params.decode_titles:
            spectrum_title = decode_title(spectrum_title)
        spectrum_file = row[columns['filename']]
        sequence = row[columns['sequence']].upper()

        raw_score = _parse_field(read_double, row[columns['amanda_score']], "Amanda Score", line_number, line)
        if 'weighted_probability' in columns:
            score = _parse_field(
                read_double,
                columns.get(row, 'weighted_probability'),
                "Weighted Probability",
                line_number,
                line,
            )
        else:
            score = score_to_evalue(raw_score)

        rank = _parse_field(read_int, row[columns['rank']], "Rank", line_number, line)
        if rank < 1:
            raise RowFormatError(f"Invalid Rank value {rank}, ranks start at 1", line_number, line)
        charge = _parse_field(read_int, row[columns['charge']], "Charge", line_number, line)

        mz = _parse_metadata(read_optional_double, row[columns['mz']], "m/z", line_number)
        retention_time = _parse_metadata(
            parse_retention_time, columns.get(row, 'rt'), "RT", line_number
        )
        q_value = _parse_metadata(
            read_optional_double,
            columns.get(row, 'percolator_q_value'),
            "percolator:Q value",
            line_number,
        )
        protein_accessions = [
            accession.strip()
            for accession in row[columns['protein_accessions']].split(";")
            if accession.strip()
        ]

        modifications = parse_modifications(row[columns['modifications']], sequence)

        assumption = MatchAssumption(
            candidate=PeptideCandidate(sequence, modifications),
            rank=rank,
            advocate=self.advocate,
            charge=charge,
            raw_score=raw_score,
            score=score,
            identification_file=self.path.name,
            scan_number=row[columns['scan_number']].strip() or None,
            protein_accessions=protein_accessions,
            mz=mz,
            retention_time=retention_time,
            percolator_q_value=q_value,
        )

        if expand_aa_combinations and has_combination(sequence):
            assumptions = [
                assumption.with_candidate(candidate)
                for candidate in expand_candidate(assumption.candidate)
            ]
        else:
            assumptions = [assumption]

        return spectrum_file, spectrum_title, assumptions


# =============================================================================
# Convenience
# =============================================================================

def read_ms_amanda(
    path: Union[str, Path],
    expand_aa_combinations: bool = True,
    cancel_event: Optional[threading.Event] = None,
    params: Optional[MsAmandaReaderParams] = None,
) -> ParseResult:
    """Read an MS Amanda result file in one call.

    Parameters
    ----------
    path : str or Path
        Path to the .ms-amanda.csv file
    expand_aa_combinations : bool
        Expand ambiguous residues into concrete peptides (default: True)
    cancel_event : threading.Event, optional
        Cooperative cancellation, polled between rows
    params : MsAmandaReaderParams, optional
        Other reader settings

    Returns
    -------
    ParseResult
        Spectrum matches and MS Amanda version

    Examples
    --------
    >>> result = read_ms_amanda("search.ms-amanda.csv")
    >>> print(f"{len(result):,} spectra, MS Amanda {result.software_version}")
    """
    reader = MsAmandaReader(path, params=params)
    return reader.parse(expand_aa_combinations, cancel_event)
