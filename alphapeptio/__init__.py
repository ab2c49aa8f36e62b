"""AlphaPeptIO - Identification result file readers for proteomics.

Streaming readers that turn search engine exports into typed
peptide-spectrum matches, starting with MS Amanda csv files.
"""

__version__ = "0.1.0"

from alphapeptio import readers
from alphapeptio import matches
from alphapeptio import modifications
from alphapeptio import sequences
from alphapeptio import export

from alphapeptio.exceptions import (
    ParseError,
    SchemaError,
    RowFormatError,
    ModificationGrammarError,
)
from alphapeptio.readers import (
    MsAmandaReader,
    MsAmandaReaderParams,
    get_reader,
    read_ms_amanda,
)

__all__ = [
    "readers",
    "matches",
    "modifications",
    "sequences",
    "export",
    "ParseError",
    "SchemaError",
    "RowFormatError",
    "ModificationGrammarError",
    "MsAmandaReader",
    "MsAmandaReaderParams",
    "get_reader",
    "read_ms_amanda",
]
