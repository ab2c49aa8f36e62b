"""Identification result file readers.

Readers are looked up by file extension, so callers can dispatch on the
file name alone:

>>> reader = get_reader("search.ms-amanda.csv")
>>> matches = reader.parse_all()

Supported formats:
- MS Amanda csv export (.ms-amanda.csv, optionally .gz compressed)
"""

from pathlib import Path
from typing import Dict, Type, Union

from .columns import (
    ColumnIndex,
    ColumnSpec,
    MS_AMANDA_COLUMNS,
)

from .ms_amanda import (
    MsAmandaReader,
    MsAmandaReaderParams,
    extract_version,
    read_ms_amanda,
)

READERS: Dict[str, Type[MsAmandaReader]] = {
    MsAmandaReader.extension: MsAmandaReader,
}


def get_reader(path: Union[str, Path], **kwargs) -> MsAmandaReader:
    """Create the reader matching the file extension of ``path``.

    Raises
    ------
    ValueError
        If no reader handles the extension
    """
    name = Path(path).name.lower()
    if name.endswith('.gz'):
        name = name[:-len('.gz')]

    for extension, reader_class in READERS.items():
        if name.endswith(extension):
            return reader_class(path, **kwargs)

    raise ValueError(
        f"Unknown identification file: {Path(path).name}. "
        f"Supported extensions: {', '.join(READERS)}"
    )


__all__ = [
    # Column schema
    'ColumnIndex',
    'ColumnSpec',
    'MS_AMANDA_COLUMNS',

    # MS Amanda
    'MsAmandaReader',
    'MsAmandaReaderParams',
    'extract_version',
    'read_ms_amanda',

    # Dispatch
    'READERS',
    'get_reader',
]
