#!/usr/bin/env python
"""Convert an MS Amanda result file into a flat PSM table (TSV).

One output row per peptide-spectrum match. Ambiguous residues (B, J, Z, X)
are expanded into concrete peptides unless --no-expand is given.

Usage:
    python scripts/convert_ms_amanda.py --input search.ms-amanda.csv --output psms.tsv
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import logging

from alphapeptio.export import spectrum_matches_to_dataframe
from alphapeptio.readers import MsAmandaReaderParams, get_reader


def main():
    parser = argparse.ArgumentParser(description='Convert MS Amanda results to a PSM table')
    parser.add_argument('--input', type=str, required=True,
                        help='MS Amanda result file (.ms-amanda.csv, may be .gz)')
    parser.add_argument('--output', type=str, required=True,
                        help='Output TSV path')
    parser.add_argument('--no-expand', action='store_true',
                        help='Do not expand ambiguous amino acids')
    parser.add_argument('--encoding', type=str, default='utf-8-sig',
                        help='Text encoding of the input file')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    params = MsAmandaReaderParams(
        expand_aa_combinations=not args.no_expand,
        encoding=args.encoding,
    )
    reader = get_reader(args.input, params=params)
    result = reader.parse()

    df = spectrum_matches_to_dataframe(result.spectrum_matches)
    df.to_csv(args.output, sep='\t', index=False)

    print(f"MS Amanda version: {result.software_version or 'unknown'}")
    print(f"✓ Wrote {len(df):,} PSMs for {len(result):,} spectra to {args.output}")


if __name__ == '__main__':
    main()
