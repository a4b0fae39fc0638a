"""
qualifiers.py
=============
Parsing of the INSDC translation override qualifiers.

    /transl_except=(pos:213..215,aa:Trp)     position-specific override
    /transl_except=(pos:1020,aa:TERM)        partial terminal stop
    /codon=(seq:"tga",aa:Trp)                codon-wide override

Amino acids are written as three-letter abbreviations (any case), ``TERM`` /
``TER`` for a stop and ``OTHER`` for an unlisted residue.
"""

from __future__ import annotations

import re
from typing import Final, NamedTuple

from Bio.Data import IUPACData

from cds_translation.errors import QualifierError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Upper-case three-letter name → one-letter code (includes Sec, Pyl, Asx, Glx, Xle, Xaa).
AMINO_ACID_NAMES: Final[dict[str, str]] = {
    name.upper(): letter
    for name, letter in IUPACData.protein_letters_3to1_extended.items()
}
AMINO_ACID_NAMES.update({"TERM": "*", "TER": "*", "OTHER": "X"})

_TRANSL_EXCEPT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*\(\s*pos\s*:\s*([^,]+)\s*,\s*aa\s*:\s*([^\s,)]+)\s*\)\s*$",
    re.IGNORECASE,
)

_POSITION_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(\d+)(?:\s*\.\.\s*(\d+))?\s*$"
)

_CODON_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*\(\s*seq\s*:\s*\"?([^\"\s,]+)\"?\s*,\s*aa\s*:\s*([^\s,)]+)\s*\)\s*$",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Data contracts
# ---------------------------------------------------------------------------

class TranslExcept(NamedTuple):
    """Parsed ``/transl_except`` value."""

    begin: int             # 1-based, inclusive
    end: int               # 1-based, inclusive; equals begin for a single base
    amino_acid_code: str   # as written, e.g. "Trp"
    amino_acid: str        # one-letter code, e.g. "W"


class CodonExcept(NamedTuple):
    """Parsed ``/codon`` value."""

    codon: str             # lowercase
    amino_acid: str


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def amino_acid_letter(name: str) -> str:
    """
    Convert an amino acid abbreviation to its one-letter code.

    Raises
    ------
    QualifierError
        If the abbreviation is not recognised.
    """
    try:
        return AMINO_ACID_NAMES[name.strip().upper()]
    except KeyError:
        raise QualifierError(f"Unknown amino acid: {name}") from None


def parse_transl_except(value: str | None) -> TranslExcept:
    """
    Parse a ``/transl_except`` value such as ``(pos:213..215,aa:Trp)``.

    Raises
    ------
    QualifierError
        On an empty value, a malformed value or an unknown amino acid.
    """
    if value is None or not value.strip():
        raise QualifierError("transl_except value cannot be null or empty")

    match = _TRANSL_EXCEPT_PATTERN.match(value)
    if match is None:
        raise QualifierError(f"Invalid transl_except format: {value}")

    position = _POSITION_PATTERN.match(match.group(1))
    if position is None:
        raise QualifierError(f"Invalid position in transl_except: {match.group(1).strip()}")

    begin = int(position.group(1))
    end = int(position.group(2)) if position.group(2) is not None else begin
    code = match.group(2).strip()
    return TranslExcept(begin, end, code, amino_acid_letter(code))


def parse_codon_qualifier(value: str | None) -> CodonExcept:
    """
    Parse a ``/codon`` value such as ``(seq:"tga",aa:Trp)``; quotes are optional.

    Raises
    ------
    QualifierError
        On an empty value, a malformed value, a codon that is not three bases
        long, or an unknown amino acid.
    """
    if value is None or not value.strip():
        raise QualifierError("codon value cannot be null or empty")

    match = _CODON_PATTERN.match(value)
    if match is None:
        raise QualifierError(f"Invalid codon format: {value}")

    codon = match.group(1).lower()
    if len(codon) != 3:
        raise QualifierError(f"Codon must be exactly 3 bases: {codon}")

    return CodonExcept(codon, amino_acid_letter(match.group(2)))
