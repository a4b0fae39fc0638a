"""
sequence.py
===========
Nucleotide sequence helpers used before codon segmentation.

Responsibilities
----------------
- Accept a feature's coding bytes (``bytes`` / ``bytearray``) or ``str``
- Reverse complement minus-strand features, keeping IUPAC codes and case
- Report characters outside the IUPAC nucleotide alphabet
"""

from __future__ import annotations

from typing import Final, TypeVar

from Bio.Seq import Seq

from cds_translation.codon_translator import IUPAC_NUCLEOTIDES

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Nucleotides accepted by the translator (compared case-folded).
VALID_BASES: Final[frozenset[str]] = frozenset(IUPAC_NUCLEOTIDES)

SequenceT = TypeVar("SequenceT", str, bytes)


def as_text(sequence: bytes | bytearray | memoryview | str) -> str:
    """
    Return ``sequence`` as a ``str`` without altering any character.

    Bytes are decoded as Latin-1 so that every byte maps to one character and
    non-nucleotide bytes surface later as invalid bases rather than decode
    errors.
    """
    if isinstance(sequence, str):
        return sequence
    return bytes(sequence).decode("latin-1")


def reverse_complement(sequence: SequenceT) -> SequenceT:
    """
    Reverse complement an IUPAC nucleotide sequence.

    ``bytes`` in, ``bytes`` out; ``str`` in, ``str`` out.  Case is preserved,
    ``u`` complements to ``a`` and characters outside the alphabet are left
    untouched so that base validation can still reject them.
    """
    if isinstance(sequence, str):
        return str(Seq(sequence).reverse_complement())
    return bytes(Seq(bytes(sequence)).reverse_complement())


def invalid_bases(sequence: str) -> list[str]:
    """Sorted distinct characters of ``sequence`` outside :data:`VALID_BASES`."""
    return sorted(set(sequence.lower()) - VALID_BASES)
