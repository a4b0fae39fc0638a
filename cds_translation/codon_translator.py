"""
codon_translator.py
===================
Single-codon translation against one NCBI genetic code.

Responsibilities
----------------
- Expand IUPAC ambiguity codes into the literal codons they stand for
- Translate a (possibly ambiguous) codon through the start or other codon map
- Reconcile the amino acids of all literal expansions into one residue
- Honour per-instance ``/codon`` overrides before the table lookup

Design Notes
------------
- Expansion and reconciliation are static table lookups over fixed sets.
  The base sets come from Biopython's ``IUPACData.ambiguous_dna_values``.
- Reconciliation never guesses: two different residues collapse to their
  shared ambiguity code (``B``, ``Z``, ``J``) or to ``X``.
- ``gcn`` → {gca, gcc, gcg, gct} → all ``A`` → ``A``;
  ``aan`` → K, N, K, N → no shared group → ``X``.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from Bio.Data import IUPACData

from cds_translation.errors import UntranslatableCodonError
from cds_translation.translation_tables import TranslationTable, get_translation_table

# ---------------------------------------------------------------------------
# Module logger
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Literal bases plus the eleven IUPAC nucleotide ambiguity codes.
IUPAC_NUCLEOTIDES: Final[str] = "atcgrymkswhbvdn"

#: Lowercase IUPAC code → literal bases it may stand for.
AMBIGUOUS_BASE_MAP: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType({
    code: tuple(sorted(IUPACData.ambiguous_dna_values[code.upper()].lower()))
    for code in IUPAC_NUCLEOTIDES
})

#: Unknown / unresolvable amino acid.
UNKNOWN_AMINO_ACID: Final[str] = "X"

#: Methionine, the residue every complete CDS must start with.
METHIONINE: Final[str] = "M"

#: Stop codon symbol.
STOP_SYMBOL: Final[str] = "*"


def _ambiguous_amino_acid_groups() -> dict[str, str]:
    groups = {
        "B": "ND",   # Asx: asparagine or aspartic acid
        "Z": "QE",   # Glx: glutamine or glutamic acid
        "J": "IL",   # Xle: isoleucine or leucine
    }
    mapping: dict[str, str] = {}
    for code, members in groups.items():
        mapping[code] = code
        for member in members:
            mapping[member] = code
    return mapping


#: Amino acid → ambiguity group code it belongs to.
AMBIGUOUS_AMINO_ACID_MAP: Final[Mapping[str, str]] = MappingProxyType(
    _ambiguous_amino_acid_groups()
)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def expand_to_unambiguous_codons(codon: str) -> list[str]:
    """
    Return every literal codon an IUPAC codon may represent.

    Parameters
    ----------
    codon : str
        Three nucleotide characters, case-insensitive.

    Returns
    -------
    list[str]
        1 entry for a literal codon, up to 64 for ``nnn``.

    Raises
    ------
    UntranslatableCodonError
        If ``codon`` is not three IUPAC nucleotide characters.
    """
    codon = codon.lower()
    if len(codon) != 3:
        raise UntranslatableCodonError(f"Unable to translate codon: {codon}")
    try:
        base_sets = [AMBIGUOUS_BASE_MAP[base] for base in codon]
    except KeyError:
        raise UntranslatableCodonError(f"Unable to translate codon: {codon}") from None
    return ["".join(bases) for bases in itertools.product(*base_sets)]


def reconcile_amino_acids(existing: str | None, incoming: str) -> str:
    """
    Merge two candidate residues for the same codon.

    Identical residues are kept, members of one ambiguity group collapse to the
    group code, anything else becomes ``X``.
    """
    if existing is None or existing == incoming:
        return incoming
    existing_group = AMBIGUOUS_AMINO_ACID_MAP.get(existing)
    if existing_group is not None and existing_group == AMBIGUOUS_AMINO_ACID_MAP.get(incoming):
        return existing_group
    return UNKNOWN_AMINO_ACID


# ---------------------------------------------------------------------------
# Codon translator
# ---------------------------------------------------------------------------

class CodonTranslator:
    """
    Translates single codons using one genetic code and optional overrides.

    Parameters
    ----------
    table_id : int
        NCBI translation table number, resolved once at construction.

    Raises
    ------
    TranslationTableError
        If ``table_id`` is not a known genetic code.
    """

    def __init__(self, table_id: int) -> None:
        self.translation_table: TranslationTable = get_translation_table(table_id)
        self._codon_exceptions: dict[str, str] = {}

    @property
    def codon_exceptions(self) -> Mapping[str, str]:
        return MappingProxyType(self._codon_exceptions)

    def add_codon_exception(self, codon: str, amino_acid: str) -> None:
        """Always translate the literal ``codon`` as ``amino_acid`` (``/codon``)."""
        self._codon_exceptions[codon.lower()] = amino_acid
        logger.debug(
            "Codon exception registered: %s -> %s (table %d).",
            codon.lower(), amino_acid, self.translation_table.table_id,
        )

    def _lookup(self, literal_codon: str, codon_map: Mapping[str, str], codon: str) -> str:
        amino_acid = self._codon_exceptions.get(literal_codon)
        if amino_acid is None:
            amino_acid = codon_map.get(literal_codon)
        if amino_acid is None:
            raise UntranslatableCodonError(f"Unable to translate codon: {codon}")
        return amino_acid

    def translate_codon(self, codon: str, codon_map: Mapping[str, str]) -> str:
        """
        Translate ``codon`` through ``codon_map``, resolving ambiguity codes.

        Raises
        ------
        UntranslatableCodonError
            If the codon is malformed or a literal expansion has no mapping.
        """
        amino_acid: str | None = None
        for literal_codon in expand_to_unambiguous_codons(codon):
            amino_acid = reconcile_amino_acids(
                amino_acid, self._lookup(literal_codon, codon_map, codon)
            )
        # expansion always yields at least one codon
        assert amino_acid is not None
        return amino_acid

    def translate_start_codon(self, codon: str) -> str:
        return self.translate_codon(codon, self.translation_table.start_codon_map)

    def translate_other_codon(self, codon: str) -> str:
        return self.translate_codon(codon, self.translation_table.other_codon_map)

    def is_ambiguous(self, codon: str) -> bool:
        return len(expand_to_unambiguous_codons(codon)) > 1

    def _is_degenerate(self, codon: str, codon_map: Mapping[str, str], amino_acid: str) -> bool:
        return any(
            self._lookup(literal_codon, codon_map, codon) == amino_acid
            for literal_codon in expand_to_unambiguous_codons(codon)
        )

    def is_degenerate_start_codon(self, codon: str) -> bool:
        """True when any literal expansion of ``codon`` is a start codon."""
        return self._is_degenerate(codon, self.translation_table.start_codon_map, METHIONINE)

    def is_degenerate_stop_codon(self, codon: str) -> bool:
        """True when any literal expansion of ``codon`` is a stop codon."""
        return self._is_degenerate(codon, self.translation_table.other_codon_map, STOP_SYMBOL)
