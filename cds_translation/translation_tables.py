"""
translation_tables.py
=====================
Translation Table Registry: NCBI genetic codes as immutable codon maps.

Responsibilities
----------------
- Hold the NCBI genetic code definitions (amino acid + start strings)
- Expand each definition into a start-codon map and an other-codon map
- Reject malformed definitions when the registry is first loaded
- Serve tables by NCBI id from a lazily built, process-wide registry

Design Notes
------------
- Codons are enumerated in the NCBI order: first, second and third base each
  iterate over ``t, c, a, g``.  Position *i* of the 64-character strings
  describes the *i*-th codon of that enumeration.
- The start string carries ``M`` at every codon that may initiate translation;
  the start-codon map substitutes ``M`` there, the other-codon map never does.
- Maps are exposed as ``MappingProxyType`` so a table cannot be mutated after
  the registry is built; concurrent readers need no locking.

Data source: https://www.ncbi.nlm.nih.gov/Taxonomy/Utils/wprintgc.cgi
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, NamedTuple

from cds_translation.errors import TranslationTableError

# ---------------------------------------------------------------------------
# Module logger
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Base order used by NCBI to lay out the 64 codons.
CODON_BASE_ORDER: Final[str] = "tcag"

#: Number of literal codons every table must define.
CODON_COUNT: Final[int] = 64

#: Translation table used when a feature carries no ``transl_table`` qualifier.
DEFAULT_TRANSLATION_TABLE: Final[int] = 11

#: Marker for a start codon in the descriptor start strings.
START_MARKER: Final[str] = "M"


# ---------------------------------------------------------------------------
# Table data
# ---------------------------------------------------------------------------

class TranslationTableDescriptor(NamedTuple):
    """Raw NCBI definition of one genetic code."""

    table_id: int
    name: str
    amino_acids: str   # 64 one-letter codes, '*' for stop
    starts: str        # 64 chars, 'M' where the codon is an alternative start


TABLE_DESCRIPTORS: Final[tuple[TranslationTableDescriptor, ...]] = (
    TranslationTableDescriptor(
        1, "The Standard Code",
        "FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "---M---------------M---------------M----------------------------",
    ),
    TranslationTableDescriptor(
        2, "The Vertebrate Mitochondrial Code",
        "FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSS**VVVVAAAADDEEGGGG",
        "--------------------------------MMMM---------------M------------",
    ),
    TranslationTableDescriptor(
        3, "The Yeast Mitochondrial Code",
        "FFLLSSSSYY**CCWWTTTTPPPPHHQQRRRRIIMMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "----------------------------------MM----------------------------",
    ),
    TranslationTableDescriptor(
        4, "The Mold, Protozoan, and Coelenterate Mitochondrial Code and the "
           "Mycoplasma/Spiroplasma Code",
        "FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "--MM---------------M------------MMMM---------------M------------",
    ),
    TranslationTableDescriptor(
        5, "The Invertebrate Mitochondrial Code",
        "FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSSSSVVVVAAAADDEEGGGG",
        "---M----------------------------MMMM---------------M------------",
    ),
    TranslationTableDescriptor(
        6, "The Ciliate, Dasycladacean and Hexamita Nuclear Code",
        "FFLLSSSSYYQQCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "-----------------------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        9, "The Echinoderm and Flatworm Mitochondrial Code",
        "FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNNKSSSSVVVVAAAADDEEGGGG",
        "-----------------------------------M---------------M------------",
    ),
    TranslationTableDescriptor(
        10, "The Euplotid Nuclear Code",
        "FFLLSSSSYY**CCCWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "-----------------------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        11, "The Bacterial and Plant Plastid Code",
        "FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "---M---------------M------------MMMM---------------M------------",
    ),
    TranslationTableDescriptor(
        12, "The Alternative Yeast Nuclear Code",
        "FFLLSSSSYY**CC*WLLLSPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "-------------------M---------------M----------------------------",
    ),
    TranslationTableDescriptor(
        13, "The Ascidian Mitochondrial Code",
        "FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSSGGVVVVAAAADDEEGGGG",
        "---M------------------------------MM---------------M------------",
    ),
    TranslationTableDescriptor(
        14, "The Alternative Flatworm Mitochondrial Code",
        "FFLLSSSSYYY*CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNNKSSSSVVVVAAAADDEEGGGG",
        "-----------------------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        15, "Blepharisma Macronuclear",
        "FFLLSSSSYY*QCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "----------*---*--------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        16, "Chlorophycean Mitochondrial Code",
        "FFLLSSSSYY*LCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "-----------------------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        21, "Trematode Mitochondrial Code",
        "FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNNKSSSSVVVVAAAADDEEGGGG",
        "-----------------------------------M---------------M------------",
    ),
    TranslationTableDescriptor(
        22, "Scenedesmus obliquus Mitochondrial Code",
        "FFLLSS*SYY*LCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "-----------------------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        23, "Thraustochytrium Mitochondrial Code",
        "FF*LSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "--------------------------------M--M---------------M------------",
    ),
    TranslationTableDescriptor(
        24, "Pterobranchia Mitochondrial Code",
        "FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSSKVVVVAAAADDEEGGGG",
        "---M---------------M---------------M----------------------------",
    ),
    TranslationTableDescriptor(
        25, "Candidate Division SR1 and Gracilibacteria Code",
        "FFLLSSSSYY**CCGWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "---M---------------M---------------M----------------------------",
    ),
    TranslationTableDescriptor(
        26, "Pachysolen tannophilus Nuclear Code",
        "FFLLSSSSYY**CC*WLLLAPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "----------**--*----M---------------M----------------------------",
    ),
    TranslationTableDescriptor(
        27, "Karyorelict Nuclear Code",
        "FFLLSSSSYYQQCCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "--------------*--------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        28, "Condylostoma Nuclear Code",
        "FFLLSSSSYYQQCCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "----------**--*--------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        29, "Mesodinium Nuclear Code",
        "FFLLSSSSYYYYCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "--------------*--------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        30, "Peritrich Nuclear Code",
        "FFLLSSSSYYEECC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "--------------*--------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        31, "Blastocrithidia Nuclear Code",
        "FFLLSSSSYYEECCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG",
        "----------**-----------------------M----------------------------",
    ),
    TranslationTableDescriptor(
        33, "Cephalodiscidae Mitochondrial UAA-Tyr Code",
        "FFLLSSSSYYY*CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSSKVVVVAAAADDEEGGGG",
        "---M-------*-------M---------------M---------------M------------",
    ),
)


# ---------------------------------------------------------------------------
# Data contract
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TranslationTable:
    """
    One NCBI genetic code, expanded into literal codon maps.

    Attributes
    ----------
    table_id : int
        NCBI translation table number.
    name : str
        Human-readable name of the genetic code.
    start_codon_map : Mapping[str, str]
        Lowercase codon → amino acid, with ``M`` at every valid start codon.
    other_codon_map : Mapping[str, str]
        Lowercase codon → amino acid for every non-initiating position.
    """

    table_id: int
    name: str
    start_codon_map: Mapping[str, str]
    other_codon_map: Mapping[str, str]


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _literal_codons() -> list[str]:
    """The 64 lowercase codons in NCBI order (``ttt, ttc, tta, ttg, tct, …``)."""
    return ["".join(bases) for bases in itertools.product(CODON_BASE_ORDER, repeat=3)]


def _validate_descriptor(descriptor: TranslationTableDescriptor) -> None:
    if len(descriptor.amino_acids) != CODON_COUNT or len(descriptor.starts) != CODON_COUNT:
        raise TranslationTableError(
            f"Translation table {descriptor.table_id} must contain exactly "
            f"{CODON_COUNT} codons (amino acids: {len(descriptor.amino_acids)}, "
            f"starts: {len(descriptor.starts)})."
        )


def build_translation_table(descriptor: TranslationTableDescriptor) -> TranslationTable:
    """
    Expand a raw descriptor into an immutable :class:`TranslationTable`.

    Raises
    ------
    TranslationTableError
        If either descriptor string does not hold exactly 64 characters.
    """
    _validate_descriptor(descriptor)

    start_codon_map: dict[str, str] = {}
    other_codon_map: dict[str, str] = {}
    for codon, amino_acid, start in zip(
        _literal_codons(), descriptor.amino_acids, descriptor.starts
    ):
        other_codon_map[codon] = amino_acid
        start_codon_map[codon] = START_MARKER if start == START_MARKER else amino_acid

    return TranslationTable(
        table_id=descriptor.table_id,
        name=descriptor.name,
        start_codon_map=MappingProxyType(start_codon_map),
        other_codon_map=MappingProxyType(other_codon_map),
    )


def load(
    descriptors: Iterable[TranslationTableDescriptor] = TABLE_DESCRIPTORS,
) -> Mapping[int, TranslationTable]:
    """
    Build every table from ``descriptors``.

    Returns
    -------
    Mapping[int, TranslationTable]
        Read-only mapping keyed by NCBI table id.

    Raises
    ------
    TranslationTableError
        On the first malformed descriptor; nothing is returned in that case.
    """
    tables = {d.table_id: build_translation_table(d) for d in descriptors}
    return MappingProxyType(tables)


# ---------------------------------------------------------------------------
# Registry: lazy singleton, thread-safe
# ---------------------------------------------------------------------------

class TranslationTableRegistry:
    """
    Process-wide registry of genetic code tables, built once on first access.

    The tables live in class-level state; after the first successful
    ``load()`` the mapping is read-only and lookups take no lock.
    """

    _lock: threading.Lock = threading.Lock()
    _tables: Mapping[int, TranslationTable] | None = None

    @classmethod
    def _ensure_loaded(cls) -> Mapping[int, TranslationTable]:
        tables = cls._tables
        if tables is not None:
            return tables

        with cls._lock:
            if cls._tables is None:
                cls._tables = load(TABLE_DESCRIPTORS)
                logger.info(
                    "Translation table registry loaded: %d genetic codes.",
                    len(cls._tables),
                )
            return cls._tables

    @classmethod
    def get(cls, table_id: int) -> TranslationTable:
        """
        Return the table registered under ``table_id``.

        Raises
        ------
        TranslationTableError
            If no table carries that id.
        """
        tables = cls._ensure_loaded()
        try:
            return tables[table_id]
        except KeyError:
            raise TranslationTableError(
                f"Unknown translation table: {table_id!r}. "
                f"Valid table IDs: {sorted(tables)}"
            ) from None

    @classmethod
    def all(cls) -> Mapping[int, TranslationTable]:
        return cls._ensure_loaded()


def get_translation_table(table_id: int) -> TranslationTable:
    """Shortcut for :meth:`TranslationTableRegistry.get`."""
    return TranslationTableRegistry.get(table_id)
