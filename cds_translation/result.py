"""
result.py
=========
Value objects returned by :meth:`cds_translation.translator.Translator.translate`.

Data Flow
---------
    Input  : per-call translation state (translator.py)
    Output : TranslationResult (frozen dataclass)
             FeatureMutations  (feature edits implied by the applied fixes)

File Formats Produced
---------------------
    protein FASTA of the conceptual translation (``to_fasta``)
    JSON translation report (``to_json``)

Design Notes
------------
- ``translation`` covers every codon, including stops and a translated
  trailing probe; ``conceptual_translation`` is the protein that would be
  submitted, i.e. the first ``conceptual_translation_codons`` residues.
- A result never touches the feature it was computed for.  The edits implied
  by auto-fixes travel as :class:`FeatureMutations` and are applied by the
  caller, or by ``translate_feature``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from cds_translation.config import FixKind
from cds_translation.feature import PSEUDO, FeatureLike

# ---------------------------------------------------------------------------
# Module logger
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data contracts
# ---------------------------------------------------------------------------

class Codon(NamedTuple):
    """One translated codon of the working sequence."""

    codon: str           # as found in the sequence, case preserved
    position: int        # 1-based position of the first base
    amino_acid: str
    is_exception: bool   # /transl_except or degenerate start override


@dataclass(frozen=True, slots=True)
class FeatureMutations:
    """
    Feature edits implied by the fixes of one successful translation.

    Attributes
    ----------
    five_prime_partial, three_prime_partial : bool | None
        Target partiality of each end; ``None`` leaves the end untouched.
    pseudo : bool
        Mark the feature ``pseudo=true``.
    remove_attributes : tuple[str, ...]
        Attributes to drop (the submitted ``translation`` of a new pseudo CDS).
    trailing_bases_to_delete : str
        Bases after the stop codon that the caller should trim from the
        feature location.  Location edits are not performed by :meth:`apply`.
    """

    five_prime_partial: bool | None = None
    three_prime_partial: bool | None = None
    pseudo: bool = False
    remove_attributes: tuple[str, ...] = ()
    trailing_bases_to_delete: str = ""

    @property
    def is_empty(self) -> bool:
        return self == FeatureMutations()

    def apply(self, feature: FeatureLike) -> None:
        """Apply partiality, pseudo and attribute edits to ``feature`` in place."""
        if self.five_prime_partial is not None:
            feature.set_five_prime_partial(self.five_prime_partial)
        if self.three_prime_partial is not None:
            feature.set_three_prime_partial(self.three_prime_partial)
        if self.pseudo:
            feature.add_attribute(PSEUDO, "true")
        for name in self.remove_attributes:
            feature.remove_attribute(name)
        logger.debug("Applied feature mutations: %s.", self)

    def to_dict(self) -> dict:
        return {
            "five_prime_partial": self.five_prime_partial,
            "three_prime_partial": self.three_prime_partial,
            "pseudo": self.pseudo,
            "remove_attributes": list(self.remove_attributes),
            "trailing_bases_to_delete": self.trailing_bases_to_delete,
        }


@dataclass(frozen=True, slots=True)
class TranslationResult:
    """
    Outcome of translating one CDS feature.

    Attributes
    ----------
    codons : tuple[Codon, ...]
        Every translated codon, in order.
    trailing_bases : str
        0-2 bases left over after the last codon that could not be
        translated even when padded with ``n``.
    conceptual_translation_codons : int
        Number of leading codons forming the conceptual protein; 0 when the
        translation is not usable (pseudo, relaxed degradations).
    fixed_five_prime_partial, fixed_three_prime_partial : bool
        An auto-fix changed the partiality of that end.
    fixed_pseudo : bool
        The internal stop codon fix marked the feature pseudo.
    fixed_degenerate_start_codon : bool
        An ambiguous first codon was translated as ``M``.
    errors : tuple[str, ...]
        Validation failures; at most one, since a failure ends the run.
    fixes : tuple[FixKind, ...]
        Applied auto-fixes, in the order they were applied.
    mutations : FeatureMutations
        Feature edits to apply; empty when ``errors`` is not.
    translation_length : int
        Bases from codon start to the end, reported when not a multiple of 3.
    base_count : int
        Sequence length, reported when shorter than one codon.
    """

    codons: tuple[Codon, ...] = ()
    trailing_bases: str = ""
    conceptual_translation_codons: int = 0
    fixed_five_prime_partial: bool = False
    fixed_three_prime_partial: bool = False
    fixed_pseudo: bool = False
    fixed_degenerate_start_codon: bool = False
    errors: tuple[str, ...] = ()
    fixes: tuple[FixKind, ...] = ()
    mutations: FeatureMutations = field(default_factory=FeatureMutations)
    translation_length: int = 0
    base_count: int = 0

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------

    @property
    def sequence(self) -> str:
        """The translated bases: all codons followed by the trailing bases."""
        return "".join(codon.codon for codon in self.codons) + self.trailing_bases

    @property
    def translation(self) -> str:
        """Amino acids of all codons, stop codons included."""
        return "".join(codon.amino_acid for codon in self.codons)

    @property
    def conceptual_translation(self) -> str:
        """The protein: the leading ``conceptual_translation_codons`` residues."""
        return "".join(
            codon.amino_acid for codon in self.codons[: self.conceptual_translation_codons]
        )

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_messages(self) -> str:
        return "\n".join(self.errors)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_fasta(self, sequence_id: str, line_width: int = 60) -> str:
        """
        Return the conceptual translation as a FASTA record.

        Parameters
        ----------
        sequence_id : str
            Header identifier, typically the feature ID.
        line_width : int
            Characters per wrapped line. Use 0 for a single-line sequence.
        """
        seq = self.conceptual_translation
        if line_width > 0 and seq:
            wrapped = "\n".join(
                seq[i : i + line_width] for i in range(0, len(seq), line_width)
            )
        else:
            wrapped = seq
        return f">{sequence_id}\n{wrapped}\n"

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "translation": self.translation,
            "conceptual_translation": self.conceptual_translation,
            "conceptual_translation_codons": self.conceptual_translation_codons,
            "trailing_bases": self.trailing_bases,
            "codons": [codon._asdict() for codon in self.codons],
            "fixed_five_prime_partial": self.fixed_five_prime_partial,
            "fixed_three_prime_partial": self.fixed_three_prime_partial,
            "fixed_pseudo": self.fixed_pseudo,
            "fixed_degenerate_start_codon": self.fixed_degenerate_start_codon,
            "fixes": [fix.value for fix in self.fixes],
            "mutations": self.mutations.to_dict(),
            "translation_length": self.translation_length,
            "base_count": self.base_count,
            "is_valid": self.is_valid,
            "errors": list(self.errors),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
