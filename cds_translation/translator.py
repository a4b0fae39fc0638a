"""
translator.py
=============
CDS translation with INSDC validation and optional auto-fixes.

Responsibilities
----------------
- Configure a translator from a feature's qualifiers (table, strand,
  partiality, pseudo, codon start, ``/transl_except``, ``/codon``)
- Translate the feature's bases codon by codon, honouring position and codon
  exceptions and IUPAC ambiguity codes
- Validate the translation against the CDS submission rules and either
  report the first failure or, where enabled, fix it
- Report the feature edits implied by applied fixes without performing them

Data Flow
---------
    Input  : coding bases of one feature (str / bytes) + Translator settings
    Output : TranslationResult (result.py)

Design Notes
------------
- ``translate`` works on a per-call :class:`_TranslationRun`.  Fixes change
  the run, never the translator, so translating twice gives the same result.
- Every stage yields outcomes: :class:`Passed`, :class:`AutoFixed`,
  :class:`Degraded` (conceptual translation dropped without an error, for
  relaxed and pseudo features) or :class:`Failed`.  The first ``Failed`` ends
  the run and its message becomes the result's only error.
- Post-translation checks run in a fixed order: internal stop codons, start
  codon, trailing stop codons.
- Positions are 1-based in the working sequence, i.e. after reverse
  complementing a minus-strand feature.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final, NamedTuple

from cds_translation.codon_translator import (
    METHIONINE,
    STOP_SYMBOL,
    UNKNOWN_AMINO_ACID,
    CodonTranslator,
)
from cds_translation.config import ENABLE_ALL_FIXES, FixKind, FixOptions, TranslatorConfig
from cds_translation.errors import QualifierError, TranslationTableError, UntranslatableCodonError
from cds_translation.feature import (
    CODON,
    CODON_START,
    PSEUDO,
    PSEUDOGENE,
    TRANSL_EXCEPT,
    TRANSL_TABLE,
    TRANSLATION,
    FeatureLike,
)
from cds_translation.qualifiers import parse_codon_qualifier, parse_transl_except
from cds_translation.result import Codon, FeatureMutations, TranslationResult
from cds_translation.sequence import as_text, invalid_bases, reverse_complement

# ---------------------------------------------------------------------------
# Module logger
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Feature types treated as peptides by the default lookup (SO propeptide).
PEPTIDE_FEATURE_TYPES: Final[frozenset[str]] = frozenset({"propeptide", "so:0001062"})

#: GFF3 phase → codon start.
_CODON_START_BY_PHASE: Final[dict[str, int]] = {"0": 1, "1": 2, "2": 3}

#: Padding base for partial codons.
_PADDING_BASE: Final[str] = "n"


class ErrorKind(str, Enum):
    """Validation failures; each value is the message template."""

    SEQUENCE_NULL = "Sequence is null"
    INVALID_BASE = "Invalid base character in sequence"
    INVALID_CODON_START = "Invalid codon start: {codon_start}. Must be 1, 2, or 3"
    CODON_START_NOT_FIVE_PRIME_PARTIAL = "Codon start is {codon_start} but feature is not 5' partial"
    SEQUENCE_TOO_SHORT = "Sequence too short for translation with current codon start"
    EXCEPTION_OUTSIDE_FIVE_PRIME = "Translation exception outside frame on the 5' end"
    EXCEPTION_OUTSIDE_THREE_PRIME = "Translation exception outside frame on the 3' end"
    EXCEPTION_INVALID_RANGE = "Invalid translation exception range"
    EXCEPTION_INVALID_SPAN = (
        "Translation exception must span 3 bases or be a partial stop codon at 3' end"
    )
    EXCEPTION_OUT_OF_FRAME = (
        "Translation exception at position {begin} is in frame {frame} "
        "but codon start is {codon_start}"
    )
    SHORT_SEQUENCE_NOT_PARTIAL = "CDS feature with less than 3 bases must be 3' or 5' partial"
    NON_MULTIPLE_OF_THREE = (
        "CDS feature length must be a multiple of 3. Consider 5' or 3' partial location"
    )
    UNKNOWN_AMINO_ACIDS = "Translation has more than 50% unknown amino acids (X)"
    UNTRANSLATABLE_CODON = "Unable to translate codon: {codon}"
    NO_TRANSLATION = "No translation produced"
    SINGLE_STOP_CODON = (
        "CDS feature can have a single stop codon only if it has 3 bases and is 5' partial"
    )
    INTERNAL_STOP_CODONS = "The protein translation contains internal stop codons"
    NO_START_CODON = "The protein translation does not start with methionine"
    MULTIPLE_STOP_CODONS = "More than one stop codon at the 3' end"
    STOP_CODON_AT_PARTIAL_END = (
        "Stop codon found at 3' partial end. Consider removing 3' partial location"
    )
    NO_STOP_CODON = "No stop codon at the 3' end"
    PARTIAL_CODON_AFTER_STOP = "A partial codon appears after the stop codon"

    def message(self, **fields: object) -> str:
        return self.value.format(**fields)


# ---------------------------------------------------------------------------
# Stage outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Passed:
    """The check holds."""


@dataclass(frozen=True, slots=True)
class AutoFixed:
    """The check failed and ``fix`` repaired it."""

    fix: FixKind


@dataclass(frozen=True, slots=True)
class Degraded:
    """The check failed silently; the conceptual translation is dropped."""


@dataclass(frozen=True, slots=True)
class Failed:
    """The check failed; the run stops with ``message``."""

    error: ErrorKind
    message: str

    @classmethod
    def of(cls, error: ErrorKind, **fields: object) -> Failed:
        return cls(error, error.message(**fields))


Outcome = Passed | AutoFixed | Degraded | Failed


# ---------------------------------------------------------------------------
# Data contracts
# ---------------------------------------------------------------------------

class PositionException(NamedTuple):
    """Amino acid forced at a codon position (``/transl_except``)."""

    begin: int
    end: int
    amino_acid: str


class TranslationComparison(NamedTuple):
    """Outcome of :func:`compare_translations`."""

    matches: bool
    x_mismatch_count: int


@dataclass(slots=True)
class _TranslationRun:
    """Mutable state of one ``translate`` call."""

    sequence: str
    codon_start: int
    five_prime_partial: bool
    three_prime_partial: bool
    non_translating: bool
    peptide_feature: bool
    relaxed: bool
    fix_options: FixOptions
    codons: list[Codon] = field(default_factory=list)
    trailing_bases: str = ""
    conceptual_translation_codons: int = 0
    degraded: bool = False
    fixed_five_prime_partial: bool = False
    fixed_three_prime_partial: bool = False
    fixed_pseudo: bool = False
    fixed_degenerate_start_codon: bool = False
    fixes: list[FixKind] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    translation_length: int = 0
    base_count: int = 0

    def settle(self, outcomes: Iterable[Outcome]) -> bool:
        """Record the outcomes of one stage; False once a check has failed."""
        for outcome in outcomes:
            if isinstance(outcome, Failed):
                self.errors.append(outcome.message)
                logger.debug("Translation failed: %s", outcome.message)
                return False
            if isinstance(outcome, AutoFixed):
                self.apply_fix(outcome.fix)
            elif isinstance(outcome, Degraded):
                self.degraded = True
        return True

    def apply_fix(self, fix: FixKind) -> None:
        if fix in (
            FixKind.CODON_START_NOT_ONE_MAKE_5_PARTIAL,
            FixKind.NO_START_CODON_MAKE_5_PARTIAL,
        ):
            self.five_prime_partial = True
            self.fixed_five_prime_partial = True
        elif fix is FixKind.NON_MULTIPLE_OF_THREE_MAKE_3_AND_5_PARTIAL:
            self.five_prime_partial = True
            self.three_prime_partial = True
            self.fixed_five_prime_partial = True
            self.fixed_three_prime_partial = True
        elif fix is FixKind.NO_STOP_CODON_MAKE_3_PARTIAL:
            self.three_prime_partial = True
            self.fixed_three_prime_partial = True
        elif fix is FixKind.VALID_STOP_CODON_REMOVE_3_PARTIAL:
            self.three_prime_partial = False
            self.fixed_three_prime_partial = True
        elif fix is FixKind.INTERNAL_STOP_CODON_MAKE_PSEUDO:
            self.non_translating = True
            self.fixed_pseudo = True
        elif fix is FixKind.DEGENERATE_START_CODON:
            self.fixed_degenerate_start_codon = True
        # trailing base deletion is carried by the mutations only
        self.fixes.append(fix)
        logger.debug("Applied fix %s.", fix.value)

    def mutations(self) -> FeatureMutations:
        if self.errors:
            return FeatureMutations()
        trailing = (
            self.trailing_bases
            if FixKind.DELETE_TRAILING_BASES_AFTER_STOP_CODON in self.fixes
            else ""
        )
        return FeatureMutations(
            five_prime_partial=self.five_prime_partial if self.fixed_five_prime_partial else None,
            three_prime_partial=self.three_prime_partial if self.fixed_three_prime_partial else None,
            pseudo=self.fixed_pseudo,
            remove_attributes=(TRANSLATION,) if self.fixed_pseudo else (),
            trailing_bases_to_delete=trailing,
        )

    def to_result(self) -> TranslationResult:
        return TranslationResult(
            codons=tuple(self.codons),
            trailing_bases=self.trailing_bases,
            conceptual_translation_codons=0 if self.degraded else self.conceptual_translation_codons,
            fixed_five_prime_partial=self.fixed_five_prime_partial,
            fixed_three_prime_partial=self.fixed_three_prime_partial,
            fixed_pseudo=self.fixed_pseudo,
            fixed_degenerate_start_codon=self.fixed_degenerate_start_codon,
            errors=tuple(self.errors),
            fixes=tuple(self.fixes),
            mutations=self.mutations(),
            translation_length=self.translation_length,
            base_count=self.base_count,
        )


# ---------------------------------------------------------------------------
# Peptide lookup
# ---------------------------------------------------------------------------

def is_peptide_feature_type(feature_type: str) -> bool:
    """Default peptide lookup: the feature type is the SO propeptide term."""
    return feature_type.casefold() in PEPTIDE_FEATURE_TYPES


# ---------------------------------------------------------------------------
# Translator
# ---------------------------------------------------------------------------

class Translator:
    """
    Translates and validates one CDS feature.

    Settings are plain attributes and may be changed until ``translate`` is
    called; :meth:`from_feature` fills them in from a feature's qualifiers.

    Parameters
    ----------
    translation_table : int | None
        NCBI table number; ``config.default_translation_table`` when None.
    config : TranslatorConfig | None
        Fix options, relaxed mode and default table.

    Raises
    ------
    TranslationTableError
        If the translation table is unknown.
    """

    def __init__(
        self,
        translation_table: int | None = None,
        config: TranslatorConfig | None = None,
    ) -> None:
        config = config if config is not None else TranslatorConfig()
        table_id = (
            translation_table if translation_table is not None
            else config.default_translation_table
        )
        self.codon_translator = CodonTranslator(table_id)
        self.codon_start: int = 1
        self.non_translating: bool = False
        self.is_complement: bool = False
        self.five_prime_partial: bool = False
        self.three_prime_partial: bool = False
        self.peptide_feature: bool = False
        self.relaxed: bool = config.relaxed
        self.fix_options: FixOptions = config.fix_options
        self._position_exceptions: dict[int, PositionException] = {}

    @classmethod
    def from_feature(
        cls,
        feature: FeatureLike,
        config: TranslatorConfig | None = None,
        peptide_lookup: Callable[[str], bool] = is_peptide_feature_type,
    ) -> Translator:
        """
        Build a translator configured from ``feature``.

        Parameters
        ----------
        feature : FeatureLike
            The CDS (or peptide) feature.
        config : TranslatorConfig | None
            Shared options; defaults to :class:`TranslatorConfig()`.
        peptide_lookup : Callable[[str], bool]
            Decides from the feature type whether the feature is a peptide,
            e.g. through an ontology service.

        Raises
        ------
        TranslationTableError
            If ``transl_table`` is not an integer or not a known table.
        QualifierError
            If ``codon_start``, ``/transl_except`` or ``/codon`` is malformed.
        """
        raw_table = feature.get_attribute(TRANSL_TABLE)
        table_id: int | None = None
        if raw_table is not None:
            try:
                table_id = int(raw_table)
            except ValueError:
                raise TranslationTableError(f"Invalid transl_table: {raw_table}") from None

        translator = cls(table_id, config)
        translator.non_translating = (
            feature.has_attribute(PSEUDO) or feature.has_attribute(PSEUDOGENE)
        )
        translator.is_complement = feature.strand == "-"
        translator.five_prime_partial = feature.is_five_prime_partial()
        translator.three_prime_partial = feature.is_three_prime_partial()
        translator.codon_start = _codon_start_of(feature)

        for value in feature.get_attribute_list(TRANSL_EXCEPT):
            transl_except = parse_transl_except(value)
            translator.add_position_exception(
                transl_except.begin, transl_except.end, transl_except.amino_acid
            )
        for value in feature.get_attribute_list(CODON):
            codon_except = parse_codon_qualifier(value)
            translator.add_codon_exception(codon_except.codon, codon_except.amino_acid)

        translator.peptide_feature = peptide_lookup(feature.type)
        logger.debug(
            "Translator for %s feature: table=%d, codon_start=%d, complement=%s, "
            "partial=(%s, %s), pseudo=%s, peptide=%s.",
            feature.type, translator.translation_table_id, translator.codon_start,
            translator.is_complement, translator.five_prime_partial,
            translator.three_prime_partial, translator.non_translating,
            translator.peptide_feature,
        )
        return translator

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def translation_table_id(self) -> int:
        return self.codon_translator.translation_table.table_id

    @property
    def position_exceptions(self) -> Mapping[int, PositionException]:
        return MappingProxyType(self._position_exceptions)

    def add_position_exception(self, begin: int, end: int | None, amino_acid: str) -> None:
        """
        Force ``amino_acid`` for the codon starting at ``begin``.

        A later exception with the same ``begin`` replaces the earlier one.
        """
        end = begin if end is None else end
        self._position_exceptions[begin] = PositionException(begin, end, amino_acid)

    def add_codon_exception(self, codon: str, amino_acid: str) -> None:
        self.codon_translator.add_codon_exception(codon, amino_acid)

    def enable_all_fixes(self) -> None:
        """Switch on the fixes of :data:`~cds_translation.config.ENABLE_ALL_FIXES`."""
        self.fix_options = self.fix_options.with_fixes(*ENABLE_ALL_FIXES)

    def enable_fix(self, fix: FixKind) -> None:
        self.fix_options = self.fix_options.with_fixes(fix)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(self, sequence: str | bytes | bytearray | None) -> TranslationResult:
        """
        Translate the feature's coding bases.

        Parameters
        ----------
        sequence : str | bytes | bytearray | None
            Bases of the feature location on the plus strand, any case.

        Returns
        -------
        TranslationResult
            Validation failures are reported in ``errors``; this method does
            not raise for them.
        """
        run = _TranslationRun(
            sequence="",
            codon_start=self.codon_start,
            five_prime_partial=self.five_prime_partial,
            three_prime_partial=self.three_prime_partial,
            non_translating=self.non_translating,
            peptide_feature=self.peptide_feature,
            relaxed=self.relaxed,
            fix_options=self.fix_options,
        )

        if run.non_translating:
            logger.debug("Pseudo feature: no conceptual translation.")
            return run.to_result()

        if sequence is None:
            run.settle([Failed.of(ErrorKind.SEQUENCE_NULL)])
            return run.to_result()

        run.sequence = as_text(sequence)
        if self.is_complement:
            run.sequence = reverse_complement(run.sequence)
            logger.debug("Reverse complemented %d bases.", len(run.sequence))

        stages: tuple[Callable[[_TranslationRun], Iterator[Outcome]], ...] = (
            self._validate_bases,
            self._validate_codon_start,
            self._apply_position_exceptions,
            self._validate_length,
            self._translate_codons,
            self._check_translation_produced,
            self._validate_translation,
        )
        try:
            for stage in stages:
                if not run.settle(stage(run)):
                    break
        except UntranslatableCodonError as exc:
            run.settle([Failed(ErrorKind.UNTRANSLATABLE_CODON, str(exc))])

        result = run.to_result()
        logger.info(
            "Translated %d bases: %d codons, conceptual=%d aa, fixes=%s, errors=%d.",
            len(run.sequence), len(result.codons), result.conceptual_translation_codons,
            [fix.value for fix in result.fixes], len(result.errors),
        )
        return result

    # ------------------------------------------------------------------ #
    # Pre-translation stages                                               #
    # ------------------------------------------------------------------ #

    def _validate_bases(self, run: _TranslationRun) -> Iterator[Outcome]:
        bad = invalid_bases(run.sequence)
        if bad:
            logger.debug("Invalid bases in sequence: %s.", bad)
            yield Failed.of(ErrorKind.INVALID_BASE)
            return
        yield Passed()

    def _validate_codon_start(self, run: _TranslationRun) -> Iterator[Outcome]:
        if run.codon_start not in (1, 2, 3):
            yield Failed.of(ErrorKind.INVALID_CODON_START, codon_start=run.codon_start)
            return

        if run.codon_start != 1 and not run.five_prime_partial and not run.non_translating:
            if run.fix_options.codon_start_not_one_make_5_partial:
                yield AutoFixed(FixKind.CODON_START_NOT_ONE_MAKE_5_PARTIAL)
            else:
                yield Failed.of(
                    ErrorKind.CODON_START_NOT_FIVE_PRIME_PARTIAL, codon_start=run.codon_start
                )
                return

        if len(run.sequence) < 3 and run.codon_start != 1:
            yield Failed.of(ErrorKind.SEQUENCE_TOO_SHORT)
            return
        yield Passed()

    def _apply_position_exceptions(self, run: _TranslationRun) -> Iterator[Outcome]:
        """Check every position exception; pad a partial terminal stop with ``n``."""
        length = len(run.sequence)
        for begin, end, amino_acid in self._position_exceptions.values():
            if begin < run.codon_start:
                yield Failed.of(ErrorKind.EXCEPTION_OUTSIDE_FIVE_PRIME)
                return
            if begin > length or end > length:
                yield Failed.of(ErrorKind.EXCEPTION_OUTSIDE_THREE_PRIME)
                return
            if end < begin:
                yield Failed.of(ErrorKind.EXCEPTION_INVALID_RANGE)
                return

            span = end - begin
            partial_stop = amino_acid == STOP_SYMBOL and end == length and span in (0, 1)
            if span != 2 and not partial_stop:
                yield Failed.of(ErrorKind.EXCEPTION_INVALID_SPAN)
                return

            frame = begin % 3 or 3
            if frame != run.codon_start:
                yield Failed.of(
                    ErrorKind.EXCEPTION_OUT_OF_FRAME,
                    begin=begin, frame=frame, codon_start=run.codon_start,
                )
                return

            missing = 2 - span
            if amino_acid == STOP_SYMBOL and missing > 0 and end == len(run.sequence):
                run.sequence += _PADDING_BASE * missing
                logger.debug("Padded partial stop codon at %d with %d base(s).", begin, missing)
        yield Passed()

    def _validate_length(self, run: _TranslationRun) -> Iterator[Outcome]:
        bases = len(run.sequence)
        if bases < 3:
            run.base_count = bases
            if not run.five_prime_partial and not run.three_prime_partial:
                yield Failed.of(ErrorKind.SHORT_SEQUENCE_NOT_PARTIAL)
                return
        elif (bases - run.codon_start + 1) % 3 != 0:
            run.translation_length = bases - run.codon_start + 1
            exempt = (
                run.peptide_feature or run.five_prime_partial or run.three_prime_partial
                or run.non_translating or run.relaxed
            )
            if not exempt:
                if run.fix_options.non_multiple_of_three_make_3_and_5_partial:
                    yield AutoFixed(FixKind.NON_MULTIPLE_OF_THREE_MAKE_3_AND_5_PARTIAL)
                else:
                    yield Failed.of(ErrorKind.NON_MULTIPLE_OF_THREE)
                    return
        yield Passed()

    # ------------------------------------------------------------------ #
    # Codon translation                                                    #
    # ------------------------------------------------------------------ #

    def _translate_window(self, run: _TranslationRun, codon: str, index: int) -> tuple[Codon, bool]:
        """
        Translate the codon starting at 0-based ``index``.

        Returns the codon and whether the degenerate start codon fix was used.
        """
        position = index + 1
        exception = self._position_exceptions.get(position)

        if index == run.codon_start - 1 and not run.five_prime_partial:
            amino_acid = self.codon_translator.translate_start_codon(codon)
            if exception is not None:
                return Codon(codon, position, exception.amino_acid, True), False
            if (
                run.fix_options.degenerate_start_codon
                and amino_acid != METHIONINE
                and self.codon_translator.is_degenerate_start_codon(codon)
            ):
                return Codon(codon, position, METHIONINE, True), True
            return Codon(codon, position, amino_acid, False), False

        amino_acid = self.codon_translator.translate_other_codon(codon)
        if exception is not None:
            return Codon(codon, position, exception.amino_acid, True), False
        return Codon(codon, position, amino_acid, False), False

    def _translate_codons(self, run: _TranslationRun) -> Iterator[Outcome]:
        sequence = run.sequence
        bases = len(sequence)
        codons: list[Codon] = []
        unknown = 0

        index = run.codon_start - 1
        while index + 3 <= bases:
            codon, degenerate_start = self._translate_window(run, sequence[index : index + 3], index)
            if degenerate_start:
                yield AutoFixed(FixKind.DEGENERATE_START_CODON)
            codons.append(codon)
            if codon.amino_acid == UNKNOWN_AMINO_ACID:
                unknown += 1
            index += 3

        if unknown > len(codons) // 2:
            yield Failed.of(ErrorKind.UNKNOWN_AMINO_ACIDS)
            return

        # A partial last codon is kept only if it translates unambiguously.
        trailing = bases - index
        if trailing > 0:
            probe = (sequence[index:] + _PADDING_BASE * 3)[:3]
            codon, degenerate_start = self._translate_window(run, probe, index)
            if codon.amino_acid != UNKNOWN_AMINO_ACID:
                if degenerate_start:
                    yield AutoFixed(FixKind.DEGENERATE_START_CODON)
                codons.append(codon)
                trailing = 0

        run.codons = codons
        run.trailing_bases = sequence[bases - trailing :] if trailing else ""
        yield Passed()

    def _check_translation_produced(self, run: _TranslationRun) -> Iterator[Outcome]:
        if run.codons:
            yield Passed()
        elif run.relaxed:
            yield Degraded()
        else:
            yield Failed.of(ErrorKind.NO_TRANSLATION)

    # ------------------------------------------------------------------ #
    # Post-translation validation                                          #
    # ------------------------------------------------------------------ #

    def _validate_translation(self, run: _TranslationRun) -> Iterator[Outcome]:
        if not run.codons:
            return

        trailing_stops = 0
        for codon in reversed(run.codons):
            if codon.amino_acid != STOP_SYMBOL:
                break
            trailing_stops += 1

        conceptual = len(run.codons) - trailing_stops
        run.conceptual_translation_codons = conceptual

        if conceptual == 0:
            yield from self._check_stop_codon_only(run)
            yield from self._check_trailing_stop_codons(run, trailing_stops)
            return

        internal_stops = sum(
            1 for codon in run.codons[:conceptual] if codon.amino_acid == STOP_SYMBOL
        )
        yield from self._check_internal_stop_codons(run, internal_stops)
        yield from self._check_start_codon(run)
        yield from self._check_trailing_stop_codons(run, trailing_stops)

    def _check_stop_codon_only(self, run: _TranslationRun) -> Iterator[Outcome]:
        if run.relaxed or run.non_translating:
            return
        if not (len(run.codons) == 1 and not run.trailing_bases and run.five_prime_partial):
            yield Failed.of(ErrorKind.SINGLE_STOP_CODON)

    def _check_internal_stop_codons(self, run: _TranslationRun, internal_stops: int) -> Iterator[Outcome]:
        if internal_stops == 0:
            yield Passed()
        elif run.relaxed or run.non_translating:
            yield Degraded()
        elif run.fix_options.internal_stop_codon_make_pseudo:
            yield AutoFixed(FixKind.INTERNAL_STOP_CODON_MAKE_PSEUDO)
            yield Degraded()
        else:
            yield Failed.of(ErrorKind.INTERNAL_STOP_CODONS)

    def _check_start_codon(self, run: _TranslationRun) -> Iterator[Outcome]:
        if run.five_prime_partial or run.relaxed or run.peptide_feature:
            return
        if run.codons[0].amino_acid == METHIONINE:
            yield Passed()
        elif run.non_translating:
            yield Degraded()
        elif run.fix_options.no_start_codon_make_5_partial:
            yield AutoFixed(FixKind.NO_START_CODON_MAKE_5_PARTIAL)
        else:
            yield Failed.of(ErrorKind.NO_START_CODON)

    def _check_trailing_stop_codons(self, run: _TranslationRun, trailing_stops: int) -> Iterator[Outcome]:
        if run.relaxed:
            return

        if trailing_stops > 1:
            if run.non_translating:
                yield Degraded()
            else:
                yield Failed.of(ErrorKind.MULTIPLE_STOP_CODONS)
            return

        if trailing_stops == 1 and run.three_prime_partial:
            if run.non_translating:
                yield Degraded()
                return
            if not run.fix_options.valid_stop_codon_remove_3_partial:
                yield Failed.of(ErrorKind.STOP_CODON_AT_PARTIAL_END)
                return
            yield AutoFixed(FixKind.VALID_STOP_CODON_REMOVE_3_PARTIAL)

        if trailing_stops == 0 and not run.three_prime_partial:
            if run.non_translating:
                yield Degraded()
                return
            if not run.peptide_feature:
                if not run.fix_options.no_stop_codon_make_3_partial:
                    yield Failed.of(ErrorKind.NO_STOP_CODON)
                    return
                yield AutoFixed(FixKind.NO_STOP_CODON_MAKE_3_PARTIAL)

        if trailing_stops == 1 and run.trailing_bases:
            if run.non_translating:
                yield Degraded()
                return
            if not run.fix_options.delete_trailing_bases_after_stop_codon:
                yield Failed.of(ErrorKind.PARTIAL_CODON_AFTER_STOP)
                return
            yield AutoFixed(FixKind.DELETE_TRAILING_BASES_AFTER_STOP_CODON)

        yield Passed()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _codon_start_of(feature: FeatureLike) -> int:
    """``codon_start`` attribute, else the GFF3 phase plus one, else 1."""
    raw = feature.get_attribute(CODON_START)
    if raw is not None:
        try:
            return int(raw)
        except ValueError:
            raise QualifierError(f"Invalid codon_start: {raw}") from None
    return _CODON_START_BY_PHASE.get(feature.phase, 1)


def compare_translations(expected: str, conceptual: str) -> TranslationComparison:
    """
    Compare a submitted ``/translation`` with the conceptual translation.

    ``X`` in ``expected`` is tolerated wherever it differs from the
    conceptual residue, including trailing ``X`` beyond its end; each such
    position counts as an X mismatch and the translations only match when
    there are none.

    >>> compare_translations("MKX", "MK")
    TranslationComparison(matches=False, x_mismatch_count=1)
    """
    if len(expected) < len(conceptual):
        return TranslationComparison(False, 0)

    x_mismatches = 0
    for expected_aa, conceptual_aa in zip(expected, conceptual):
        if expected_aa != conceptual_aa:
            if expected_aa != UNKNOWN_AMINO_ACID:
                return TranslationComparison(False, 0)
            x_mismatches += 1

    for expected_aa in expected[len(conceptual) :]:
        if expected_aa != UNKNOWN_AMINO_ACID:
            return TranslationComparison(False, 0)
        x_mismatches += 1

    return TranslationComparison(x_mismatches == 0, x_mismatches)


def translate_feature(
    feature: FeatureLike,
    sequence: str | bytes | bytearray | None,
    config: TranslatorConfig | None = None,
    peptide_lookup: Callable[[str], bool] = is_peptide_feature_type,
) -> TranslationResult:
    """
    Translate ``feature`` and apply the edits implied by the applied fixes.

    The feature is only modified when the translation has no errors.  The
    trailing bases reported for deletion are left for the caller, who owns
    the feature location.

    Raises
    ------
    TranslationTableError, QualifierError
        If the feature's qualifiers cannot configure a translator.
    """
    translator = Translator.from_feature(feature, config, peptide_lookup)
    result = translator.translate(sequence)
    if result.has_errors:
        logger.warning(
            "Translation of %s feature %s rejected: %s",
            feature.type, feature.get_attribute("ID"), result.error_messages,
        )
    else:
        result.mutations.apply(feature)
    return result
