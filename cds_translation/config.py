"""
config.py
=========
Translator configuration: auto-fix toggles, relaxed mode and table defaults.

All options can be set programmatically or from a plain dict (e.g. a JSON
validation profile).  The default translation table can be overridden per
process through an environment variable.

Environment Variable
--------------------
    CDS_TRANSLATION_DEFAULT_TABLE  — NCBI table id used when a feature has no
                                     ``transl_table`` qualifier.  Defaults to 11.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

from cds_translation.errors import InvalidConfigError, TranslationTableError
from cds_translation.translation_tables import DEFAULT_TRANSLATION_TABLE, TranslationTableRegistry

# ---------------------------------------------------------------------------
# Module logger
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Environment variable overriding the default translation table.
ENV_DEFAULT_TABLE_KEY: Final[str] = "CDS_TRANSLATION_DEFAULT_TABLE"


class FixKind(str, Enum):
    """Names under which applied auto-fixes are reported."""

    DEGENERATE_START_CODON = "fixDegenerateStartCodon"
    NO_START_CODON_MAKE_5_PARTIAL = "fixNoStartCodonMake5Partial"
    CODON_START_NOT_ONE_MAKE_5_PARTIAL = "fixCodonStartNotOneMake5Partial"
    NO_STOP_CODON_MAKE_3_PARTIAL = "fixNoStopCodonMake3Partial"
    VALID_STOP_CODON_REMOVE_3_PARTIAL = "fixValidStopCodonRemove3Partial"
    NON_MULTIPLE_OF_THREE_MAKE_3_AND_5_PARTIAL = "fixNonMultipleOfThreeMake3And5Partial"
    INTERNAL_STOP_CODON_MAKE_PSEUDO = "fixInternalStopCodonMakePseudo"
    DELETE_TRAILING_BASES_AFTER_STOP_CODON = "fixDeleteTrailingBasesAfterStopCodon"


#: Fixes switched on by ``enable_all_fixes``.  The degenerate start codon and
#: trailing base deletion fixes stay off: they rewrite the translation or the
#: location rather than flags.
ENABLE_ALL_FIXES: Final[tuple[FixKind, ...]] = (
    FixKind.NO_START_CODON_MAKE_5_PARTIAL,
    FixKind.CODON_START_NOT_ONE_MAKE_5_PARTIAL,
    FixKind.NO_STOP_CODON_MAKE_3_PARTIAL,
    FixKind.VALID_STOP_CODON_REMOVE_3_PARTIAL,
    FixKind.NON_MULTIPLE_OF_THREE_MAKE_3_AND_5_PARTIAL,
    FixKind.INTERNAL_STOP_CODON_MAKE_PSEUDO,
)


# ---------------------------------------------------------------------------
# Fix options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FixOptions:
    """
    Independent auto-fix toggles; every fix is off by default.

    Attributes
    ----------
    degenerate_start_codon : bool
        Translate an ambiguous first codon as ``M`` when any expansion is a start.
    no_start_codon_make_5_partial : bool
        Mark the feature 5' partial instead of failing on a missing Met.
    codon_start_not_one_make_5_partial : bool
        Mark the feature 5' partial when ``codon_start`` is 2 or 3.
    no_stop_codon_make_3_partial : bool
        Mark the feature 3' partial instead of failing on a missing stop.
    valid_stop_codon_remove_3_partial : bool
        Clear 3' partiality when the CDS does end in a stop codon.
    non_multiple_of_three_make_3_and_5_partial : bool
        Mark both ends partial when the length is not a multiple of three.
    internal_stop_codon_make_pseudo : bool
        Mark the feature pseudo when the translation has internal stops.
    delete_trailing_bases_after_stop_codon : bool
        Accept (and report for removal) a partial codon after the stop codon.
    """

    degenerate_start_codon: bool = False
    no_start_codon_make_5_partial: bool = False
    codon_start_not_one_make_5_partial: bool = False
    no_stop_codon_make_3_partial: bool = False
    valid_stop_codon_remove_3_partial: bool = False
    non_multiple_of_three_make_3_and_5_partial: bool = False
    internal_stop_codon_make_pseudo: bool = False
    delete_trailing_bases_after_stop_codon: bool = False

    @classmethod
    def all_enabled(cls) -> FixOptions:
        """Options with every fix of :data:`ENABLE_ALL_FIXES` switched on."""
        return cls().with_fixes(*ENABLE_ALL_FIXES)

    def with_fixes(self, *fixes: FixKind) -> FixOptions:
        """Copy of these options with ``fixes`` switched on."""
        return dataclasses.replace(self, **{_FIELD_BY_KIND[fix]: True for fix in fixes})

    def is_enabled(self, fix: FixKind) -> bool:
        return getattr(self, _FIELD_BY_KIND[fix])

    def enabled(self) -> list[FixKind]:
        return [kind for kind in FixKind if self.is_enabled(kind)]

    @classmethod
    def from_dict(cls, options: dict[str, Any]) -> FixOptions:
        """
        Build options from a dict keyed by field name or by :class:`FixKind` value.

        >>> FixOptions.from_dict({"fixNoStopCodonMake3Partial": True}).no_stop_codon_make_3_partial
        True

        Raises
        ------
        InvalidConfigError
            On unknown keys or non-boolean values.
        """
        values: dict[str, bool] = {}
        for key, value in options.items():
            name = _FIELD_BY_KIND_VALUE.get(key, key)
            if name not in _FIELD_NAMES:
                raise InvalidConfigError(f"Unknown fix option: {key!r}.")
            if not isinstance(value, bool):
                raise InvalidConfigError(
                    f"Fix option {key!r} must be a boolean, got {value!r}."
                )
            values[name] = value
        return cls(**values)


_FIELD_BY_KIND: Final[dict[FixKind, str]] = {
    FixKind.DEGENERATE_START_CODON: "degenerate_start_codon",
    FixKind.NO_START_CODON_MAKE_5_PARTIAL: "no_start_codon_make_5_partial",
    FixKind.CODON_START_NOT_ONE_MAKE_5_PARTIAL: "codon_start_not_one_make_5_partial",
    FixKind.NO_STOP_CODON_MAKE_3_PARTIAL: "no_stop_codon_make_3_partial",
    FixKind.VALID_STOP_CODON_REMOVE_3_PARTIAL: "valid_stop_codon_remove_3_partial",
    FixKind.NON_MULTIPLE_OF_THREE_MAKE_3_AND_5_PARTIAL: "non_multiple_of_three_make_3_and_5_partial",
    FixKind.INTERNAL_STOP_CODON_MAKE_PSEUDO: "internal_stop_codon_make_pseudo",
    FixKind.DELETE_TRAILING_BASES_AFTER_STOP_CODON: "delete_trailing_bases_after_stop_codon",
}
_FIELD_BY_KIND_VALUE: Final[dict[str, str]] = {
    kind.value: name for kind, name in _FIELD_BY_KIND.items()
}
_FIELD_NAMES: Final[frozenset[str]] = frozenset(_FIELD_BY_KIND.values())


# ---------------------------------------------------------------------------
# Translator configuration
# ---------------------------------------------------------------------------

def default_translation_table() -> int:
    """
    Translation table used when a feature carries no ``transl_table``.

    Reads ``CDS_TRANSLATION_DEFAULT_TABLE``; falls back to table 11.

    Raises
    ------
    InvalidConfigError
        If the environment value is not an integer.
    """
    raw = os.environ.get(ENV_DEFAULT_TABLE_KEY)
    if raw is None or not raw.strip():
        return DEFAULT_TRANSLATION_TABLE
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfigError(
            f"{ENV_DEFAULT_TABLE_KEY} must be an integer table id, got {raw!r}."
        ) from None


@dataclass
class TranslatorConfig:
    """
    Options shared by every translator built for one validation run.

    Parameters
    ----------
    fix_options : FixOptions
        Auto-fix toggles.  All off by default.
    relaxed : bool
        Relaxed (``exception``) mode: several hard errors silently degrade to a
        zero-length conceptual translation instead.
    default_translation_table : int
        Table used when a feature has no ``transl_table`` qualifier.  Read from
        ``CDS_TRANSLATION_DEFAULT_TABLE`` when not given.
    """

    fix_options: FixOptions = field(default_factory=FixOptions)
    relaxed: bool = False
    default_translation_table: int = field(default_factory=default_translation_table)

    def validate(self) -> None:
        """
        Raises
        ------
        InvalidConfigError
            If the default table is not a registered genetic code.
        """
        try:
            TranslationTableRegistry.get(self.default_translation_table)
        except TranslationTableError as exc:
            raise InvalidConfigError(
                f"'default_translation_table' is invalid: {exc}"
            ) from exc

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> TranslatorConfig:
        """
        Create a validated :class:`TranslatorConfig` from a dict.

        ``fix_options`` may be a nested dict (see :meth:`FixOptions.from_dict`).

        Raises
        ------
        InvalidConfigError
            If keys are unknown or values fail validation.
        """
        config_dict = dict(config_dict)
        fixes = config_dict.pop("fix_options", None)
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise InvalidConfigError(f"Unknown configuration key(s): {unknown}.")
        if "relaxed" in config_dict and not isinstance(config_dict["relaxed"], bool):
            raise InvalidConfigError(
                f"'relaxed' must be a boolean, got {config_dict['relaxed']!r}."
            )

        if isinstance(fixes, FixOptions):
            config_dict["fix_options"] = fixes
        elif fixes is not None:
            config_dict["fix_options"] = FixOptions.from_dict(fixes)

        config = cls(**config_dict)
        config.validate()
        logger.debug(
            "Translator config: table=%d, relaxed=%s, fixes=%s.",
            config.default_translation_table,
            config.relaxed,
            [kind.value for kind in config.fix_options.enabled()],
        )
        return config
