"""
cds_translation
===============
Nucleotide-to-protein translation of CDS features with INSDC validation.

Typical use::

    from cds_translation import TranslatorConfig, translate_feature

    result = translate_feature(feature, bases, TranslatorConfig())
    if result.is_valid:
        protein = result.conceptual_translation
"""

from cds_translation.codon_translator import CodonTranslator
from cds_translation.config import ENABLE_ALL_FIXES, FixKind, FixOptions, TranslatorConfig
from cds_translation.errors import (
    InvalidConfigError,
    QualifierError,
    TranslationError,
    TranslationTableError,
    UntranslatableCodonError,
)
from cds_translation.feature import FeatureLike, GFF3Feature
from cds_translation.result import Codon, FeatureMutations, TranslationResult
from cds_translation.translation_tables import (
    DEFAULT_TRANSLATION_TABLE,
    TranslationTable,
    TranslationTableRegistry,
    get_translation_table,
)
from cds_translation.translator import (
    ErrorKind,
    TranslationComparison,
    Translator,
    compare_translations,
    translate_feature,
)

__version__ = "0.1.0"

__all__ = [
    "Codon",
    "CodonTranslator",
    "DEFAULT_TRANSLATION_TABLE",
    "ENABLE_ALL_FIXES",
    "ErrorKind",
    "FeatureLike",
    "FeatureMutations",
    "FixKind",
    "FixOptions",
    "GFF3Feature",
    "InvalidConfigError",
    "QualifierError",
    "TranslationComparison",
    "TranslationError",
    "TranslationResult",
    "TranslationTable",
    "TranslationTableError",
    "TranslationTableRegistry",
    "Translator",
    "TranslatorConfig",
    "UntranslatableCodonError",
    "compare_translations",
    "get_translation_table",
    "translate_feature",
]
