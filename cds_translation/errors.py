"""
errors.py
=========
Exception hierarchy shared by the CDS translation modules.

Two families are kept apart:

- configuration errors (:class:`TranslationTableError`, :class:`QualifierError`,
  :class:`InvalidConfigError`) are raised while a translator is being built and
  point at deployment or annotation defects;
- biological rule violations are never raised.  They are collected into
  ``TranslationResult.errors`` by :mod:`cds_translation.translator`.
"""

from __future__ import annotations


class TranslationError(Exception):
    """Base exception for all CDS translation failures."""


class TranslationTableError(TranslationError):
    """Raised when a genetic code table is unknown or its data is malformed."""


class QualifierError(TranslationError):
    """Raised when a ``/transl_except`` or ``/codon`` value cannot be parsed."""


class UntranslatableCodonError(TranslationError):
    """Raised when a codon has no mapping in the bound translation table."""


class InvalidConfigError(TranslationError):
    """Raised when a translator configuration contains invalid parameters."""
