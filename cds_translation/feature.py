"""
feature.py
==========
The feature-side contract of the translator.

The translator reads its configuration from, and hands its fixes back to, any
object satisfying :class:`FeatureLike`.  :class:`GFF3Feature` is the concrete
record used by the GFF3 conversion layer and by the tests.

GFF3 partiality is carried by the ``partial`` attribute, whose values are the
tokens ``start`` (5' partial) and ``end`` (3' partial).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Protocol, runtime_checkable

# ---------------------------------------------------------------------------
# Attribute names
# ---------------------------------------------------------------------------

PARTIAL: Final[str] = "partial"
PARTIAL_START: Final[str] = "start"
PARTIAL_END: Final[str] = "end"
PSEUDO: Final[str] = "pseudo"
PSEUDOGENE: Final[str] = "pseudogene"
TRANSL_TABLE: Final[str] = "transl_table"
TRANSL_EXCEPT: Final[str] = "transl_except"
CODON: Final[str] = "codon"
CODON_START: Final[str] = "codon_start"
TRANSLATION: Final[str] = "translation"


def partiality_tokens(five_prime_partial: bool, three_prime_partial: bool) -> list[str]:
    """
    Tokens of the ``partial`` attribute for the given partiality.

    A feature partial at one end only yields a single token; an empty list
    means the attribute should be absent.
    """
    tokens: list[str] = []
    if five_prime_partial:
        tokens.append(PARTIAL_START)
    if three_prime_partial:
        tokens.append(PARTIAL_END)
    return tokens


@runtime_checkable
class FeatureLike(Protocol):
    """What the translator needs from an annotation feature."""

    @property
    def type(self) -> str: ...

    @property
    def strand(self) -> str: ...

    @property
    def phase(self) -> str: ...

    def get_attribute(self, name: str) -> str | None: ...

    def get_attribute_list(self, name: str) -> list[str]: ...

    def has_attribute(self, name: str) -> bool: ...

    def add_attribute(self, name: str, value: str) -> None: ...

    def set_attribute(self, name: str, values: list[str]) -> None: ...

    def remove_attribute(self, name: str) -> None: ...

    def is_five_prime_partial(self) -> bool: ...

    def is_three_prime_partial(self) -> bool: ...

    def set_five_prime_partial(self, partial: bool = True) -> None: ...

    def set_three_prime_partial(self, partial: bool = True) -> None: ...


@dataclass(slots=True)
class GFF3Feature:
    """
    One GFF3 feature line with multi-valued attributes.

    Attributes
    ----------
    seq_id : str
        Landmark (sequence region) the feature is located on.
    source : str
    type : str
        Feature type, e.g. ``"CDS"`` or an SO term name.
    start, end : int
        1-based inclusive coordinates.
    strand : str
        ``"+"``, ``"-"`` or ``"."``.
    phase : str
        ``"0"``, ``"1"``, ``"2"`` or ``"."``.
    attributes : dict[str, list[str]]
        Attribute name → values, in insertion order.
    """

    seq_id: str
    source: str
    type: str
    start: int
    end: int
    strand: str = "+"
    phase: str = "."
    score: str = "."
    attributes: dict[str, list[str]] = field(default_factory=dict)

    @property
    def id(self) -> str | None:
        return self.get_attribute("ID")

    @property
    def length(self) -> int:
        return max(self.end - self.start + 1, 0)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def get_attribute(self, name: str) -> str | None:
        """First value of ``name``, or ``None`` when absent."""
        values = self.attributes.get(name)
        return values[0] if values else None

    def get_attribute_list(self, name: str) -> list[str]:
        return list(self.attributes.get(name, []))

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def add_attribute(self, name: str, value: str) -> None:
        self.attributes.setdefault(name, []).append(value)

    def set_attribute(self, name: str, values: list[str]) -> None:
        self.attributes[name] = list(values)

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    # ------------------------------------------------------------------
    # Partiality
    # ------------------------------------------------------------------

    def is_five_prime_partial(self) -> bool:
        return PARTIAL_START in self.attributes.get(PARTIAL, [])

    def is_three_prime_partial(self) -> bool:
        return PARTIAL_END in self.attributes.get(PARTIAL, [])

    def _set_partiality(self, five_prime_partial: bool, three_prime_partial: bool) -> None:
        tokens = partiality_tokens(five_prime_partial, three_prime_partial)
        if tokens:
            self.attributes[PARTIAL] = tokens
        else:
            self.remove_attribute(PARTIAL)

    def set_five_prime_partial(self, partial: bool = True) -> None:
        self._set_partiality(partial, self.is_three_prime_partial())

    def set_three_prime_partial(self, partial: bool = True) -> None:
        self._set_partiality(self.is_five_prime_partial(), partial)

