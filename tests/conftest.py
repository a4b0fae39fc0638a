import pytest

from cds_translation.config import ENV_DEFAULT_TABLE_KEY
from cds_translation.feature import GFF3Feature


@pytest.fixture(autouse=True)
def _default_table_env(monkeypatch):
    monkeypatch.delenv(ENV_DEFAULT_TABLE_KEY, raising=False)


@pytest.fixture
def make_feature():
    """Factory for CDS features; attribute values may be a string or a list."""

    def _make(feature_type="CDS", strand="+", phase="0", **attributes):
        feature = GFF3Feature("seq1", "source", feature_type, 1, 100, strand=strand, phase=phase)
        feature.add_attribute("ID", "cds1")
        for name, values in attributes.items():
            for value in [values] if isinstance(values, str) else values:
                feature.add_attribute(name, value)
        return feature

    return _make
