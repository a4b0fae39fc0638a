import json

import pytest

from cds_translation.config import FixKind
from cds_translation.result import Codon, FeatureMutations, TranslationResult


@pytest.fixture
def result():
    return TranslationResult(
        codons=(
            Codon("ATG", 1, "M", False),
            Codon("AAA", 4, "K", False),
            Codon("TAG", 7, "*", False),
        ),
        trailing_bases="AA",
        conceptual_translation_codons=2,
        fixes=(FixKind.DELETE_TRAILING_BASES_AFTER_STOP_CODON,),
        mutations=FeatureMutations(trailing_bases_to_delete="AA"),
    )


class TestTranslationResult:
    def test_derived_sequences(self, result):
        assert result.sequence == "ATGAAATAGAA"
        assert result.translation == "MK*"
        assert result.conceptual_translation == "MK"

    def test_validity(self, result):
        assert result.is_valid
        assert not result.has_errors
        assert result.error_messages == ""

        failed = TranslationResult(errors=("No stop codon at the 3' end",))
        assert failed.has_errors
        assert not failed.is_valid
        assert failed.error_messages == "No stop codon at the 3' end"

    def test_empty_result(self):
        empty = TranslationResult()
        assert empty.sequence == ""
        assert empty.translation == ""
        assert empty.conceptual_translation == ""
        assert empty.mutations.is_empty

    def test_to_fasta(self, result):
        assert result.to_fasta("cds1") == ">cds1\nMK\n"
        long = TranslationResult(
            codons=tuple(Codon("AAA", 1 + 3 * i, "K", False) for i in range(5)),
            conceptual_translation_codons=5,
        )
        assert long.to_fasta("cds2", line_width=2) == ">cds2\nKK\nKK\nK\n"
        assert long.to_fasta("cds2", line_width=0) == ">cds2\nKKKKK\n"

    def test_to_json(self, result):
        data = json.loads(result.to_json())
        assert data["conceptual_translation"] == "MK"
        assert data["trailing_bases"] == "AA"
        assert data["fixes"] == ["fixDeleteTrailingBasesAfterStopCodon"]
        assert data["codons"][2] == {"codon": "TAG", "position": 7, "amino_acid": "*", "is_exception": False}
        assert data["mutations"]["trailing_bases_to_delete"] == "AA"
        assert data["is_valid"] is True

    def test_frozen(self, result):
        with pytest.raises(AttributeError):
            result.trailing_bases = ""


class TestFeatureMutations:
    def test_apply_partiality(self, make_feature):
        feature = make_feature(partial="end")
        FeatureMutations(five_prime_partial=True, three_prime_partial=False).apply(feature)
        assert feature.is_five_prime_partial()
        assert not feature.is_three_prime_partial()

    def test_apply_pseudo(self, make_feature):
        feature = make_feature(translation="MK")
        FeatureMutations(pseudo=True, remove_attributes=("translation",)).apply(feature)
        assert feature.get_attribute_list("pseudo") == ["true"]
        assert not feature.has_attribute("translation")

    def test_empty_mutations_leave_feature_alone(self, make_feature):
        feature = make_feature(partial="start")
        before = {name: list(values) for name, values in feature.attributes.items()}
        FeatureMutations().apply(feature)
        assert feature.attributes == before
