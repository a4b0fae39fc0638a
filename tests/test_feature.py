import pytest

from cds_translation.feature import PARTIAL, FeatureLike, GFF3Feature, partiality_tokens


@pytest.mark.parametrize(
    "five,three,expected",
    [(False, False, []), (True, False, ["start"]), (False, True, ["end"]), (True, True, ["start", "end"])],
)
def test_partiality_tokens(five, three, expected):
    assert partiality_tokens(five, three) == expected


class TestGFF3Feature:
    def test_is_feature_like(self, make_feature):
        assert isinstance(make_feature(), FeatureLike)

    def test_attributes(self, make_feature):
        feature = make_feature(transl_except=["(pos:4..6,aa:Sec)", "(pos:7..9,aa:Trp)"])
        assert feature.id == "cds1"
        assert feature.get_attribute("transl_except") == "(pos:4..6,aa:Sec)"
        assert len(feature.get_attribute_list("transl_except")) == 2
        assert feature.get_attribute("missing") is None
        assert feature.get_attribute_list("missing") == []

        feature.remove_attribute("transl_except")
        assert not feature.has_attribute("transl_except")

    def test_length(self):
        assert GFF3Feature("seq1", "source", "CDS", 10, 18).length == 9

    def test_partiality_round_trip(self, make_feature):
        feature = make_feature()
        assert not feature.is_five_prime_partial()

        feature.set_five_prime_partial()
        assert feature.attributes[PARTIAL] == ["start"]

        feature.set_three_prime_partial()
        assert feature.attributes[PARTIAL] == ["start", "end"]
        assert feature.is_five_prime_partial() and feature.is_three_prime_partial()

        feature.set_five_prime_partial(False)
        assert feature.attributes[PARTIAL] == ["end"]

        feature.set_three_prime_partial(False)
        assert not feature.has_attribute(PARTIAL)

    def test_partiality_from_attribute(self, make_feature):
        feature = make_feature(partial=["start", "end"])
        assert feature.is_five_prime_partial()
        assert feature.is_three_prime_partial()
