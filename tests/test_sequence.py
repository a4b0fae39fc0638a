import pytest

from cds_translation.sequence import as_text, invalid_bases, reverse_complement


class TestReverseComplement:
    @pytest.mark.parametrize(
        "sequence,expected",
        [
            ("ATGAAATAG", "CTATTTCAT"),
            ("atgc", "gcat"),
            ("ATgc", "gcAT"),
            ("RYKMBVDHSWN", "NWSDHBVKMRY"),
            ("uu", "aa"),
            ("", ""),
        ],
    )
    def test_str(self, sequence, expected):
        assert reverse_complement(sequence) == expected

    def test_bytes_in_bytes_out(self):
        assert reverse_complement(b"ATGaaa") == b"tttCAT"
        assert reverse_complement(bytearray(b"ATGu")) == b"aCAT"

    @pytest.mark.parametrize(
        "base,complement",
        [("a", "t"), ("c", "g"), ("r", "y"), ("k", "m"), ("b", "v"), ("d", "h"),
         ("s", "s"), ("w", "w"), ("n", "n")],
    )
    def test_iupac_pairs(self, base, complement):
        assert reverse_complement(base) == complement
        assert reverse_complement(complement) == base
        assert reverse_complement(base.upper().encode("ascii")) == complement.upper().encode("ascii")

    def test_twice_is_identity(self):
        sequence = "ATGCRYKMBVDHSWNatgcrykmbvdhswn"
        assert reverse_complement(reverse_complement(sequence)) == sequence

    def test_unknown_characters_survive(self):
        assert reverse_complement("AZ") == "ZT"


class TestBases:
    def test_as_text(self):
        assert as_text(b"ATG") == "ATG"
        assert as_text(bytearray(b"atg")) == "atg"
        assert as_text("ATG") == "ATG"

    def test_valid_sequence(self):
        assert invalid_bases("ACGTRYKMSWHBVDNacgtrykmswhbvdn") == []

    def test_invalid_characters_sorted(self):
        assert invalid_bases("ATGZx!U") == ["!", "u", "x", "z"]
