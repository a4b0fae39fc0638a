import pytest

from cds_translation.errors import QualifierError
from cds_translation.qualifiers import (
    CodonExcept,
    TranslExcept,
    amino_acid_letter,
    parse_codon_qualifier,
    parse_transl_except,
)


class TestAminoAcidLetter:
    @pytest.mark.parametrize(
        "name,letter",
        [
            ("Trp", "W"),
            ("trp", "W"),
            ("MET", "M"),
            ("Sec", "U"),
            ("Pyl", "O"),
            ("TERM", "*"),
            ("Ter", "*"),
            ("OTHER", "X"),
            ("Asx", "B"),
        ],
    )
    def test_known_names(self, name, letter):
        assert amino_acid_letter(name) == letter

    def test_unknown_name_raises(self):
        with pytest.raises(QualifierError, match="Unknown amino acid: Unknown"):
            amino_acid_letter("Unknown")


class TestTranslExcept:
    def test_range(self):
        assert parse_transl_except("(pos:213..215,aa:Trp)") == TranslExcept(213, 215, "Trp", "W")

    def test_single_position(self):
        parsed = parse_transl_except("(pos:1,aa:Met)")
        assert parsed.begin == parsed.end == 1
        assert parsed.amino_acid == "M"

    @pytest.mark.parametrize(
        "value",
        ["( pos : 4..6 , aa : Sec )", "(POS:4..6,AA:Sec)", "(pos:4 .. 6,aa:Sec)"],
    )
    def test_flexible_format(self, value):
        parsed = parse_transl_except(value)
        assert (parsed.begin, parsed.end, parsed.amino_acid) == (4, 6, "U")

    def test_terminal_stop(self):
        assert parse_transl_except("(pos:1020,aa:TERM)").amino_acid == "*"

    @pytest.mark.parametrize(
        "value,message",
        [
            (None, "transl_except value cannot be null or empty"),
            ("  ", "transl_except value cannot be null or empty"),
            ("invalid_format", "Invalid transl_except format: invalid_format"),
            ("(pos:abc,aa:Trp)", "Invalid position in transl_except: abc"),
            ("(pos:4..6,aa:Unknown)", "Unknown amino acid: Unknown"),
        ],
    )
    def test_malformed(self, value, message):
        with pytest.raises(QualifierError) as excinfo:
            parse_transl_except(value)
        assert str(excinfo.value) == message


class TestCodonQualifier:
    @pytest.mark.parametrize(
        "value",
        ['(seq:"tga",aa:Trp)', "(seq:tga,aa:Trp)", '(seq:"TGA",aa:trp)', '( seq : "tga" , aa : Trp )'],
    )
    def test_parse(self, value):
        assert parse_codon_qualifier(value) == CodonExcept("tga", "W")

    @pytest.mark.parametrize(
        "value,message",
        [
            ("", "codon value cannot be null or empty"),
            ("invalid_format", "Invalid codon format: invalid_format"),
            ('(seq:"tgaa",aa:Trp)', "Codon must be exactly 3 bases: tgaa"),
            ('(seq:"tga",aa:Unknown)', "Unknown amino acid: Unknown"),
        ],
    )
    def test_malformed(self, value, message):
        with pytest.raises(QualifierError) as excinfo:
            parse_codon_qualifier(value)
        assert str(excinfo.value) == message
