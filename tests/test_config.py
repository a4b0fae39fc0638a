import pytest

from cds_translation.config import (
    ENABLE_ALL_FIXES,
    ENV_DEFAULT_TABLE_KEY,
    FixKind,
    FixOptions,
    TranslatorConfig,
    default_translation_table,
)
from cds_translation.errors import InvalidConfigError


class TestFixOptions:
    def test_all_off_by_default(self):
        assert FixOptions().enabled() == []

    def test_all_enabled_leaves_location_fixes_off(self):
        options = FixOptions.all_enabled()
        assert set(options.enabled()) == set(ENABLE_ALL_FIXES)
        assert len(ENABLE_ALL_FIXES) == 6
        assert not options.degenerate_start_codon
        assert not options.delete_trailing_bases_after_stop_codon

    def test_with_fixes_keeps_existing(self):
        options = FixOptions(degenerate_start_codon=True).with_fixes(FixKind.NO_STOP_CODON_MAKE_3_PARTIAL)
        assert options.degenerate_start_codon
        assert options.is_enabled(FixKind.NO_STOP_CODON_MAKE_3_PARTIAL)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            FixOptions().degenerate_start_codon = True

    @pytest.mark.parametrize(
        "options",
        [
            {"no_stop_codon_make_3_partial": True},
            {"fixNoStopCodonMake3Partial": True},
        ],
    )
    def test_from_dict_accepts_both_names(self, options):
        assert FixOptions.from_dict(options).enabled() == [FixKind.NO_STOP_CODON_MAKE_3_PARTIAL]

    @pytest.mark.parametrize(
        "options",
        [{"fixEverything": True}, {"no_stop_codon_make_3_partial": "yes"}],
    )
    def test_from_dict_rejects(self, options):
        with pytest.raises(InvalidConfigError):
            FixOptions.from_dict(options)


class TestDefaultTable:
    def test_default(self):
        assert default_translation_table() == 11

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv(ENV_DEFAULT_TABLE_KEY, "4")
        assert default_translation_table() == 4
        assert TranslatorConfig().default_translation_table == 4

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv(ENV_DEFAULT_TABLE_KEY, "bacterial")
        with pytest.raises(InvalidConfigError):
            default_translation_table()


class TestTranslatorConfig:
    def test_defaults(self):
        config = TranslatorConfig()
        assert config.fix_options == FixOptions()
        assert not config.relaxed
        assert config.default_translation_table == 11

    def test_from_dict(self):
        config = TranslatorConfig.from_dict(
            {
                "relaxed": True,
                "default_translation_table": 1,
                "fix_options": {"fixInternalStopCodonMakePseudo": True},
            }
        )
        assert config.relaxed
        assert config.default_translation_table == 1
        assert config.fix_options.internal_stop_codon_make_pseudo

    def test_from_dict_accepts_fix_options_instance(self):
        options = FixOptions.all_enabled()
        assert TranslatorConfig.from_dict({"fix_options": options}).fix_options is options

    @pytest.mark.parametrize(
        "config_dict",
        [
            {"strict": True},
            {"relaxed": "yes"},
            {"default_translation_table": 999},
            {"fix_options": {"unknown_fix": True}},
        ],
    )
    def test_from_dict_rejects(self, config_dict):
        with pytest.raises(InvalidConfigError):
            TranslatorConfig.from_dict(config_dict)
