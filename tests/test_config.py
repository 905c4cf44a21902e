import pytest

from ja_search_tokenizer.config import AnalysisMode, DictConfig, DictKind, TokenizerConfig
from ja_search_tokenizer.errors import ConfigurationError
from ja_search_tokenizer.normalize import UnicodeNormalizeCharFilter


def test_from_mapping():
    cfg = TokenizerConfig.from_mapping({"type": "ja", "dict": "uni", "base_form": True, "stop_tags": True})
    assert cfg.dictionary is DictKind.UNI
    assert cfg.base_form and cfg.stop_tags
    assert cfg.mode is AnalysisMode.SEARCH


def test_from_mapping_defaults_filters_off():
    cfg = TokenizerConfig.from_mapping({"dict": "IPA"})
    assert cfg.dictionary is DictKind.IPA
    assert not cfg.base_form and not cfg.stop_tags


@pytest.mark.parametrize("mapping,msg", [
    ({}, "requires dict"),
    ({"dict": "neologd"}, "unsupported dictionary"),
    ({"dict": "ipa", "stop_tags": "yes"}, "stop_tags must be a bool"),
    ({"dict": "ipa", "base_form": 1}, "base_form must be a bool"),
    ({"dict": "ipa", "stoptags": True}, "unknown tokenizer options: stoptags"),
])
def test_from_mapping_errors(mapping, msg):
    with pytest.raises(ConfigurationError, match=msg):
        TokenizerConfig.from_mapping(mapping)


def test_string_fields_are_coerced():
    cfg = TokenizerConfig(dictionary="uni", mode="normal", base_form_tags=["動詞"])
    assert cfg.dictionary is DictKind.UNI
    assert cfg.mode is AnalysisMode.NORMAL
    assert cfg.base_form_tags == ("動詞",)
    # frozen + hashable, so it can key a cache
    assert hash(cfg) == hash(TokenizerConfig(dictionary="uni", mode="normal", base_form_tags=("動詞",)))


def test_bad_mode():
    with pytest.raises(ConfigurationError):
        TokenizerConfig(mode="fast")


def test_dict_config_paths(tmp_path):
    ipa = DictConfig(kind=DictKind.IPA, root_dir=tmp_path)
    uni = DictConfig(kind=DictKind.UNI, root_dir=tmp_path, version="9.9")
    assert ipa.install_dir == tmp_path / "mecab-ipadic-2.7.0-20070801"
    assert uni.install_dir == tmp_path / "unidic-mecab-9.9"
    assert uni.matrix_def == uni.install_dir / "matrix.def"
    assert uni.spec.url(uni.resolved_version).endswith("/9.9.tar.gz")


@pytest.mark.parametrize("form,text,want", [
    ("nfkc", "ｱｲｳ１２３", "アイウ123"),
    ("NFKC", "㍿", "株式会社"),
    ("nfc", "\u304b\u3099", "が"),
    ("nfd", "が", "\u304b\u3099"),
])
def test_normalize(form, text, want):
    f = UnicodeNormalizeCharFilter(form)
    assert f.filter(text.encode("utf-8")) == want.encode("utf-8")


def test_normalize_unknown_form():
    with pytest.raises(ConfigurationError, match="no form named nfx"):
        UnicodeNormalizeCharFilter("nfx")
