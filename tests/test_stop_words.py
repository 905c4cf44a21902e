import pytest

from conftest import TableAnalyzer
from ja_search_tokenizer.config import DictKind
from ja_search_tokenizer.errors import ConfigurationError
from ja_search_tokenizer.pos_filter import POSFilter
from ja_search_tokenizer.stop_words import (
    StopWordsFilter,
    bundled_stop_words,
    lowercase_tokens,
    parse_word_list,
)
from ja_search_tokenizer.tags import default_inflected, stop_tags_filter
from ja_search_tokenizer.tokenizer import FilterCascade, JapaneseAnalyzer, JapaneseTokenizer
from ja_search_tokenizer.types import IDEOGRAPHIC, Token

# IPA analyses of the sentences below
STORY_WORDS = {
    "人魚": ("名詞-一般-*-*", "人魚"),
    "は": ("助詞-係助詞-*-*", "は"),
    "、": ("記号-読点-*-*", "、"),
    "南": ("名詞-一般-*-*", "南"),
    "の": ("助詞-連体化-*-*", "の"),
    "方": ("名詞-非自立-一般-*", "方"),
    "海": ("名詞-一般-*-*", "海"),
    "に": ("助詞-格助詞-一般-*", "に"),
    "ばかり": ("助詞-副助詞-*-*", "ばかり"),
    "棲ん": ("動詞-自立-*-*", "棲む"),
    "で": ("助詞-接続助詞-*-*", "で"),
    "いる": ("動詞-非自立-*-*", "いる"),
    "あり": ("動詞-自立-*-*", "ある"),
    "ませ": ("助動詞-*-*-*", "ます"),
    "ん": ("助動詞-*-*-*", "ん"),
    "。": ("記号-句点-*-*", "。"),
    "これら": ("名詞-代名詞-一般-*", "これら"),
    "私": ("名詞-代名詞-一般-*", "私"),
    "猫": ("名詞-一般-*-*", "猫"),
    "関西": ("名詞-固有名詞-地域-一般", "関西"),
    "国際": ("名詞-一般-*-*", "国際"),
    "空港": ("名詞-一般-*-*", "空港"),
}


def tok(term, start, end, position):
    return Token(term=term.encode("utf-8"), start=start, end=end, position=position, type=IDEOGRAPHIC)


@pytest.fixture
def analyzer():
    filters = FilterCascade(drop=stop_tags_filter(), rewrite=POSFilter(default_inflected(DictKind.IPA)))
    return JapaneseAnalyzer(JapaneseTokenizer(TableAnalyzer(STORY_WORDS), filters), StopWordsFilter())


def test_bundled_list():
    words = bundled_stop_words()
    assert words is bundled_stop_words()
    assert {"これら".encode(), "いる".encode(), "ある".encode(), "その後".encode()} <= words
    assert "猫".encode() not in words
    assert not any(w.startswith(b"#") for w in words)


def test_parse_word_list():
    assert parse_word_list("# comment\n\n の \nこれ\n") == {"の".encode(), "これ".encode()}


def test_custom_list(tmp_path):
    p = tmp_path / "words.txt"
    p.write_text("猫\n", encoding="utf-8")
    f = StopWordsFilter.from_path(p)
    assert f.filter([tok("猫", 0, 3, 1), tok("私", 3, 6, 2)]) == [tok("私", 3, 6, 2)]


def test_missing_list(tmp_path):
    with pytest.raises(ConfigurationError, match="stop word list"):
        StopWordsFilter.from_path(tmp_path / "nope.txt")


def test_lowercase_tokens():
    toks = [tok("ABC", 0, 3, 1), tok("猫", 3, 6, 2)]
    got = lowercase_tokens(toks)
    assert got == [tok("abc", 0, 3, 1), tok("猫", 3, 6, 2)]
    # unchanged tokens are passed through as is
    assert got[1] is toks[1]


def test_compound_split(analyzer):
    assert analyzer.analyze("関西国際空港".encode("utf-8")) == [
        tok("関西", 0, 6, 1),
        tok("国際", 6, 12, 2),
        tok("空港", 12, 18, 3),
    ]


def test_stop_tags_and_stop_words(analyzer):
    assert analyzer.analyze("これらは私の猫".encode("utf-8")) == [
        tok("私", 12, 15, 3),
        tok("猫", 18, 21, 5),
    ]


def test_base_form_then_stop_words(analyzer):
    # 棲ん is indexed under its base form; the stop word list runs on rewritten terms
    assert analyzer.analyze("人魚は、南の方の海にばかり棲んでいるのではありません。".encode("utf-8")) == [
        tok("人魚", 0, 6, 1),
        tok("南", 12, 15, 4),
        tok("方", 18, 21, 6),
        tok("海", 24, 27, 8),
        tok("棲む", 39, 45, 11),
    ]


def test_analyzer_without_steps_is_the_tokenizer():
    tk = JapaneseTokenizer(TableAnalyzer(STORY_WORDS))
    an = JapaneseAnalyzer(tk, lowercase=False)
    assert an("これらは私の猫") == tk("これらは私の猫")
