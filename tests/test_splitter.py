import pytest

from ja_search_tokenizer.config import SplitterConfig
from ja_search_tokenizer.errors import ConfigurationError
from ja_search_tokenizer.splitter import DEFAULT_SPLITTER, SentenceSplitter


@pytest.mark.parametrize("text,want", [
    ("", []),
    ("私は鰻", ["私は鰻"]),
    ("私は鰻。ねこはいます。", ["私は鰻。", "ねこはいます。"]),
    ("私は鰻。は。ねこはいます。", ["私は鰻。", "は。", "ねこはいます。"]),
    ("本当？はい！", ["本当？", "はい！"]),
    ("「行く。」と言った", ["「行く。」", "と言った"]),
    ("終わり。』）次", ["終わり。』）", "次"]),
    ("。。", ["。", "。"]),
    ("a\n\nb", ["a\n\n", "b"]),
    ("a\nb", ["a\nb"]),
    ("  前後の空白。  ", ["  前後の空白。", "  "]),
])
def test_split(text, want):
    assert DEFAULT_SPLITTER.split(text) == want


def test_double_line_feed_can_be_disabled():
    sp = SentenceSplitter(SplitterConfig(double_line_feed_split=False))
    assert sp.split("a\n\nb") == ["a\n\nb"]


def test_max_rune_len_forces_a_split():
    sp = SentenceSplitter(SplitterConfig(max_rune_len=3))
    assert sp.split("あいうえお") == ["あいう", "えお"]
    # followers are still absorbed after a forced split
    assert sp.split("あいう」え") == ["あいう」", "え"]


def test_concatenation_reproduces_input():
    texts = [
        "人魚は、南の方の海にばかり棲んでいるのではありません。",
        "音楽の鳴っている間はとにかく踊り続けるんだ。おいらの言っていることはわかるかい？",
        "line one\n\nline two.\r\n\r\n「quote」!?",
        "あ" * 300,
        "。」」」！！",
    ]
    sp = SentenceSplitter(SplitterConfig(max_rune_len=16))
    for text in texts:
        parts = sp.split(text)
        assert "".join(parts) == text
        assert all(parts)


def test_iter_sentences_is_restartable():
    gen_text = "一。二。三"
    first = list(DEFAULT_SPLITTER.iter_sentences(gen_text))
    second = list(DEFAULT_SPLITTER.iter_sentences(gen_text))
    assert first == second == ["一。", "二。", "三"]


def test_bad_max_rune_len():
    with pytest.raises(ConfigurationError):
        SplitterConfig(max_rune_len=0)
