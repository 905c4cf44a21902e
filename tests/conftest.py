from typing import Dict, List, Optional, Tuple

import pytest

from ja_search_tokenizer.analyzer import byte_len
from ja_search_tokenizer.config import DictConfig, DictKind
from ja_search_tokenizer.types import Morpheme

# surface -> (POS levels joined by "-", base form)
IPA_WORDS: Dict[str, Tuple[str, Optional[str]]] = {
    "私": ("名詞-代名詞-一般-*", "私"),
    "は": ("助詞-係助詞-*-*", "は"),
    "鰻": ("名詞-一般-*-*", "鰻"),
    "。": ("記号-句点-*-*", "。"),
    "ねこ": ("名詞-一般-*-*", "ねこ"),
    "い": ("動詞-自立-*-*", "いる"),
    "ます": ("助動詞-*-*-*", "ます"),
    "関西": ("名詞-固有名詞-地域-一般", "関西"),
    "国際": ("名詞-一般-*-*", "国際"),
    "空港": ("名詞-一般-*-*", "空港"),
}


class TableAnalyzer:
    """
    longest match over a word table; chars outside it become single-char nouns without a base form
    """
    def __init__(self, words: Dict[str, Tuple[str, Optional[str]]] = IPA_WORDS) -> None:
        self.words = words
        self.max_len = max(len(w) for w in words)
        self.calls: List[str] = []

    def analyze(self, sentence: str) -> List[Morpheme]:
        self.calls.append(sentence)
        out: List[Morpheme] = []
        i = 0
        offset = 0
        while i < len(sentence):
            surf = sentence[i]
            pos, base = "名詞-一般-*-*", None
            for n in range(min(self.max_len, len(sentence) - i), 0, -1):
                if sentence[i:i + n] in self.words:
                    surf = sentence[i:i + n]
                    pos, base = self.words[surf]
                    break
            out.append(Morpheme(
                surface=surf,
                offset=offset,
                pos=tuple(pos.split("-")),
                index=len(out),
                base_form=base,
            ))
            i += len(surf)
            offset += byte_len(surf)
        return out


@pytest.fixture
def table_analyzer() -> TableAnalyzer:
    return TableAnalyzer()


# a tiny MeCab-format IPA dictionary: surface,left_id,right_id,cost,pos1..pos4,ctype,cform,base,reading,pron
MINI_LEXICON = """\
私,1,1,3000,名詞,代名詞,一般,*,*,*,私,ワタシ,ワタシ
は,2,2,1000,助詞,係助詞,*,*,*,*,は,ハ,ワ
鰻,1,1,3000,名詞,一般,*,*,*,*,鰻,ウナギ,ウナギ
。,3,3,100,記号,句点,*,*,*,*,。,。,。
ねこ,1,1,3000,名詞,一般,*,*,*,*,ねこ,ネコ,ネコ
い,4,4,2000,動詞,自立,*,*,一段,連用形,いる,イ,イ
ます,5,5,1000,助動詞,*,*,*,特殊・マス,基本形,ます,マス,マス
関西,1,1,2000,名詞,固有名詞,地域,一般,*,*,関西,カンサイ,カンサイ
国際,1,1,2000,名詞,一般,*,*,*,*,国際,コクサイ,コクサイ
空港,1,1,2000,名詞,一般,*,*,*,*,空港,クウコウ,クーコー
関西国際空港,1,1,3000,名詞,固有名詞,組織,*,*,*,関西国際空港,カンサイコクサイクウコウ,カンサイコクサイクーコー
"""

MINI_CHAR_DEF = """\
# NAME invoke group length
DEFAULT 0 1 0
SPACE 0 1 0
HIRAGANA 0 1 2
KATAKANA 1 1 2
KANJI 0 0 2
SYMBOL 1 1 0

0x0020 SPACE
0x3000..0x303F SYMBOL
0x3041..0x309F HIRAGANA
0x30A1..0x30FF KATAKANA
0x4E00..0x9FFF KANJI
"""

MINI_UNK_DEF = """\
DEFAULT,0,0,10000,名詞,一般,*,*,*,*,*
SPACE,0,0,10000,記号,空白,*,*,*,*,*
HIRAGANA,0,0,10000,名詞,一般,*,*,*,*,*
KATAKANA,0,0,10000,名詞,一般,*,*,*,*,*
KANJI,0,0,10000,名詞,一般,*,*,*,*,*
SYMBOL,0,0,10000,記号,一般,*,*,*,*,*
"""

MINI_IDS = ["BOS/EOS", "名詞", "助詞", "記号", "動詞", "助動詞"]


def write_mini_dictionary(cfg: DictConfig) -> None:
    enc = cfg.spec.encoding
    d = cfg.install_dir
    d.mkdir(parents=True, exist_ok=True)
    (d / "words.csv").write_text(MINI_LEXICON, encoding=enc)
    (d / "char.def").write_text(MINI_CHAR_DEF, encoding=enc)
    (d / "unk.def").write_text(MINI_UNK_DEF, encoding=enc)
    ids = "".join(f"{i} {label},*,*,*,*,*,*\n" for i, label in enumerate(MINI_IDS))
    (d / "left-id.def").write_text(ids, encoding=enc)
    (d / "right-id.def").write_text(ids, encoding=enc)
    n = len(MINI_IDS)
    # flat connection costs: the path is decided by word costs alone
    rows = "".join(f"{r} {l} 0\n" for r in range(n) for l in range(n))
    (d / "matrix.def").write_text(f"{n} {n}\n{rows}", encoding=enc)


@pytest.fixture
def ipa_dict_cfg(tmp_path) -> DictConfig:
    cfg = DictConfig(kind=DictKind.IPA, root_dir=tmp_path / "dicts", auto_download=False)
    write_mini_dictionary(cfg)
    return cfg
