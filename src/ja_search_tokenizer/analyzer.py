from __future__ import annotations
from typing import List, Protocol, Sequence, runtime_checkable
from .config import AnalysisMode
from .dict.registry import Dictionary
from .lattice import Lattice
from .pos_filter import POS_HIERARCHY
from .types import Morpheme
from .viterbi import viterbi_decode


@runtime_checkable
class MorphAnalyzer(Protocol):
    def analyze(self, sentence: str) -> Sequence[Morpheme]:
        """
        morphemes of one sentence, in order; offsets are bytes within `sentence`
        """
        ...


def byte_len(s: str) -> int:
    # surrogateescape keeps undecodable input bytes at their original width
    return len(s.encode("utf-8", "surrogateescape"))


class DictionaryAnalyzer:
    """
    lattice + viterbi over a loaded MeCab-format dictionary
    """
    def __init__(
        self,
        dictionary: Dictionary,
        mode: AnalysisMode = AnalysisMode.SEARCH,
        max_word_len: int = 32,
    ) -> None:
        self.dictionary = dictionary
        self.mode = AnalysisMode(mode)
        self.max_word_len = max_word_len

    def analyze(self, sentence: str) -> List[Morpheme]:
        d = self.dictionary
        lat = Lattice.build(sentence, d.lexicon, d.unk_lex, self.max_word_len, self.mode)
        res = viterbi_decode(lat, d.conn)

        # char index -> byte offset within the sentence
        offsets = [0]
        for ch in sentence:
            offsets.append(offsets[-1] + byte_len(ch))

        out: List[Morpheme] = []
        for index, node in enumerate(res.nodes):
            feats = node.entry.features
            out.append(Morpheme(
                surface=node.entry.surface,
                offset=offsets[node.start],
                pos=tuple(feats[:POS_HIERARCHY]),
                index=index,
                base_form=d.base_form(feats),
                features=feats,
                source=node.entry.source,
            ))
        return out
