from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List
from .config import AnalysisMode
from .types import LatticeNode
from .dict.lexicon import Lexicon
from .dict.charclasses import UnkLexicon

# Han script, incl. 々 and 〇
_KANJI_ONLY = re.compile(r"[\u3005\u3007\u3400-\u4DBF\u4E00-\u9FFF\uF900-\uFAFF\U00020000-\U0002FA1F]+")

SEARCH_KANJI_LENGTH = 2
SEARCH_KANJI_PENALTY = 3000
SEARCH_OTHER_LENGTH = 7
SEARCH_OTHER_PENALTY = 1700


def search_penalty(surface: str) -> int:
    n = len(surface)
    if n > SEARCH_KANJI_LENGTH and _KANJI_ONLY.fullmatch(surface):
        return (n - SEARCH_KANJI_LENGTH) * SEARCH_KANJI_PENALTY
    if n > SEARCH_OTHER_LENGTH:
        return (n - SEARCH_OTHER_LENGTH) * SEARCH_OTHER_PENALTY
    return 0


@dataclass
class Lattice:
    text: str
    # nodes_start[i] = list of nodes that begin at i
    nodes_start: List[List[LatticeNode]]

    @classmethod
    def build(
        cls,
        text: str,
        lexicon: Lexicon,
        unk_lex: UnkLexicon,
        max_word_len: int,
        mode: AnalysisMode = AnalysisMode.NORMAL,
    ) -> "Lattice":
        n = len(text)
        nodes_start: List[List[LatticeNode]] = [[] for _ in range(n + 1)]
        search = mode is AnalysisMode.SEARCH
        for i in range(n):
            cands = lexicon.lookup(text, i, max_word_len)
            # unknown words only where the lexicon is silent, or the char class always invokes them
            cands += unk_lex.unknown_candidates(text, i, max_word_len, has_dict_match=bool(cands))
            for end, entry in cands:
                penalty = search_penalty(entry.surface) if search else 0
                nodes_start[i].append(LatticeNode(i, end, entry, penalty))
        return cls(text=text, nodes_start=nodes_start)

    def candidates_from(self, start: int) -> List[LatticeNode]:
        if start < 0 or start >= len(self.nodes_start):
            return []
        return self.nodes_start[start]
