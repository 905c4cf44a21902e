from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List
from .config import SplitterConfig


@dataclass(frozen=True)
class SentenceSplitter:
    """
    split text into sentences without dropping or reordering anything:
    "".join(split(text)) == text for every input

    a sentence closes after a delimiter (plus any closing quotes/brackets right
    behind it), after max_rune_len runes, or after a double line feed.
    nothing is trimmed, so every sentence holds at least one rune and a
    delimiter at sentence start is a sentence of its own ("。。" -> "。", "。")
    """
    cfg: SplitterConfig = field(default_factory=SplitterConfig)

    def iter_sentences(self, text: str) -> Iterator[str]:
        delims = self.cfg.delimiters
        followers = self.cfg.followers
        n = len(text)
        start = 0
        i = 0
        runes = 0
        while i < n:
            ch = text[i]
            i += 1
            runes += 1
            if ch in delims or runes >= self.cfg.max_rune_len:
                while i < n and text[i] in followers:
                    i += 1
                yield text[start:i]
                start, runes = i, 0
                continue
            if self.cfg.double_line_feed_split and ch == "\n" and i < n and text[i] == "\n":
                i += 1
                yield text[start:i]
                start, runes = i, 0
        if start < n:
            # unterminated remainder
            yield text[start:]

    def split(self, text: str) -> List[str]:
        return list(self.iter_sentences(text))


DEFAULT_SPLITTER = SentenceSplitter()
