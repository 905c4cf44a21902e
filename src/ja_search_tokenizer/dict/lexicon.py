from __future__ import annotations
import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple
from ..errors import ConfigurationError
from ..types import WordEntry

log = logging.getLogger(__name__)


class TrieNode:
    __slots__ = ("children", "entries")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = {}
        self.entries: List[WordEntry] = []


class Trie:
    def __init__(self) -> None:
        self.root = TrieNode()

    def insert(self, key: str, entry: WordEntry) -> None:
        node = self.root
        for ch in key:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = TrieNode()
                node.children[ch] = nxt
            node = nxt
        node.entries.append(entry)

    def common_prefix_search(self, text: str, start: int, max_len: int) -> Iterable[Tuple[int, WordEntry]]:
        node = self.root
        end = start
        for _ in range(max_len):
            if end >= len(text):
                break
            node = node.children.get(text[end])
            if node is None:
                break
            end += 1
            for e in node.entries:
                yield end, e


def parse_entry_row(row: Sequence[str], where: str) -> WordEntry:
    # mecab csv: surface,left_id,right_id,cost,feature...
    if len(row) < 5:
        raise ConfigurationError(f"{where}: expected surface,left_id,right_id,cost,features..., got {len(row)} columns")
    try:
        left_id, right_id, cost = int(row[1]), int(row[2]), int(row[3])
    except ValueError:
        raise ConfigurationError(f"{where}: non-integer id/cost in {list(row[1:4])}") from None
    return WordEntry(row[0], left_id, right_id, cost, tuple(row[4:]), "DICT")


class Lexicon:
    """
    mecab csv lexicon file(s) in a char trie; read once at construction
    """
    def __init__(self, csv_paths: Sequence[Path], encoding: str = "utf-8") -> None:
        if not csv_paths:
            raise ConfigurationError("no lexicon csv files given")
        self.csv_paths = list(csv_paths)
        self.encoding = encoding
        self.trie = Trie()
        self.size = 0
        for path in self.csv_paths:
            self._load(path)
        log.debug("lexicon: %d entries from %d file(s)", self.size, len(self.csv_paths))

    def _load(self, path: Path) -> None:
        with path.open("r", encoding=self.encoding, newline="") as f:
            for line_no, row in enumerate(csv.reader(f), start=1):
                if not row or not row[0]:
                    continue
                entry = parse_entry_row(row, f"{path.name}:{line_no}")
                self.trie.insert(entry.surface, entry)
                self.size += 1

    def lookup(self, text: str, start: int, max_len: int) -> List[Tuple[int, WordEntry]]:
        """
        return list of (end_index, WordEntry) candidates starting at `start`
        """
        return list(self.trie.common_prefix_search(text, start, max_len))
