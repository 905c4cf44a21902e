from __future__ import annotations
import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple
from ..errors import ConfigurationError
from ..types import WordEntry
from .lexicon import parse_entry_row

log = logging.getLogger(__name__)

_BMP = 0x10000


@dataclass(frozen=True)
class CharCategory:
    name: str
    # 1: always emit unknown candidates, 0: only where the lexicon has nothing
    invoke: int
    # 1: also emit the whole same-category run as one candidate
    group: int
    length: int


DEFAULT_CATEGORY = CharCategory("DEFAULT", 0, 1, 0)


class CharClassifier:
    """
    parse mecab char.def to map char to category + grouping.
    later range lines override earlier ones, as in mecab
    """
    def __init__(self, char_def_path: Path, encoding: str = "utf-8") -> None:
        self.char_def_path = char_def_path
        self.categories: Dict[str, CharCategory] = {}
        self._ranges: List[Tuple[int, int, CharCategory]] = []
        self._load(encoding)
        default = self.categories.setdefault("DEFAULT", DEFAULT_CATEGORY)
        # flat table for the BMP, range scan above it
        self._bmp: List[CharCategory] = [default] * _BMP
        for a, b, cat in self._ranges:
            if a < _BMP:
                hi = min(b, _BMP - 1)
                self._bmp[a:hi + 1] = [cat] * (hi - a + 1)

    def _load(self, encoding: str) -> None:
        raw = self.char_def_path.read_text(encoding=encoding)
        # two kinds of lines:
        # 1) CATEGORY invoke group length
        # 2) 0xXXXX[..0xYYYY] CATEGORY [COMPAT...]
        pending: List[Tuple[int, int, str]] = []
        for line_no, line in enumerate(raw.splitlines(), start=1):
            line = line.split("#", 1)[0].strip()
            if not line:
                continue
            parts = line.split()
            where = f"{self.char_def_path.name}:{line_no}"
            if parts[0].startswith("0x"):
                if len(parts) < 2:
                    raise ConfigurationError(f"{where}: range without category")
                a, _, b = parts[0].partition("..")
                try:
                    start = int(a, 16)
                    end = int(b, 16) if b else start
                except ValueError:
                    raise ConfigurationError(f"{where}: bad code point range {parts[0]!r}") from None
                pending.append((start, end, parts[1]))
                continue
            if len(parts) < 4:
                raise ConfigurationError(f"{where}: expected 'NAME invoke group length'")
            try:
                invoke, group, length = int(parts[1]), int(parts[2]), int(parts[3])
            except ValueError:
                raise ConfigurationError(f"{where}: non-integer category settings") from None
            self.categories[parts[0]] = CharCategory(parts[0], invoke, group, length)

        for start, end, name in pending:
            cat = self.categories.get(name)
            if cat is None:
                raise ConfigurationError(f"{self.char_def_path.name}: range refers to undefined category {name}")
            self._ranges.append((start, end, cat))

    def category_of(self, ch: str) -> CharCategory:
        cp = ord(ch)
        if cp < _BMP:
            return self._bmp[cp]
        for a, b, cat in reversed(self._ranges):
            if a <= cp <= b:
                return cat
        return self.categories["DEFAULT"]


class UnkLexicon:
    """
    parse mecab unk.def:
      CATEGORY,left_id,right_id,cost,feature...
    and use CharClassifier to produce UNK candidates
    """
    def __init__(self, unk_def_path: Path, classifier: CharClassifier, encoding: str = "utf-8") -> None:
        self.unk_def_path = unk_def_path
        self.classifier = classifier
        self.by_cat: Dict[str, List[WordEntry]] = {}
        with unk_def_path.open("r", encoding=encoding, newline="") as f:
            for line_no, row in enumerate(csv.reader(f), start=1):
                if not row or not row[0]:
                    continue
                entry = parse_entry_row(row, f"{unk_def_path.name}:{line_no}")
                self.by_cat.setdefault(entry.surface, []).append(entry)
        if "DEFAULT" not in self.by_cat:
            log.warning("%s has no DEFAULT entries; unmatched chars fall back to a bare UNK morpheme", unk_def_path)

    def _run_end(self, text: str, start: int, limit: int, cat: CharCategory) -> int:
        end = start + 1
        while end < limit and self.classifier.category_of(text[end]) is cat:
            end += 1
        return end

    def unknown_candidates(
        self, text: str, start: int, max_span_len: int, has_dict_match: bool,
    ) -> List[Tuple[int, WordEntry]]:
        if start >= len(text):
            return []
        cat = self.classifier.category_of(text[start])
        if has_dict_match and not cat.invoke:
            return []
        limit = min(len(text), start + max_span_len)
        run_end = self._run_end(text, start, limit, cat)

        ends = set()
        if cat.group:
            ends.add(run_end)
        for length in range(1, cat.length + 1):
            if start + length > run_end:
                break
            ends.add(start + length)
        if not ends:
            ends.add(start + 1)

        entries = self.by_cat.get(cat.name) or self.by_cat.get("DEFAULT")
        out: List[Tuple[int, WordEntry]] = []
        for end in sorted(ends):
            surf = text[start:end]
            if not entries:
                # hard fallback if unk.def is weird/missing/whatever
                out.append((end, WordEntry(surf, 0, 0, 0, ("UNK",), "UNK")))
                continue
            for e in entries:
                out.append((end, WordEntry(surf, e.left_id, e.right_id, e.word_cost, e.features, "UNK")))
        return out
