from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

IDEOGRAPHIC = "ideographic"


@dataclass(frozen=True)
class WordEntry:
    surface: str
    left_id: int
    right_id: int
    word_cost: int
    features: Tuple[str, ...] = ()
    source: str = "DICT"


@dataclass(frozen=True)
class LatticeNode:
    start: int
    end: int
    entry: WordEntry
    # search mode penalty for long nodes
    penalty: int = 0


@dataclass(frozen=True)
class Morpheme:
    surface: str
    # byte offset within the sentence
    offset: int
    pos: Tuple[str, ...]
    index: int
    base_form: Optional[str] = None
    features: Tuple[str, ...] = ()
    source: str = "DICT"


@dataclass(frozen=True)
class Token:
    term: bytes
    start: int
    end: int
    position: int
    type: str = IDEOGRAPHIC
