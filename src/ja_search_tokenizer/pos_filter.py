from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union
from .errors import ConfigurationError
from .types import Morpheme

POS_HIERARCHY = 4
WILDCARD = "*"


@dataclass(frozen=True)
class POSPattern:
    levels: Tuple[str, str, str, str]

    @classmethod
    def from_levels(cls, levels: Sequence[str]) -> "POSPattern":
        if not 1 <= len(levels) <= POS_HIERARCHY:
            raise ConfigurationError(f"POS pattern needs 1-{POS_HIERARCHY} levels, got {len(levels)}: {list(levels)}")
        if any(not lv for lv in levels):
            raise ConfigurationError(f"POS pattern has an empty level: {list(levels)}")
        padded = tuple(levels) + (WILDCARD,) * (POS_HIERARCHY - len(levels))
        return cls(padded)  # type: ignore[arg-type]

    @classmethod
    def parse(cls, text: str) -> "POSPattern":
        return cls.from_levels(text.strip().split("-"))

    def matches(self, pos: Sequence[str]) -> bool:
        # no padding on the morpheme side: short hierarchies never match
        if len(pos) != POS_HIERARCHY:
            return False
        for want, got in zip(self.levels, pos):
            if want != WILDCARD and want != got:
                return False
        return True

    def __str__(self) -> str:
        return "-".join(self.levels)


PatternLike = Union[POSPattern, str, Sequence[str]]


def _coerce(p: PatternLike) -> POSPattern:
    if isinstance(p, POSPattern):
        return p
    if isinstance(p, str):
        return POSPattern.parse(p)
    return POSPattern.from_levels(p)


class POSFilter:
    """
    matches a morpheme's 4-level POS against a fixed pattern set.
    the same filter serves as the stop-tag (drop) and base-form (rewrite) filter
    """
    def __init__(self, patterns: Iterable[PatternLike]) -> None:
        # dedupe, keep first-seen order so repr/logging is stable
        self.patterns: Tuple[POSPattern, ...] = tuple(dict.fromkeys(_coerce(p) for p in patterns))

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        return f"POSFilter({[str(p) for p in self.patterns]})"

    def match(self, pos: Sequence[str]) -> bool:
        return any(p.matches(pos) for p in self.patterns)

    def reject(self, morphemes: Sequence[Morpheme]) -> List[Morpheme]:
        """
        the morphemes that do not match; input is left untouched
        """
        return [m for m in morphemes if not self.match(m.pos)]


def parse_pattern_table(text: str, source: str = "<string>") -> Tuple[POSPattern, ...]:
    """
    newline-delimited POS patterns; blank lines and '#' comments are skipped
    """
    out: List[POSPattern] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        try:
            out.append(POSPattern.parse(s))
        except ConfigurationError as e:
            raise ConfigurationError(f"{source}:{line_no}: {e}") from None
    return tuple(out)


def load_pattern_table(path: Path, encoding: str = "utf-8") -> Tuple[POSPattern, ...]:
    try:
        text = path.read_text(encoding=encoding)
    except OSError as e:
        raise ConfigurationError(f"cannot read POS pattern table {path}: {e}") from e
    return parse_pattern_table(text, source=str(path))
