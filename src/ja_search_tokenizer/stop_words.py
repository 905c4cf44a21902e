from __future__ import annotations
import dataclasses
import logging
import threading
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional
from .errors import ConfigurationError
from .types import Token

log = logging.getLogger(__name__)

STOP_WORDS_NAME = "stop_words_ja"

_stop_words: Optional[FrozenSet[bytes]] = None
_stop_words_lock = threading.Lock()


def parse_word_list(text: str) -> FrozenSet[bytes]:
    words = set()
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        words.add(line.encode("utf-8"))
    return frozenset(words)


def load_word_list(path: Path) -> FrozenSet[bytes]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read stop word list {path}: {e}") from e
    return parse_word_list(text)


def bundled_stop_words() -> FrozenSet[bytes]:
    """
    the Lucene kuromoji stop word list shipped in assets/, read once per process
    """
    global _stop_words
    with _stop_words_lock:
        if _stop_words is None:
            text = resources.files(__package__).joinpath("assets").joinpath("stop_words.txt").read_text(encoding="utf-8")
            _stop_words = parse_word_list(text)
            log.debug("loaded %d stop words", len(_stop_words))
        return _stop_words


@dataclass(frozen=True)
class StopWordsFilter:
    """
    drops tokens whose term is in the word list; kept tokens keep their positions
    """
    words: FrozenSet[bytes] = dataclasses.field(default_factory=bundled_stop_words)

    @classmethod
    def from_path(cls, path: Optional[Path] = None) -> "StopWordsFilter":
        return cls(load_word_list(path)) if path is not None else cls()

    def filter(self, tokens: Iterable[Token]) -> List[Token]:
        return [t for t in tokens if t.term not in self.words]

    __call__ = filter


def lowercase_tokens(tokens: Iterable[Token]) -> List[Token]:
    out: List[Token] = []
    for t in tokens:
        term = t.term.decode("utf-8", "surrogateescape").lower().encode("utf-8", "surrogateescape")
        out.append(t if term == t.term else dataclasses.replace(t, term=term))
    return out
