from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union
from .analyzer import DictionaryAnalyzer, MorphAnalyzer, byte_len
from .config import DictConfig, TokenizerConfig
from .dict.registry import load_dictionary
from .errors import AnalysisFailure, ConfigurationError
from .pos_filter import POSFilter
from .splitter import DEFAULT_SPLITTER, SentenceSplitter
from .stop_words import StopWordsFilter, lowercase_tokens
from .tags import base_form_filter, stop_tags_filter
from .types import IDEOGRAPHIC, Morpheme, Token

log = logging.getLogger(__name__)


class FilterKind(enum.Enum):
    NONE = "none"
    DROP = "drop"
    REWRITE = "rewrite"
    BOTH = "both"


@dataclass(frozen=True)
class FilterCascade:
    """
    the two optional POS filter slots: drop (stop tags) runs first, then rewrite (base form)
    """
    drop: Optional[POSFilter] = None
    rewrite: Optional[POSFilter] = None

    @property
    def kind(self) -> FilterKind:
        if self.drop is not None and self.rewrite is not None:
            return FilterKind.BOTH
        if self.drop is not None:
            return FilterKind.DROP
        if self.rewrite is not None:
            return FilterKind.REWRITE
        return FilterKind.NONE

    @classmethod
    def from_config(cls, cfg: TokenizerConfig) -> "FilterCascade":
        return cls(
            drop=stop_tags_filter(cfg.stop_tags_path) if cfg.stop_tags else None,
            rewrite=base_form_filter(cfg) if cfg.base_form else None,
        )


def _keep_all(morphemes: Sequence[Morpheme]) -> Sequence[Morpheme]:
    return morphemes


def _surface_term(m: Morpheme, data: bytes, start: int, end: int) -> bytes:
    return data[start:end]


class JapaneseTokenizer:
    """
    Sentence split -> morphological analysis -> stop tag drop -> base form rewrite,
    with sentence-local offsets and indices turned into absolute byte offsets
    and positions.

    Positions advance by the unfiltered morpheme count of each sentence, so
    dropped morphemes leave gaps instead of shifting later tokens.
    The instance holds only read-only state and can be shared across threads.
    """
    def __init__(
        self,
        analyzer: MorphAnalyzer,
        filters: FilterCascade = FilterCascade(),
        splitter: SentenceSplitter = DEFAULT_SPLITTER,
    ) -> None:
        self.analyzer = analyzer
        self.filters = filters
        self.splitter = splitter
        # pick the per-morpheme steps once instead of testing the slots in the loop
        kind = filters.kind
        self._keep = filters.drop.reject if kind in (FilterKind.DROP, FilterKind.BOTH) else _keep_all
        self._term = self._base_form_term if kind in (FilterKind.REWRITE, FilterKind.BOTH) else _surface_term
        log.debug("tokenizer ready: filters=%s", kind.value)

    @classmethod
    def from_config(cls, cfg: TokenizerConfig, dict_cfg: Optional[DictConfig] = None) -> "JapaneseTokenizer":
        if dict_cfg is None:
            dict_cfg = DictConfig(kind=cfg.dictionary)
        elif dict_cfg.kind != cfg.dictionary:
            raise ConfigurationError(
                f"dictionary mismatch: tokenizer wants {cfg.dictionary.value}, dict config is {dict_cfg.kind.value}"
            )
        analyzer = DictionaryAnalyzer(load_dictionary(dict_cfg), cfg.mode, cfg.max_word_len)
        return cls(analyzer, FilterCascade.from_config(cfg), SentenceSplitter(cfg.splitter))

    def _base_form_term(self, m: Morpheme, data: bytes, start: int, end: int) -> bytes:
        if m.base_form is not None and self.filters.rewrite.match(m.pos):
            return m.base_form.encode("utf-8")
        return data[start:end]

    def tokenize(self, data: Union[bytes, str]) -> List[Token]:
        if isinstance(data, str):
            data = data.encode("utf-8")
        text = data.decode("utf-8", "surrogateescape")
        base = 0
        position = 1
        stream: List[Token] = []
        for sentence in self.splitter.iter_sentences(text):
            try:
                morphemes = self.analyzer.analyze(sentence)
            except AnalysisFailure:
                raise
            except Exception as e:
                raise AnalysisFailure(f"analyzer failed on sentence at byte {base}: {e}") from e
            total = len(morphemes)
            for m in self._keep(morphemes):
                start = base + m.offset
                end = start + byte_len(m.surface)
                if not base <= start < end <= len(data):
                    raise AnalysisFailure(
                        f"morpheme {m.surface!r} maps to bytes [{start},{end}) outside the input ({len(data)} bytes)"
                    )
                stream.append(Token(
                    term=self._term(m, data, start, end),
                    start=start,
                    end=end,
                    position=position + m.index,
                    type=IDEOGRAPHIC,
                ))
            base += byte_len(sentence)
            position += total
        return stream

    __call__ = tokenize


class JapaneseAnalyzer:
    """
    JapaneseTokenizer followed by the stop word filter and lowercasing,
    the per-field chain an index runs before storing terms.
    """
    def __init__(
        self,
        tokenizer: JapaneseTokenizer,
        stop_words: Optional[StopWordsFilter] = None,
        lowercase: bool = True,
    ) -> None:
        self.tokenizer = tokenizer
        self._steps: List[Callable[[List[Token]], List[Token]]] = []
        if stop_words is not None:
            self._steps.append(stop_words.filter)
        if lowercase:
            self._steps.append(lowercase_tokens)

    @classmethod
    def from_config(
        cls,
        cfg: TokenizerConfig,
        dict_cfg: Optional[DictConfig] = None,
        stop_words: bool = True,
        lowercase: bool = True,
    ) -> "JapaneseAnalyzer":
        return cls(
            JapaneseTokenizer.from_config(cfg, dict_cfg),
            StopWordsFilter() if stop_words else None,
            lowercase,
        )

    def analyze(self, data: Union[bytes, str]) -> List[Token]:
        tokens = self.tokenizer.tokenize(data)
        for step in self._steps:
            tokens = step(tokens)
        return tokens

    __call__ = analyze
