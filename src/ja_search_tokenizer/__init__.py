from .config import AnalysisMode, DictConfig, DictKind, SplitterConfig, TokenizerConfig
from .errors import AnalysisFailure, ConfigurationError, TokenizerError
from .pos_filter import POSFilter, POSPattern
from .splitter import SentenceSplitter
from .stop_words import StopWordsFilter
from .types import IDEOGRAPHIC, Morpheme, Token

__all__ = [
    "AnalysisFailure",
    "AnalysisMode",
    "ConfigurationError",
    "DictConfig",
    "DictKind",
    "IDEOGRAPHIC",
    "JapaneseAnalyzer",
    "JapaneseTokenizer",
    "Morpheme",
    "POSFilter",
    "POSPattern",
    "SentenceSplitter",
    "SplitterConfig",
    "StopWordsFilter",
    "Token",
    "TokenizerConfig",
    "TokenizerError",
]

def __getattr__(name: str):
    if name in ("JapaneseTokenizer", "JapaneseAnalyzer"):
        from . import tokenizer  # keeps numpy out of light imports
        return getattr(tokenizer, name)
    raise AttributeError(name)
