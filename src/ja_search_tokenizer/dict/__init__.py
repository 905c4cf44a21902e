from .downloader import ensure_dictionary, dict_files_present
from .lexicon import Lexicon
from .connection import ConnectionCostMatrix
from .charclasses import CharClassifier, UnkLexicon
from .registry import DICT_LOADERS, Dictionary, load_dictionary

__all__ = [
    "ensure_dictionary",
    "dict_files_present",
    "Lexicon",
    "ConnectionCostMatrix",
    "CharClassifier",
    "UnkLexicon",
    "DICT_LOADERS",
    "Dictionary",
    "load_dictionary",
]
