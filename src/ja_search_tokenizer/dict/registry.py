from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple
from ..config import DictConfig, DictKind, DictSpec
from ..errors import ConfigurationError
from .charclasses import CharClassifier, UnkLexicon
from .connection import ConnectionCostMatrix
from .downloader import ensure_dictionary
from .lexicon import Lexicon

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dictionary:
    """
    a fully loaded, read-only MeCab-format dictionary
    """
    kind: DictKind
    spec: DictSpec
    lexicon: Lexicon
    conn: ConnectionCostMatrix
    classifier: CharClassifier
    unk_lex: UnkLexicon

    def base_form(self, features: Tuple[str, ...]) -> Optional[str]:
        i = self.spec.base_form_field
        if i < len(features) and features[i] not in ("", "*"):
            return features[i]
        return None


def load_mecab_dictionary(cfg: DictConfig) -> Dictionary:
    ensure_dictionary(cfg)
    enc = cfg.spec.encoding
    try:
        classifier = CharClassifier(cfg.char_def, enc)
        return Dictionary(
            kind=cfg.kind,
            spec=cfg.spec,
            lexicon=Lexicon(cfg.lexicon_files, enc),
            conn=ConnectionCostMatrix(cfg.matrix_def, cfg.left_id_def, cfg.right_id_def, enc),
            classifier=classifier,
            unk_lex=UnkLexicon(cfg.unk_def, classifier, enc),
        )
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot load {cfg.spec.name} from {cfg.install_dir}: {e}") from e


# IPA (EUC-JP, one csv per POS class) and UniDic (UTF-8, a single lex.csv) share the
# MeCab source layout; DICT_SPECS carries what differs
DICT_LOADERS: Dict[DictKind, Callable[[DictConfig], Dictionary]] = {
    DictKind.IPA: load_mecab_dictionary,
    DictKind.UNI: load_mecab_dictionary,
}

_cache: Dict[Tuple[DictKind, Path], Dictionary] = {}
_cache_lock = threading.Lock()


def load_dictionary(cfg: DictConfig) -> Dictionary:
    """
    load once per (kind, install dir); concurrent callers wait for the first load
    """
    key = (cfg.kind, cfg.install_dir)
    with _cache_lock:
        d = _cache.get(key)
        if d is None:
            loader = DICT_LOADERS.get(cfg.kind)
            if loader is None:
                raise ConfigurationError(f"unsupported dictionary: {cfg.kind}")
            log.info("loading %s dictionary from %s", cfg.kind.value, cfg.install_dir)
            d = loader(cfg)
            _cache[key] = d
        return d


def clear_cache() -> None:
    with _cache_lock:
        _cache.clear()
