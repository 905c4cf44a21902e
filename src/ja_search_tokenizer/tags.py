from __future__ import annotations
import logging
import threading
from importlib import resources
from pathlib import Path
from typing import Optional, Tuple
from .config import DICT_SPECS, DictKind, TokenizerConfig
from .pos_filter import POSFilter, POSPattern, load_pattern_table, parse_pattern_table

log = logging.getLogger(__name__)

STOP_TAGS_NAME = "stop_tags_ja"

_stop_tags: Optional[Tuple[POSPattern, ...]] = None
_stop_tags_lock = threading.Lock()


def bundled_stop_tags() -> Tuple[POSPattern, ...]:
    """
    the Lucene kuromoji stop tag list shipped in assets/, parsed once per process
    """
    global _stop_tags
    with _stop_tags_lock:
        if _stop_tags is None:
            text = resources.files(__package__).joinpath("assets").joinpath("stop_tags.txt").read_text(encoding="utf-8")
            _stop_tags = parse_pattern_table(text, source=STOP_TAGS_NAME)
            log.debug("loaded %d stop tag patterns", len(_stop_tags))
        return _stop_tags


def default_inflected(kind: DictKind) -> Tuple[POSPattern, ...]:
    # verb, adjective, adjectival noun in the dictionary's own tag names
    return tuple(POSPattern.parse(t) for t in DICT_SPECS[DictKind.parse(kind)].inflected)


def stop_tags_filter(path: Optional[Path] = None) -> POSFilter:
    patterns = load_pattern_table(path) if path is not None else bundled_stop_tags()
    return POSFilter(patterns)


def base_form_filter(cfg: TokenizerConfig) -> POSFilter:
    if cfg.base_form_tags is not None:
        return POSFilter(cfg.base_form_tags)
    return POSFilter(default_inflected(cfg.dictionary))
