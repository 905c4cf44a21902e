from __future__ import annotations
import dataclasses
import functools
from pathlib import Path
from typing import List, Optional
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from .config import AnalysisMode, DictConfig, DictKind, TokenizerConfig
from .errors import AnalysisFailure, ConfigurationError
from .normalize import UnicodeNormalizeCharFilter
from .tokenizer import JapaneseAnalyzer


class TokenOut(BaseModel):
    term: str
    start: int
    end: int
    position: int
    type: str


class TokenizeRequest(BaseModel):
    text: str
    dictionary: DictKind = DictKind.IPA
    base_form: bool = True
    stop_tags: bool = True
    # the bundled stop word list and lowercasing run after the tokenizer
    stop_words: bool = False
    lowercase: bool = False
    mode: AnalysisMode = AnalysisMode.SEARCH
    # nfc / nfd / nfkc / nfkd, applied before tokenizing
    normalize: Optional[str] = None


def create_app(dict_root: Optional[Path] = None, auto_download: bool = True) -> FastAPI:
    app = FastAPI(title="Japanese Search Tokenizer", version="1.0.0")

    @functools.lru_cache(maxsize=16)
    def analyzer_for(cfg: TokenizerConfig, stop_words: bool, lowercase: bool) -> JapaneseAnalyzer:
        dict_cfg = DictConfig(kind=cfg.dictionary, auto_download=auto_download)
        if dict_root is not None:
            dict_cfg = dataclasses.replace(dict_cfg, root_dir=dict_root)
        return JapaneseAnalyzer.from_config(cfg, dict_cfg, stop_words=stop_words, lowercase=lowercase)

    @app.get("/")
    def root() -> dict:
        return {
            "name": "Japanese Search Tokenizer",
            "docs": "/docs",
            "health": "/health",
            "tokenize": "/tokenize",
        }

    @app.get("/health")
    def health() -> dict:
        return {"ok": True}

    @app.post("/tokenize", response_model=List[TokenOut])
    def tokenize(req: TokenizeRequest) -> List[TokenOut]:
        try:
            cfg = TokenizerConfig(dictionary=req.dictionary, base_form=req.base_form, stop_tags=req.stop_tags, mode=req.mode)
            an = analyzer_for(cfg, req.stop_words, req.lowercase)
            data = req.text.encode("utf-8")
            if req.normalize:
                data = UnicodeNormalizeCharFilter(req.normalize).filter(data)
            toks = an.analyze(data)
        except ConfigurationError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        except AnalysisFailure as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        return [
            TokenOut(
                term=t.term.decode("utf-8", "replace"),
                start=t.start,
                end=t.end,
                position=t.position,
                type=t.type,
            )
            for t in toks
        ]

    return app
