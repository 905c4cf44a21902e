from __future__ import annotations
import dataclasses
import logging
from pathlib import Path
from typing import Optional
import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler
from .config import AnalysisMode, DictConfig, DictKind, TokenizerConfig
from .errors import TokenizerError
from .splitter import DEFAULT_SPLITTER


app = typer.Typer(add_completion=False)


def _dict_cfg(kind: DictKind, dict_root: Optional[Path], auto_download: bool = True) -> DictConfig:
    cfg = DictConfig(kind=kind, auto_download=auto_download)
    if dict_root is not None:
        cfg = dataclasses.replace(cfg, root_dir=dict_root)
    return cfg


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.command("download-dict")
def download_dict(
    dictionary: DictKind = typer.Option(DictKind.IPA, "--dict", help="dictionary to install"),
    version: Optional[str] = typer.Option(None, help="release version, defaults to the pinned one"),
    dict_root: Optional[Path] = typer.Option(None, help="dictionary root dir"),
) -> None:
    from .dict.downloader import ensure_dictionary
    cfg = dataclasses.replace(_dict_cfg(dictionary, dict_root), version=version)
    try:
        res = ensure_dictionary(cfg)
    except TokenizerError as e:
        rprint(f"[red]error[/red] {escape(str(e))}")
        raise typer.Exit(1)
    rprint(f"[green]OK[/green] installed dict to: {res.installed_to}")


@app.command("split")
def split(text: str) -> None:
    for i, sentence in enumerate(DEFAULT_SPLITTER.iter_sentences(text)):
        rprint(f"{i:>3} {escape(repr(sentence))}")


@app.command("tokenize")
def tokenize(
    text: str,
    dictionary: DictKind = typer.Option(DictKind.IPA, "--dict", help="dictionary to analyze with"),
    base_form: bool = typer.Option(True, help="rewrite inflected words to their base form"),
    stop_tags: bool = typer.Option(True, help="drop particles, auxiliaries and symbols"),
    stop_words: bool = typer.Option(False, help="also drop terms on the bundled stop word list"),
    lowercase: bool = typer.Option(False, help="lowercase terms"),
    mode: AnalysisMode = typer.Option(AnalysisMode.SEARCH, help="search splits long compounds"),
    normalize: Optional[str] = typer.Option(None, help="nfc / nfd / nfkc / nfkd before tokenizing"),
    dict_root: Optional[Path] = typer.Option(None, help="dictionary root dir"),
    no_download: bool = typer.Option(False, help="fail instead of downloading a missing dictionary"),
) -> None:
    from .normalize import UnicodeNormalizeCharFilter
    from .tokenizer import JapaneseAnalyzer
    try:
        cfg = TokenizerConfig(dictionary=dictionary, base_form=base_form, stop_tags=stop_tags, mode=mode)
        an = JapaneseAnalyzer.from_config(
            cfg,
            _dict_cfg(dictionary, dict_root, auto_download=not no_download),
            stop_words=stop_words,
            lowercase=lowercase,
        )
        data = text.encode("utf-8")
        if normalize:
            data = UnicodeNormalizeCharFilter(normalize).filter(data)
        toks = an.analyze(data)
    except TokenizerError as e:
        rprint(f"[red]error[/red] {escape(str(e))}")
        raise typer.Exit(1)
    for t in toks:
        rprint(f"{t.start:>4}-{t.end:<4} {t.position:>4} {escape(t.term.decode('utf-8', 'replace'))}")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1"),
    port: int = typer.Option(8000),
    dict_root: Optional[Path] = typer.Option(None, help="dictionary root dir"),
) -> None:
    import uvicorn
    from .api import create_app
    uvicorn.run(create_app(dict_root=dict_root), host=host, port=port)


if __name__ == "__main__":
    app()
