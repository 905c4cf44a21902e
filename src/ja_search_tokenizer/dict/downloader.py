from __future__ import annotations
import fnmatch
import io
import logging
import tarfile
from dataclasses import dataclass
from pathlib import Path
from typing import List
import requests
from tqdm import tqdm
from ..config import DictConfig
from ..errors import ConfigurationError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadResult:
    installed_to: Path
    version: str


REQUIRED_DICT_FILES = (
    "matrix.def",
    "char.def",
    "unk.def",
    "left-id.def",
    "right-id.def",
)


def missing_dict_files(cfg: DictConfig) -> List[str]:
    missing = [name for name in REQUIRED_DICT_FILES if not (cfg.install_dir / name).exists()]
    if not cfg.lexicon_files:
        missing.append(cfg.spec.lexicon_pattern)
    return missing


def dict_files_present(cfg: DictConfig = DictConfig()) -> bool:
    return not missing_dict_files(cfg)


def _download_bytes(url: str) -> bytes:
    buf = io.BytesIO()
    try:
        with requests.get(url, stream=True, timeout=60) as r:
            r.raise_for_status()
            total = int(r.headers.get("Content-Length", "0") or "0")
            with tqdm(total=total if total > 0 else None, unit="B", unit_scale=True, desc="ダウンロード中...") as pbar:
                for chunk in r.iter_content(chunk_size=1024 * 1024):
                    if not chunk:
                        continue
                    buf.write(chunk)
                    pbar.update(len(chunk))
    except requests.RequestException as e:
        raise ConfigurationError(f"cannot download dictionary from {url}: {e}") from e
    return buf.getvalue()


def _wanted(name: str, cfg: DictConfig) -> bool:
    return name in REQUIRED_DICT_FILES or fnmatch.fnmatch(name, cfg.spec.lexicon_pattern)


def extract_dictionary(data: bytes, cfg: DictConfig) -> List[Path]:
    """
    copy the required files and lexicon csvs sitting at the tarball root into cfg.install_dir
    """
    install_dir = cfg.install_dir
    written: List[Path] = []
    try:
        install_dir.mkdir(parents=True, exist_ok=True)
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tf:
            for m in tf.getmembers():
                if not m.isfile():
                    continue
                parts = m.name.split("/")
                # "<root>/<file>" only, nested dirs are tests/docs
                if len(parts) != 2 or not _wanted(parts[1], cfg):
                    continue
                f = tf.extractfile(m)
                if f is None:
                    continue
                out_path = install_dir / parts[1]
                out_path.write_bytes(f.read())
                written.append(out_path)
    except (tarfile.TarError, OSError) as e:
        raise ConfigurationError(f"cannot extract {cfg.spec.name} into {install_dir}: {e}") from e
    return written


def ensure_dictionary(cfg: DictConfig = DictConfig()) -> DownloadResult:
    """
    Make sure the MeCab-format sources for cfg.kind are under cfg.install_dir,
    downloading the release tarball when auto_download is on.
    """
    install_dir = cfg.install_dir
    missing = missing_dict_files(cfg)
    if not missing:
        return DownloadResult(installed_to=install_dir, version=cfg.resolved_version)
    if not cfg.auto_download:
        raise ConfigurationError(
            f"{cfg.spec.name} files missing under {install_dir}. Missing: {', '.join(missing)}. "
            f"Run `jst download-dict --dict {cfg.kind.value}` or set DictConfig(auto_download=True)."
        )

    url = cfg.spec.url(cfg.resolved_version)
    log.info("downloading %s %s from %s", cfg.spec.name, cfg.resolved_version, url)
    written = extract_dictionary(_download_bytes(url), cfg)
    log.info("installed %d files to %s", len(written), install_dir)

    missing = missing_dict_files(cfg)
    if missing:
        raise ConfigurationError(f"downloaded archive from {url} lacks: {', '.join(missing)}")
    return DownloadResult(installed_to=install_dir, version=cfg.resolved_version)
