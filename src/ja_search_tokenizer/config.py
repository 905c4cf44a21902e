from __future__ import annotations
import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, FrozenSet, List, Mapping, Optional, Tuple
from platformdirs import user_data_dir
from .errors import ConfigurationError


class DictKind(str, enum.Enum):
    IPA = "ipa"
    UNI = "uni"

    @classmethod
    def parse(cls, value: Any) -> "DictKind":
        if isinstance(value, DictKind):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            known = ", ".join(k.value for k in cls)
            raise ConfigurationError(f"unsupported dictionary: {value!r} (expected one of {known})") from None


class AnalysisMode(str, enum.Enum):
    NORMAL = "normal"
    # penalize long compounds so they split into index-friendly words
    SEARCH = "search"


@dataclass(frozen=True)
class DictSpec:
    name: str
    version: str
    url_template: str
    lexicon_pattern: str
    encoding: str
    # index into the feature columns (after left_id/right_id/cost)
    base_form_field: int
    inflected: Tuple[str, ...]

    def url(self, version: str) -> str:
        return self.url_template.format(version=version)


DICT_SPECS = {
    DictKind.IPA: DictSpec(
        name="mecab-ipadic",
        version="2.7.0-20070801",
        url_template=(
            "https://sourceforge.net/projects/mecab/files/mecab-ipadic/{version}/"
            "mecab-ipadic-{version}.tar.gz/download"
        ),
        lexicon_pattern="*.csv",
        encoding="euc-jp",
        base_form_field=6,
        inflected=("動詞", "形容詞", "形容動詞"),
    ),
    DictKind.UNI: DictSpec(
        name="unidic-mecab",
        version="2.1.2",
        url_template="https://github.com/lindera/unidic-mecab/archive/refs/tags/{version}.tar.gz",
        lexicon_pattern="lex.csv",
        encoding="utf-8",
        base_form_field=10,
        inflected=("動詞", "形容詞", "形状詞"),
    ),
}


@dataclass(frozen=True)
class DictConfig:
    kind: DictKind = DictKind.IPA
    version: Optional[str] = None
    root_dir: Path = Path(user_data_dir("ja_search_tokenizer", "jst")) / "dicts"
    auto_download: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", DictKind.parse(self.kind))
        object.__setattr__(self, "root_dir", Path(self.root_dir))

    @property
    def spec(self) -> DictSpec:
        return DICT_SPECS[self.kind]

    @property
    def resolved_version(self) -> str:
        return self.version or self.spec.version

    @property
    def install_dir(self) -> Path:
        return self.root_dir / f"{self.spec.name}-{self.resolved_version}"

    @property
    def lexicon_files(self) -> List[Path]:
        return sorted(self.install_dir.glob(self.spec.lexicon_pattern))

    @property
    def matrix_def(self) -> Path:
        return self.install_dir / "matrix.def"

    @property
    def char_def(self) -> Path:
        return self.install_dir / "char.def"

    @property
    def unk_def(self) -> Path:
        return self.install_dir / "unk.def"

    @property
    def left_id_def(self) -> Path:
        return self.install_dir / "left-id.def"

    @property
    def right_id_def(self) -> Path:
        return self.install_dir / "right-id.def"


@dataclass(frozen=True)
class SplitterConfig:
    delimiters: FrozenSet[str] = frozenset("。．！!？?")
    # closing quotes/brackets kept with the sentence they end
    followers: FrozenSet[str] = frozenset(".｣」』)）｝}〉》")
    double_line_feed_split: bool = True
    max_rune_len: int = 128

    def __post_init__(self) -> None:
        if self.max_rune_len < 1:
            raise ConfigurationError(f"max_rune_len must be positive, got {self.max_rune_len}")


_MAPPING_KEYS = {"type", "dict", "base_form", "stop_tags"}


def _flag(config: Mapping[str, Any], key: str) -> bool:
    value = config.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be a bool, got {value!r}")
    return value


@dataclass(frozen=True)
class TokenizerConfig:
    dictionary: DictKind = DictKind.IPA
    base_form: bool = False
    stop_tags: bool = False
    # overrides for the default inflected set / bundled stop tag table
    base_form_tags: Optional[Tuple[str, ...]] = None
    stop_tags_path: Optional[Path] = None
    mode: AnalysisMode = AnalysisMode.SEARCH
    max_word_len: int = 32
    splitter: SplitterConfig = field(default_factory=SplitterConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "dictionary", DictKind.parse(self.dictionary))
        try:
            object.__setattr__(self, "mode", AnalysisMode(self.mode))
        except ValueError:
            raise ConfigurationError(f"unsupported analysis mode: {self.mode!r}") from None
        if self.base_form_tags is not None:
            object.__setattr__(self, "base_form_tags", tuple(self.base_form_tags))
        if self.max_word_len < 1:
            raise ConfigurationError(f"max_word_len must be positive, got {self.max_word_len}")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "TokenizerConfig":
        """
        validate an untyped host config such as {"type": ..., "dict": "ipa", "stop_tags": True}
        """
        unknown = sorted(set(config) - _MAPPING_KEYS)
        if unknown:
            raise ConfigurationError(f"unknown tokenizer options: {', '.join(unknown)}")
        if "dict" not in config:
            raise ConfigurationError('config requires dict, e.g. "ipa" or "uni"')
        return cls(
            dictionary=DictKind.parse(config["dict"]),
            base_form=_flag(config, "base_form"),
            stop_tags=_flag(config, "stop_tags"),
        )
