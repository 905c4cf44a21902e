from __future__ import annotations
import unicodedata
from dataclasses import dataclass
from .errors import ConfigurationError

FORMS = ("nfc", "nfd", "nfkc", "nfkd")


@dataclass(frozen=True)
class UnicodeNormalizeCharFilter:
    """
    char filter applied before tokenization. token offsets refer to the
    filtered bytes, so pick a form that suits the stored text (nfkc is usual)
    """
    form: str = "nfkc"

    def __post_init__(self) -> None:
        form = str(self.form).lower()
        if form not in FORMS:
            raise ConfigurationError(f"no form named {self.form}")
        object.__setattr__(self, "form", form)

    def filter(self, data: bytes) -> bytes:
        text = data.decode("utf-8", "surrogateescape")
        return unicodedata.normalize(self.form.upper(), text).encode("utf-8", "surrogateescape")
