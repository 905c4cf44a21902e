from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple
import numpy as np
from ..errors import ConfigurationError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdDefInfo:
    count: int
    label_to_id: Dict[str, int]


def parse_id_def(path: Optional[Path], encoding: str = "utf-8") -> Optional[IdDefInfo]:
    """
    left-id.def / right-id.def: "<id> <feature,...>" per line.
    labels are keyed by their first feature ("BOS/EOS", "名詞", ...); first id wins
    """
    if path is None or not path.exists():
        return None
    label_to_id: Dict[str, int] = {}
    max_id = -1
    for line in path.read_text(encoding=encoding).splitlines():
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        parts = s.split(maxsplit=1)
        if not parts[0].isdigit():
            raise ConfigurationError(f"{path.name}: expected '<id> <features>', got {s!r}")
        id_val = int(parts[0])
        max_id = max(max_id, id_val)
        if len(parts) > 1:
            label_to_id.setdefault(parts[1].split(",", 1)[0], id_val)
    return IdDefInfo(count=max_id + 1, label_to_id=label_to_id)


class ConnectionCostMatrix:
    """
    mecab matrix.def: header "<right-id count> <left-id count>", then
    "<prev right_id> <next left_id> <cost>" lines.
    the header order is checked against left/right-id.def when those exist
    """
    def __init__(
        self,
        matrix_def_path: Path,
        left_id_def_path: Optional[Path] = None,
        right_id_def_path: Optional[Path] = None,
        encoding: str = "utf-8",
    ) -> None:
        self.matrix_def_path = matrix_def_path
        self._left_info = parse_id_def(left_id_def_path, encoding)
        self._right_info = parse_id_def(right_id_def_path, encoding)
        self.mat = self._load()
        self.right_size, self.left_size = self.mat.shape
        log.debug("connection matrix %dx%d from %s", self.right_size, self.left_size, matrix_def_path)

    def _header(self) -> Tuple[int, int, int]:
        with self.matrix_def_path.open("r", encoding="ascii", errors="ignore") as f:
            for line_no, line in enumerate(f, start=1):
                s = line.strip()
                if not s:
                    continue
                try:
                    a, b = (int(v) for v in s.split())
                except ValueError:
                    raise ConfigurationError(f"matrix.def: bad header {s!r}") from None
                return a, b, line_no
        raise ConfigurationError("matrix.def is empty")

    def _load(self) -> np.ndarray:
        a, b, header_line = self._header()
        right_size, left_size = a, b
        swapped = False
        if self._left_info is not None and self._right_info is not None:
            left_ct, right_ct = self._left_info.count, self._right_info.count
            if (a, b) == (left_ct, right_ct) and left_ct != right_ct:
                # header written as (left right): lines follow the same order
                right_size, left_size = b, a
                swapped = True
                log.warning("matrix.def header looks like (left right); reading transposed")

        mat = np.zeros((right_size, left_size), dtype=np.int32)
        if right_size == 0 or left_size == 0:
            return mat
        rows = np.loadtxt(self.matrix_def_path, dtype=np.int64, skiprows=header_line, ndmin=2, comments="#")
        if rows.size == 0:
            return mat
        if rows.shape[1] != 3:
            raise ConfigurationError(f"matrix.def: expected 3 columns, got {rows.shape[1]}")
        if swapped:
            l, r = rows[:, 0], rows[:, 1]
        else:
            r, l = rows[:, 0], rows[:, 1]
        bad = (r < 0) | (r >= right_size) | (l < 0) | (l >= left_size)
        if bad.any():
            i = int(np.argmax(bad))
            raise ConfigurationError(
                f"matrix.def index out of bounds at data row {i + 1}: "
                f"(r={int(r[i])}, l={int(l[i])}) not in (right={right_size}, left={left_size})"
            )
        mat[r, l] = rows[:, 2]
        return mat

    def bos_right_id(self) -> int:
        if self._right_info is not None:
            return self._right_info.label_to_id.get("BOS/EOS", 0)
        return 0

    def eos_left_id(self) -> int:
        if self._left_info is not None:
            return self._left_info.label_to_id.get("BOS/EOS", 0)
        return 0

    def cost(self, prev_right_id: int, next_left_id: int) -> int:
        if 0 <= prev_right_id < self.right_size and 0 <= next_left_id < self.left_size:
            return int(self.mat[prev_right_id, next_left_id])
        # graceful degradation for oor IDs
        return 0
