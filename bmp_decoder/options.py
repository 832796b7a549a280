"""Decoder configuration."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class DecodeOptions:
    """Policy switches applied to a single decode call.

    ``use_palette_alpha`` treats the fourth byte of each palette entry as an
    alpha value. Producers normally leave that byte zero, so it is ignored
    unless explicitly enabled.
    """

    use_palette_alpha: bool = False
    honour_data_offset: bool = True
    max_pixels: Optional[int] = None

    @classmethod
    def from_json(cls, path: Path | str) -> "DecodeOptions":
        """Load options from a JSON object whose keys match the field names."""

        with Path(path).open("r", encoding="utf-8") as fp:
            data = json.load(fp)
        return cls(**data)


DEFAULT_OPTIONS = DecodeOptions()
