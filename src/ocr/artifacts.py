from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contracts.ocr import Token


def serialize_tokens(tokens: list[Token], *, source_image: str | None = None) -> str:
    """
    Stable JSON serialization for token audit artifacts.
    """

    payload: dict[str, Any] = {
        "source_image": source_image,
        "tokens": [t.to_dict() for t in tokens],
    }
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_tokens_json_artifact(*, tokens: list[Token], out_file: Path, source_image: str | None = None) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_tokens(tokens, source_image=source_image), encoding="utf-8")


def read_tokens_json_artifact(in_file: Path) -> list[Token]:
    raw = json.loads(in_file.read_text(encoding="utf-8"))
    tokens_raw = raw.get("tokens") or []
    if not isinstance(tokens_raw, list):
        raise TypeError("token artifact 'tokens' must be a list")
    return [Token.from_dict(t) for t in tokens_raw]
