from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contracts.extraction import ExtractionResult


def serialize_extraction_result(result: ExtractionResult) -> str:
    payload: dict[str, Any] = result.to_dict()
    return (
        json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"), indent=2)
        + "\n"
    )


def write_extraction_json_artifact(*, result: ExtractionResult, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_extraction_result(result), encoding="utf-8")
