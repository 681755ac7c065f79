from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .boxscore import StatLine


@dataclass(frozen=True, slots=True)
class ExtractionError:
    code: str
    message: str
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """
    Outcome of one pipeline run over one image.

    `matched` counts rows resolved to a roster player AND parsed into a
    StatLine; `written` counts lines accepted by the storage sink.
    An empty `stat_lines` with ok=True is a valid outcome.
    """

    ok: bool
    stat_lines: list[StatLine]
    matched: int
    written: int
    parse_failures: int
    errors: list[ExtractionError] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "stat_lines": [s.to_dict() for s in self.stat_lines],
            "matched": self.matched,
            "written": self.written,
            "parse_failures": self.parse_failures,
            "errors": [e.to_dict() for e in self.errors],
            "meta": dict(self.meta),
        }
