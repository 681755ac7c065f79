from __future__ import annotations

import csv
import logging
import math
import subprocess
from pathlib import Path

from contracts.ocr import Token

from ..contracts import OcrConfig, OcrInvocationError
from .base import OcrEngine

log = logging.getLogger(__name__)

# Tesseract TSV columns (0-indexed):
# level page_num block_num par_num line_num word_num left top width height conf text
_MIN_COLUMNS = 12
_COL_LINE_NUM = 4
_COL_LEFT = 6
_COL_TOP = 7
_COL_CONF = 10
_COL_TEXT = 11


def _parse_confidence(raw: str) -> int | None:
    # Tesseract 4+ reports float confidences ("96.53"); -1 means "not a word".
    try:
        conf = float(raw)
    except ValueError:
        return None
    if not math.isfinite(conf) or conf < 0:
        return None
    return int(round(conf))


def parse_tesseract_tsv(tsv: str) -> list[Token]:
    """
    Parse `tesseract ... tsv` output into word tokens, in emission order.

    The header row is skipped. Rows with too few columns, blank text, or
    non-integer line/left/top fields are dropped (no guessing).
    """

    tokens: list[Token] = []
    reader = csv.reader(tsv.splitlines(), delimiter="\t", quoting=csv.QUOTE_NONE)

    for idx, parts in enumerate(reader):
        if idx == 0:
            continue
        if len(parts) < _MIN_COLUMNS:
            continue

        text = parts[_COL_TEXT].strip()
        if text == "":
            continue

        try:
            int(parts[_COL_LINE_NUM])
            left = int(parts[_COL_LEFT])
            top = int(parts[_COL_TOP])
        except ValueError:
            continue

        tokens.append(Token(text=text, x=left, y=top, confidence=_parse_confidence(parts[_COL_CONF])))

    return tokens


class TesseractCliEngine(OcrEngine):
    """
    Tesseract OCR via `tesseract` CLI, parsed from TSV output.

    This engine performs no correction, no merging, and no filtering; the
    row reconstructor applies the confidence floor and left margin.
    """

    def __init__(self, config: OcrConfig | None = None) -> None:
        self.config = config or OcrConfig()

    def build_command(self, image_file: Path) -> list[str]:
        cfg = self.config
        cmd = [cfg.binary, str(image_file), "stdout", "-l", cfg.language]
        if cfg.oem is not None:
            cmd.extend(["--oem", str(cfg.oem)])
        if cfg.psm is not None:
            cmd.extend(["--psm", str(cfg.psm)])
        # Request TSV output (word-level rows include position + conf + text).
        cmd.append("tsv")
        return cmd

    def extract_tokens(self, image_file: Path) -> list[Token]:
        cmd = self.build_command(image_file)
        log.debug("running %s", " ".join(cmd))

        try:
            proc = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.config.timeout_s,
            )
        except FileNotFoundError as e:
            raise OcrInvocationError(
                code="OCR_BACKEND_NOT_INSTALLED",
                message=f"{self.config.binary} binary not found on PATH",
                detail={"expected_command": self.config.binary},
            ) from e
        except subprocess.TimeoutExpired as e:
            raise OcrInvocationError(
                code="OCR_TIMEOUT",
                message="OCR backend timed out",
                detail={"timeout_s": self.config.timeout_s},
            ) from e
        except OSError as e:
            raise OcrInvocationError(
                code="OCR_BACKEND_ERROR",
                message=f"OCR backend could not be started: {e}",
                detail={"command": cmd[0]},
            ) from e

        if proc.returncode != 0:
            raise OcrInvocationError(
                code="OCR_BACKEND_ERROR",
                message="OCR backend returned a non-zero exit code",
                detail={
                    "returncode": proc.returncode,
                    "stderr": (proc.stderr or "")[-4000:],  # truncate for artifact stability
                },
            )

        tokens = parse_tesseract_tsv(proc.stdout)
        log.debug("tesseract emitted %d word tokens for %s", len(tokens), image_file.name)
        return tokens
