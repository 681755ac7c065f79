"""
Extraction pipeline: one box-score image -> validated StatLines + counters.

Fatal conditions (unreadable image, OCR backend failure) raise; row-level
problems (no roster match, unparseable row) are recorded in the result meta
and never abort the run.
"""

from .artifacts import serialize_extraction_result, write_extraction_json_artifact
from .config import ExtractionConfig
from .module import ExtractionPipeline, run_extraction

__all__ = [
    "ExtractionConfig",
    "ExtractionPipeline",
    "run_extraction",
    "serialize_extraction_result",
    "write_extraction_json_artifact",
]
