"""Links package — extraction, batching, probing and result streaming."""

from linkaudit.links.extractor import extract_links, find_rich_text_types
from linkaudit.links.models import ExtractedLink, ExtractionResult, LinkGroup, ProbeResult
from linkaudit.links.reassembler import LineReassembler
from linkaudit.links.scheduler import chunk
from linkaudit.links.transfer import stream_results
from linkaudit.links.validator import probe, validate_group

__all__ = [
    "extract_links",
    "find_rich_text_types",
    "chunk",
    "probe",
    "validate_group",
    "stream_results",
    "LineReassembler",
    "ExtractedLink",
    "ExtractionResult",
    "LinkGroup",
    "ProbeResult",
]
