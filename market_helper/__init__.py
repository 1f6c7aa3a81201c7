"""
Market Helper Package
"""
from .models import ModuleRecord, Stat, ExtractionResult
from .exceptions import MarketHelperError, ExtractionError, StabilityTimeout
from .dom import HtmlDocument, StaticDocument
from .watcher import wait_until_stable
from .extractor import classify, extract_modules
from .core import run_market_helper, run_scrape
from .export import save_payload, save_output_rows
from .utils import init_logger, now_iso

__version__ = "1.0.0"

__all__ = [
    "ModuleRecord",
    "Stat",
    "ExtractionResult",
    "MarketHelperError",
    "ExtractionError",
    "StabilityTimeout",
    "HtmlDocument",
    "StaticDocument",
    "wait_until_stable",
    "classify",
    "extract_modules",
    "run_market_helper",
    "run_scrape",
    "save_payload",
    "save_output_rows",
    "init_logger",
    "now_iso"
]
