"""
Export utilities for extracted market modules.
"""
import json
import logging
import os
from typing import List

import pandas as pd

from .models import ExtractionResult, ModuleRecord

logger = logging.getLogger(__name__)

COLUMNS = [
    "name", "category", "socketType", "requiredRank", "price",
    "platform", "rerollCount", "sellerName", "sellerStatus", "sellerRank",
    "regDate", "attributes", "positive_stats", "negative_stats", "stats_json",
]


def save_payload(result: ExtractionResult, out_path: str) -> None:
    """Write the run result as a flat JSON list, or an error object."""
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(result.to_payload(), f, ensure_ascii=False, indent=2)

    if result.ok:
        logger.info(f">>> Saved {len(result.modules)} modules to {out_path}")
    else:
        logger.info(f">>> Saved error result to {out_path}")


def records_to_frame(records: List[ModuleRecord]) -> pd.DataFrame:
    """One row per module; attributes and stats flattened to text columns."""
    rows = []
    for m in records:
        row = m.to_dict()
        stats = row.pop("stats")
        row["attributes"] = "|".join(m.attributes)
        row["positive_stats"] = sum(1 for s in m.stats if s.positive)
        row["negative_stats"] = sum(1 for s in m.stats if s.negative)
        row["stats_json"] = json.dumps(stats, ensure_ascii=False)
        rows.append(row)

    return pd.DataFrame(rows, columns=COLUMNS)


def save_output_rows(records: List[ModuleRecord], out_path: str) -> None:
    """Save modules to CSV or Excel file."""
    df = records_to_frame(records)
    if out_path.lower().endswith(".xlsx"):
        df.to_excel(out_path, index=False)
    else:
        df.to_csv(out_path, index=False)

    logger.info(f">>> Saved {len(df)} rows to {out_path}")
