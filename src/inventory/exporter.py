"""Reorder report exporter: CSV for spreadsheets, JSON for the dashboard.

The CSV layout matches the dashboard's "Export CSV" download, header row
included, so existing spreadsheets keep working.
"""

from __future__ import annotations

import csv
import json
import logging
import math
from pathlib import Path

from ..common.config import settings
from ..common.models import ReorderRecommendation, ReorderReport

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Product ID",
    "Product Name",
    "Current Stock",
    "Days Remaining",
    "Needs Reorder",
    "Suggested Quantity",
    "Estimated Cost",
    "Criticality",
    "Reason",
]


class ReportExporter:
    """Write reorder reports to files under the export directory."""

    def __init__(self, export_dir: str | Path | None = None) -> None:
        self.export_dir = Path(export_dir) if export_dir else settings.export_abs_dir

    def to_csv(self, report: ReorderReport, output_path: str | Path | None = None) -> Path:
        """Write one CSV row per recommendation. Returns the file path."""
        path = self._resolve_path(report, output_path, "csv")
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for rec in report.recommendations:
                writer.writerow(csv_row(rec))

        logger.info("Exported %d recommendations -> %s", len(report.recommendations), path)
        return path

    def to_json(self, report: ReorderReport, output_path: str | Path | None = None) -> Path:
        """Write the full report (recommendations + summary) as JSON."""
        path = self._resolve_path(report, output_path, "json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)

        logger.info("Exported reorder report JSON -> %s", path)
        return path

    def _resolve_path(
        self, report: ReorderReport, output_path: str | Path | None, suffix: str
    ) -> Path:
        if output_path is None:
            stamp = report.generated_at.date().isoformat()
            output_path = self.export_dir / f"reorder-report-{stamp}.{suffix}"
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path


def csv_row(rec: ReorderRecommendation) -> list:
    days = rec.days_of_stock_remaining
    return [
        rec.product_id,
        rec.product_name,
        rec.current_stock,
        "Infinity" if math.isinf(days) else days,
        "Yes" if rec.needs_reorder else "No",
        _plain_number(rec.suggested_reorder_quantity),
        _plain_number(round(rec.estimated_cost, 2)),
        rec.criticality_level.value,
        rec.reason,
    ]


def _plain_number(value: float) -> int | float:
    """695.0 -> 695, 6248.05 stays as is."""
    if float(value).is_integer():
        return int(value)
    return value
