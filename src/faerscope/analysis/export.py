"""Export disproportionality results and trend statistics."""

import io
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..config import config
from ..config.constants import FDR_ALPHA
from ..config.logging_config import get_logger
from .disproportionality import DisproportionalityScore
from .summary import summarize_scores
from .time_series import TrendWithStats

logger = get_logger("export")


SCORE_COLUMNS = [
    "reaction",
    "count",
    "a",
    "b",
    "c",
    "d",
    "n",
    "prr",
    "prr_chi2",
    "prr_p_value",
    "fdr_p_value",
    "ror",
    "ror_lower_95",
    "ror_upper_95",
    "ic",
    "ic025",
    "ic975",
    "is_signal",
    "is_strong_signal",
]

TREND_COLUMNS = ["time", "label", "count", "ma", "z_score", "is_spike"]

SCORE_COLUMN_WIDTHS = {
    "reaction": 40,
    "prr_p_value": 14,
    "fdr_p_value": 14,
    "ror_lower_95": 14,
    "ror_upper_95": 14,
    "is_strong_signal": 16,
}


def score_to_record(score: DisproportionalityScore) -> Dict[str, Any]:
    """Flatten a score into a plain record, table cells inlined."""
    record = asdict(score)
    table = record.pop("table")
    record.update(table)
    return {column: record[column] for column in SCORE_COLUMNS}


def scores_to_dataframe(scores: Sequence[DisproportionalityScore]) -> pd.DataFrame:
    """Tabulate scores, one row per reaction in input order."""
    return pd.DataFrame([score_to_record(s) for s in scores], columns=SCORE_COLUMNS)


def trend_to_dataframe(points: Sequence[TrendWithStats]) -> pd.DataFrame:
    """Tabulate spike-annotated trend points."""
    rows = [{column: getattr(p, column) for column in TREND_COLUMNS} for p in points]
    return pd.DataFrame(rows, columns=TREND_COLUMNS)


class SignalExporter:
    """Export signal detection results to various formats."""

    def __init__(self, output_dir: Optional[Path] = None):
        """
        Initialize exporter.

        Args:
            output_dir: Directory for file exports.
        """
        self.output_dir = output_dir or config.app.exports_path

    def export_to_csv(
        self,
        df: pd.DataFrame,
        filename: Optional[str] = None,
        columns: Optional[List[str]] = None,
    ) -> Path:
        """
        Export DataFrame to CSV file.

        Args:
            df: DataFrame to export.
            filename: Output filename (generated if None).
            columns: Columns to include (all if None).

        Returns:
            Path to exported file.
        """
        if filename is None:
            filename = self.generate_filename(extension="csv")

        if columns:
            existing_cols = [c for c in columns if c in df.columns]
            df = df[existing_cols]

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.output_dir / filename
        df.to_csv(filepath, index=False, encoding="utf-8")

        logger.info(f"Exported {len(df)} records to {filepath}")
        return filepath

    def export_to_csv_buffer(
        self,
        df: pd.DataFrame,
        columns: Optional[List[str]] = None,
    ) -> io.StringIO:
        """
        Export DataFrame to an in-memory CSV buffer.

        Args:
            df: DataFrame to export.
            columns: Columns to include.

        Returns:
            StringIO buffer with CSV data.
        """
        if columns:
            existing_cols = [c for c in columns if c in df.columns]
            df = df[existing_cols]

        buffer = io.StringIO()
        df.to_csv(buffer, index=False, encoding="utf-8")
        buffer.seek(0)
        return buffer

    def export_scores_to_excel(
        self,
        scores: Sequence[DisproportionalityScore],
        filename: Optional[str] = None,
        alpha: float = FDR_ALPHA,
    ) -> Path:
        """
        Export scores to a formatted Excel workbook.

        Args:
            scores: Scores to export, optionally FDR-corrected.
            filename: Output filename (generated if None).
            alpha: FDR level used for the summary sheet.

        Returns:
            Path to exported file.
        """
        if filename is None:
            filename = self.generate_filename(extension="xlsx")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.output_dir / filename
        self._write_workbook(filepath, scores, alpha)

        logger.info(f"Exported {len(scores)} scores to Excel: {filepath}")
        return filepath

    def export_scores_to_excel_buffer(
        self,
        scores: Sequence[DisproportionalityScore],
        alpha: float = FDR_ALPHA,
    ) -> io.BytesIO:
        """Export scores to an in-memory Excel workbook."""
        buffer = io.BytesIO()
        self._write_workbook(buffer, scores, alpha)
        buffer.seek(0)
        return buffer

    def _write_workbook(
        self,
        target,
        scores: Sequence[DisproportionalityScore],
        alpha: float,
    ) -> None:
        with pd.ExcelWriter(target, engine="openpyxl") as writer:
            scores_to_dataframe(scores).to_excel(writer, sheet_name="Scores", index=False)
            self._format_sheet(writer.sheets["Scores"], SCORE_COLUMN_WIDTHS)

            self._create_summary_df(scores, alpha).to_excel(
                writer, sheet_name="Summary", index=False
            )

    def _format_sheet(
        self,
        worksheet,
        column_widths: Dict[str, int],
    ) -> None:
        """Apply formatting to Excel worksheet."""
        from openpyxl.styles import Font, PatternFill, Alignment

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")

        for cell in worksheet[1]:
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        for col_name, width in column_widths.items():
            for cell in worksheet[1]:
                if cell.value == col_name:
                    worksheet.column_dimensions[cell.column_letter].width = width
                    break

        worksheet.freeze_panes = "A2"
        worksheet.auto_filter.ref = worksheet.dimensions

    def _create_summary_df(
        self,
        scores: Sequence[DisproportionalityScore],
        alpha: float,
    ) -> pd.DataFrame:
        """Create summary statistics DataFrame."""
        summary = summarize_scores(scores, alpha)

        stats = [
            {"Metric": "Reactions Analyzed", "Value": summary.reactions_analyzed},
            {"Metric": "Signals (Evans)", "Value": summary.signals_detected},
            {"Metric": "Strong Signals", "Value": summary.strong_signals_detected},
            {"Metric": "FDR Enabled", "Value": summary.fdr_enabled},
        ]
        if summary.fdr_enabled:
            stats.append({
                "Metric": f"FDR Significant (q < {summary.alpha})",
                "Value": summary.fdr_significant,
            })
        stats.append({
            "Metric": "Export Date",
            "Value": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        })

        return pd.DataFrame(stats)

    def generate_filename(
        self,
        base_name: str = "faerscope_signals",
        extension: str = "csv",
        include_timestamp: bool = True,
    ) -> str:
        """Generate export filename."""
        if include_timestamp:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            return f"{base_name}_{timestamp}.{extension}"
        return f"{base_name}.{extension}"
