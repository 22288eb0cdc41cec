from __future__ import annotations

from ..models.import_report import ImportReport

"""SUMMARY line rendering for an import run."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # 指数表記を避ける
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_summary_line(report: ImportReport) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY rows={total} valid={valid} invalid={invalid} errors={errors}
    error_rows={rows with errors} mapped={mapped}/{fields} elapsed_sec={elapsed}

    invalid is rows dropped by skip_invalid_rows; error_rows counts rows that
    produced at least one validation error whether or not they were dropped.

    Examples:
        SUMMARY rows=2 valid=2 invalid=0 errors=1 error_rows=1 mapped=2/2 elapsed_sec=0.01
    """
    result = report.result
    return (
        f"SUMMARY rows={report.total_rows} "
        f"valid={result.valid_count} "
        f"invalid={result.invalid_count} "
        f"errors={len(result.errors)} "
        f"error_rows={len(result.error_rows)} "
        f"mapped={report.mapped_fields}/{report.total_fields} "
        f"elapsed_sec={_format_seconds(report.elapsed_seconds)}"
    )
