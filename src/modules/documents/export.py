"""
CONCAR text exports for a batch of documents.

Two independent formats are produced, each by its own function:

* client summary (canonical, what clerks download after a submit):
  one ``RUC|TOTAL`` line per client RUC, totals with 4 decimals.
* fixed width: one positional line per document, see FIXED_WIDTH_COLUMNS.

Both accept stored AccountingDocument rows or DocumentInput objects.
"""

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, NamedTuple

from src.core.exceptions import ExportFieldTooLongError, ValidationError
from src.shared.schemas.base import BaseSchema
from src.shared.utils.money import format_amount, parse_amount

LINE_SEPARATOR = "\n"
DATE_FORMAT = "%d/%m/%Y"


class Column(NamedTuple):
    field: str
    width: int
    kind: str  # text | date | amount


FIXED_WIDTH_COLUMNS: tuple[Column, ...] = (
    Column("client_ruc", 11, "text"),
    Column("provider_ruc", 11, "text"),
    Column("document_type", 2, "text"),
    Column("document_number", 25, "text"),
    Column("issue_date", 10, "date"),
    Column("due_date", 10, "date"),
    Column("confirmation_date", 10, "date"),
    Column("amount", 15, "amount"),
    Column("currency", 2, "text"),
)

LINE_WIDTH = sum(column.width for column in FIXED_WIDTH_COLUMNS)


class FixedWidthRecord(BaseSchema):
    """One line of a fixed-width export read back into fields."""

    client_ruc: str
    provider_ruc: str
    document_type: str
    document_number: str
    issue_date: date | None
    due_date: date | None
    confirmation_date: date | None
    amount: Decimal
    currency: str


# --- Client summary ---


def encode_client_summary(documents: Iterable[Any]) -> str:
    """
    Group documents by client RUC (first appearance order) and sum their amounts.

    Example:
        20100000001|200.0000
    """
    totals: dict[str, Decimal] = {}
    for doc in documents:
        ruc = doc.client_ruc or ""
        totals[ruc] = totals.get(ruc, Decimal("0")) + parse_amount(doc.amount)

    return LINE_SEPARATOR.join(f"{ruc}|{format_amount(total)}" for ruc, total in totals.items())


# --- Fixed width ---


def _render_date(value: date | str | None) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return value.strftime(DATE_FORMAT)


def _render(doc: Any, column: Column, line: int) -> str:
    value = getattr(doc, column.field, None)
    if column.kind == "date":
        text = _render_date(value)
    elif column.kind == "amount":
        text = format_amount(parse_amount(value))
    else:
        text = "" if value is None else str(value)

    if len(text) > column.width:
        raise ExportFieldTooLongError(column.field, text, column.width, line)

    if column.kind == "amount":
        return text.rjust(column.width)
    return text.ljust(column.width)


def encode_fixed_width(documents: Iterable[Any]) -> str:
    """
    One line per document, every column padded to its width.

    Text and dates are left-justified, the amount is right-justified with 4
    decimals, blank dates are spaces. Values that do not fit their column are
    rejected with ExportFieldTooLongError rather than truncated.
    """
    lines = []
    for line_number, doc in enumerate(documents, start=1):
        lines.append("".join(_render(doc, column, line_number) for column in FIXED_WIDTH_COLUMNS))
    return LINE_SEPARATOR.join(lines)


def parse_fixed_width(content: str) -> list[FixedWidthRecord]:
    """Read a fixed-width export back by column offsets."""
    records = []
    for line_number, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        if len(line) != LINE_WIDTH:
            raise ValidationError(
                f"Line {line_number} is {len(line)} characters long, expected {LINE_WIDTH}"
            )

        values: dict[str, Any] = {}
        position = 0
        for column in FIXED_WIDTH_COLUMNS:
            raw = line[position:position + column.width]
            position += column.width
            try:
                if column.kind == "date":
                    values[column.field] = (
                        datetime.strptime(raw, DATE_FORMAT).date() if raw.strip() else None
                    )
                elif column.kind == "amount":
                    values[column.field] = Decimal(raw.strip())
                else:
                    values[column.field] = raw.rstrip()
            except (ValueError, InvalidOperation) as exc:
                raise ValidationError(
                    f"Line {line_number}: invalid {column.field} '{raw}'", field=column.field
                ) from exc
        records.append(FixedWidthRecord(**values))
    return records
