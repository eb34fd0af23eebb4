"""Tests for the CONCAR text exports."""

from datetime import date
from decimal import Decimal

import pytest

from src.core.exceptions import ExportFieldTooLongError, ValidationError
from src.modules.documents.export import (
    LINE_WIDTH,
    encode_client_summary,
    encode_fixed_width,
    parse_fixed_width,
)
from src.modules.documents.schemas import DocumentInput


def _doc(**overrides) -> DocumentInput:
    values = {
        "client_ruc": "20100000001",
        "provider_ruc": "20500000005",
        "document_type": "01",
        "document_number": "F001-00000123",
        "issue_date": "2025-01-10",
        "due_date": "2025-02-10",
        "confirmation_date": "2025-01-14",
        "amount": "1500.5",
        "currency": "PE",
    }
    values.update(overrides)
    return DocumentInput(**values)


class TestClientSummary:
    """Tests for the RUC|TOTAL export."""

    def test_single_client(self):
        docs = [_doc(amount="150.5"), _doc(amount="49.5")]

        assert encode_client_summary(docs) == "20100000001|200.0000"

    def test_groups_in_first_appearance_order(self):
        docs = [
            _doc(client_ruc="20600000002", amount="10"),
            _doc(client_ruc="20100000001", amount="1.25"),
            _doc(client_ruc="20600000002", amount="5.5"),
        ]

        assert encode_client_summary(docs) == "20600000002|15.5000\n20100000001|1.2500"

    def test_unparseable_amount_counts_as_zero(self):
        docs = [_doc(amount="abc"), _doc(amount=""), _doc(amount="7")]

        assert encode_client_summary(docs) == "20100000001|7.0000"

    def test_negative_total(self):
        assert encode_client_summary([_doc(amount="-3.5")]) == "20100000001|-3.5000"

    def test_empty(self):
        assert encode_client_summary([]) == ""


class TestFixedWidth:
    """Tests for the positional export."""

    def test_exact_line(self):
        line = encode_fixed_width([_doc()])

        expected = (
            "20100000001"
            "20500000005"
            "01"
            "F001-00000123            "
            "10/01/2025"
            "10/02/2025"
            "14/01/2025"
            "      1500.5000"
            "PE"
        )
        assert line == expected
        assert len(line) == LINE_WIDTH == 96

    def test_one_line_per_document(self):
        content = encode_fixed_width([_doc(), _doc(document_number="F001-2"), _doc()])

        lines = content.split("\n")
        assert len(lines) == 3
        assert all(len(line) == LINE_WIDTH for line in lines)

    def test_blank_fields_are_padded(self):
        line = encode_fixed_width(
            [_doc(provider_ruc="", issue_date="", due_date=None, confirmation_date="", amount="")]
        )

        assert len(line) == LINE_WIDTH
        assert line[11:22] == " " * 11
        assert line[49:79] == " " * 30
        assert line[79:94] == "         0.0000"

    def test_reads_back(self):
        docs = [_doc(), _doc(client_ruc="20600000002", due_date="", amount="-12.3456")]

        records = parse_fixed_width(encode_fixed_width(docs))

        assert len(records) == 2
        assert records[0].client_ruc == "20100000001"
        assert records[0].document_number == "F001-00000123"
        assert records[0].issue_date == date(2025, 1, 10)
        assert records[0].amount == Decimal("1500.5000")
        assert records[1].due_date is None
        assert records[1].amount == Decimal("-12.3456")
        assert records[1].currency == "PE"

    def test_document_number_too_long(self):
        doc = _doc().model_copy(update={"document_number": "X" * 26})

        with pytest.raises(ExportFieldTooLongError) as exc_info:
            encode_fixed_width([_doc(), doc])

        assert exc_info.value.details == {"field": "document_number", "width": 25, "line": 2}
        assert exc_info.value.status_code == 422

    def test_amount_too_wide(self):
        with pytest.raises(ExportFieldTooLongError) as exc_info:
            encode_fixed_width([_doc(amount="123456789012.5")])

        assert exc_info.value.details["field"] == "amount"

    def test_empty(self):
        assert encode_fixed_width([]) == ""
        assert parse_fixed_width("") == []

    def test_parse_rejects_wrong_line_length(self):
        with pytest.raises(ValidationError):
            parse_fixed_width("20100000001|200.0000")

    def test_parse_rejects_bad_amount(self):
        line = encode_fixed_width([_doc()])
        broken = line[:79] + "      not-a-num" + line[94:]

        with pytest.raises(ValidationError) as exc_info:
            parse_fixed_width(broken)

        assert exc_info.value.details["field"] == "amount"
