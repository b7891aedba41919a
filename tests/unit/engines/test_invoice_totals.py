"""
Invoice Totals Unit Tests
"""

from decimal import Decimal

from engines.schemas.batch import InvoiceItemType
from engines.services.invoice_totals import summarize_invoice
from tests.factories import make_line_item


def test_totals_by_line_type():
    totals = summarize_invoice(
        [
            make_line_item(InvoiceItemType.TOUR_COMPLETED, "452.09"),
            make_line_item(InvoiceItemType.LOAD_COMPLETED, "34.12"),
            make_line_item(InvoiceItemType.LOAD_COMPLETED, "36.00"),
            make_line_item(InvoiceItemType.ADJUSTMENT_DISPUTE, "15.00"),
            make_line_item(InvoiceItemType.ADJUSTMENT_OTHER, "-40.00"),
        ]
    )

    assert totals.total_tour_pay == Decimal("452.09")
    assert totals.total_accessorials == Decimal("70.12")
    assert totals.total_adjustments == Decimal("-25.00")
    assert totals.total_pay == Decimal("497.21")
    assert totals.tour_count == 1
    assert totals.load_count == 2


def test_empty_invoice():
    totals = summarize_invoice([])

    assert totals.total_pay == Decimal("0")
    assert totals.tour_count == 0
    assert totals.load_count == 0


def test_accepts_generator():
    totals = summarize_invoice(
        make_line_item(InvoiceItemType.TOUR_COMPLETED, "100") for _ in range(3)
    )

    assert totals.total_tour_pay == Decimal("300")
    assert totals.tour_count == 3
