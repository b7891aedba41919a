"""
Invoice Totals

Sums imported carrier invoice lines into actual tour pay, accessorials
and adjustments.
"""

from collections.abc import Iterable
from decimal import Decimal

from engines.schemas.batch import InvoiceItemType, InvoiceLineItem, InvoiceTotals


def summarize_invoice(line_items: Iterable[InvoiceLineItem]) -> InvoiceTotals:
    """
    Total an invoice's gross pay by line type.

    TOUR_COMPLETED lines are tour pay, LOAD_COMPLETED lines are
    accessorials, and every adjustment type (disputes, other) is an
    adjustment. Adjustments may be negative.
    """
    tour_pay = Decimal("0")
    accessorials = Decimal("0")
    adjustments = Decimal("0")
    tour_count = 0
    load_count = 0

    for item in line_items:
        if item.item_type is InvoiceItemType.TOUR_COMPLETED:
            tour_pay += item.gross_pay
            tour_count += 1
        elif item.item_type is InvoiceItemType.LOAD_COMPLETED:
            accessorials += item.gross_pay
            load_count += 1
        else:
            adjustments += item.gross_pay

    return InvoiceTotals(
        total_tour_pay=tour_pay,
        total_accessorials=accessorials,
        total_adjustments=adjustments,
        total_pay=tour_pay + accessorials + adjustments,
        tour_count=tour_count,
        load_count=load_count,
    )
