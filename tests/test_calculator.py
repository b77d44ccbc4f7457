from __future__ import annotations

from decimal import Decimal

import pytest

from invoicing.calculator import (
    apply_discount,
    calculate_invoice_totals,
    calculate_tax,
    calculate_total,
    round_totals,
    sum_line_items,
)
from invoicing.errors import InvalidDiscountKind
from invoicing.models import DiscountKind, InvoiceDraft, InvoiceTotals, LineItem


def _items(*pairs: tuple[object, object]) -> list[LineItem]:
    return [LineItem(f"Item {index}", quantity, rate) for index, (quantity, rate) in enumerate(pairs)]


def test_sum_line_items_empty_is_zero() -> None:
    assert sum_line_items([]) == 0


def test_sum_line_items_adds_quantity_times_rate() -> None:
    items = [LineItem("Web Design", 10, 150), LineItem("Hosting", 1, 99)]

    assert sum_line_items(items) == 1599


def test_sum_line_items_handles_decimal_quantities_without_drift() -> None:
    assert sum_line_items(_items((2.5, 100.50))) == Decimal("251.25")
    assert sum_line_items(_items((3, 0.1))) == Decimal("0.3")


def test_apply_discount_percentage() -> None:
    assert apply_discount(1000, "percentage", 10) == 100
    assert apply_discount(1000, DiscountKind.PERCENTAGE, 15) == 150


def test_apply_discount_fixed_is_not_capped() -> None:
    assert apply_discount(1000, "fixed", 50) == 50
    assert apply_discount(1000, "fixed", 200) == 200
    assert apply_discount(100, "fixed", 250) == 250


@pytest.mark.parametrize(
    ("kind", "value"),
    [(None, 10), ("percentage", None), (None, None), ("", 10)],
)
def test_apply_discount_missing_fields_means_no_discount(kind, value) -> None:
    assert apply_discount(1000, kind, value) == 0


def test_apply_discount_without_arguments() -> None:
    assert apply_discount(1000) == 0


def test_explicit_zero_discount_equals_absent_discount() -> None:
    assert apply_discount(1000, "percentage", 0) == apply_discount(1000)
    assert apply_discount(1000, "fixed", 0) == apply_discount(1000)
    assert calculate_total(1000, 8.5, "fixed", 0) == calculate_total(1000, 8.5)


def test_apply_discount_rejects_unknown_kind() -> None:
    with pytest.raises(InvalidDiscountKind):
        apply_discount(1000, "bogo", 10)


def test_calculate_tax() -> None:
    assert calculate_tax(1000, 8.5) == 85
    assert calculate_tax(100, 10) == 10
    assert calculate_tax(1000, 0) == 0


def test_calculate_tax_passes_out_of_range_rates_through() -> None:
    assert calculate_tax(100, -5) == -5
    assert calculate_tax(100, 150) == 150


def test_calculate_total_taxes_the_discounted_amount() -> None:
    result = calculate_total(1000, 8.5, "percentage", 10)

    assert result == InvoiceTotals(
        subtotal=Decimal("1000"),
        discount_amount=Decimal("100"),
        tax_amount=Decimal("76.5"),
        total=Decimal("976.5"),
    )


def test_calculate_total_with_fixed_discount() -> None:
    result = calculate_total(1000, 10, "fixed", 50)

    assert result.subtotal == 1000
    assert result.discount_amount == 50
    assert result.tax_amount == 95
    assert result.total == 1045


def test_calculate_total_without_discount() -> None:
    result = calculate_total(1000, 8.5)

    assert result.subtotal == 1000
    assert result.discount_amount == 0
    assert result.tax_amount == 85
    assert result.total == 1085


def test_calculate_total_is_idempotent() -> None:
    first = calculate_total(1234.56, 7.25, "percentage", 12.5)
    second = calculate_total(1234.56, 7.25, "percentage", 12.5)

    assert first == second


@pytest.mark.parametrize(
    ("subtotal", "tax_rate", "kind", "value"),
    [
        (1000, 8.5, "percentage", 10),
        (1000, 10, "fixed", 50),
        ("999.99", "19.6", "percentage", "33.3"),
        (10, 20, "fixed", 25),
        (0, 8.5, None, None),
    ],
)
def test_total_equals_discounted_subtotal_plus_tax(subtotal, tax_rate, kind, value) -> None:
    result = calculate_total(subtotal, tax_rate, kind, value)

    assert result.total == (result.subtotal - result.discount_amount) + result.tax_amount


def test_calculate_invoice_totals_from_draft() -> None:
    draft = InvoiceDraft(
        line_items=_items((10, 100), (5, 50)),
        tax_rate=8.5,
        discount_kind="percentage",
        discount_value=10,
    )

    result = calculate_invoice_totals(draft)

    assert result.subtotal == Decimal("1250")
    assert result.discount_amount == Decimal("125")
    assert result.tax_amount == Decimal("95.625")
    assert result.total == Decimal("1220.625")


def test_calculate_invoice_totals_from_request_payload() -> None:
    payload = {
        "client_id": "1",
        "tax_rate": 8.5,
        "discount_type": "fixed",
        "discount_value": 50,
        "line_items": [
            {"description": "Consulting", "quantity": 10, "rate": 100},
        ],
    }

    result = calculate_invoice_totals(payload)

    assert result.subtotal == 1000
    assert result.discount_amount == 50
    assert result.tax_amount == Decimal("80.75")
    assert result.total == Decimal("1030.75")


def test_round_totals_rounds_half_up() -> None:
    totals = InvoiceTotals(
        subtotal=Decimal("1250"),
        discount_amount=Decimal("125"),
        tax_amount=Decimal("95.625"),
        total=Decimal("1220.625"),
    )

    rounded = round_totals(totals)

    assert rounded.tax_amount == Decimal("95.63")
    assert rounded.total == Decimal("1220.63")
    assert str(rounded.subtotal) == "1250.00"


@pytest.mark.parametrize("value", [None, 0, "0"])
def test_unknown_kind_without_value_agrees_across_entry_points(value) -> None:
    payload = {
        "tax_rate": 8.5,
        "discount_type": "coupon",
        "discount_value": value,
        "line_items": [{"description": "Consulting", "quantity": 10, "rate": 100}],
    }

    from_draft = calculate_invoice_totals(payload)
    from_subtotal = calculate_total(1000, 8.5, "coupon", value)

    assert from_draft == from_subtotal
    assert from_draft.discount_amount == 0
    assert from_draft.total == 1085


def test_nan_discount_value_means_no_discount() -> None:
    assert apply_discount(1000, "percentage", float("nan")) == 0
    assert calculate_total(1000, 10, "fixed", "NaN").total == 1100
