from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from objdiff import (
    FieldDifference,
    InvalidConfigurationError,
    LaxObjectDiff,
    NullInputError,
    ObjectDiff,
    TypeMismatchError,
)


@dataclass
class Line:
    sku: str
    quantity: int
    price: Decimal


@dataclass
class Order:
    number: str
    lines: List[Line] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)
    note: Optional[str] = None
    total: Optional[Decimal] = None
    rate: float = 0.0


@dataclass(eq=False)
class Link:
    value: int
    next: Optional[Link] = None


class Account:
    """Plain class: fields come from the instance dictionary."""

    def __init__(self, owner: str, balance: Decimal) -> None:
        self.owner = owner
        self._balance = balance


def _order(**overrides) -> Order:
    values = dict(
        number="A-1",
        lines=[
            Line("apple", 2, Decimal("0.50")),
            Line("pear", 1, Decimal("0.75")),
        ],
        attributes={"channel": "web"},
        note=None,
        total=Decimal("1.75"),
        rate=0.2,
    )
    values.update(overrides)
    return Order(**values)


def _qualified(cls: type) -> str:
    return cls.__module__ + "." + cls.__qualname__


class TestUnregisteredTypes:

    def test_identical_orders(self, lax_differ):
        assert lax_differ.compare(_order(), _order()) == []

    def test_unregistered_elements_compared_with_eq(self, lax_differ):
        one = _order()
        two = _order(lines=[Line("apple", 2, Decimal("0.50")), Line("pear", 3, Decimal("0.75"))])
        assert lax_differ.compare(one, two) == [
            FieldDifference(("lines[1]",), one.lines[1], two.lines[1]),
        ]

    def test_any_type_accepted(self, lax_differ):
        one = _order(attributes={"when": object})
        assert lax_differ.compare(one, _order(attributes={"when": object})) == []

    def test_mapping_compared_whole(self, lax_differ):
        assert lax_differ.compare(
            _order(attributes={"channel": "web"}),
            _order(attributes={"channel": "store"}),
        ) == [FieldDifference(("attributes",), {"channel": "web"}, {"channel": "store"})]

    def test_float_field(self, lax_differ):
        assert lax_differ.compare(_order(rate=0.2), _order(rate=0.3)) == [
            FieldDifference(("rate",), 0.2, 0.3),
        ]

    def test_decimal_fields_still_tolerant(self, lax_differ):
        assert lax_differ.compare(
            _order(total=Decimal("1.750")),
            _order(total=Decimal("1.75")),
        ) == []

    def test_null_field(self, lax_differ):
        assert lax_differ.compare(_order(note="gift"), _order(note=None)) == [
            FieldDifference(("note",), "gift", "null"),
        ]


class TestDescendInto:

    def test_registered_type_reports_leaf_paths(self, lax_differ):
        lax_differ.add_descend_into_type(Line)
        one = _order()
        two = _order(lines=[Line("apple", 2, Decimal("0.50")), Line("pear", 3, Decimal("0.80"))])
        assert lax_differ.compare(one, two) == [
            FieldDifference(("lines[1]", "quantity"), 1, 3),
            FieldDifference(("lines[1]", "price"), Decimal("0.75"), Decimal("0.80")),
        ]

    def test_registration_by_name(self, lax_differ):
        lax_differ.add_descend_into_type(_qualified(Line))
        two = _order(lines=[Line("apple", 5, Decimal("0.50")), Line("pear", 1, Decimal("0.75"))])
        assert lax_differ.compare(_order(), two) == [
            FieldDifference(("lines[0]", "quantity"), 2, 5),
        ]

    def test_removed_type_back_to_equality(self, lax_differ):
        lax_differ.add_descend_into_type(Line)
        lax_differ.remove_descend_into_type(Line)
        one = _order()
        two = _order(lines=[Line("apple", 5, Decimal("0.50")), Line("pear", 1, Decimal("0.75"))])
        differences = lax_differ.compare(one, two)
        assert [d.path for d in differences] == [("lines[0]",)]

    def test_length_mismatch_with_registered_elements(self, lax_differ):
        lax_differ.add_descend_into_type(Line)
        two = _order(lines=[Line("apple", 2, Decimal("0.50"))])
        assert lax_differ.compare(_order(), two) == [
            FieldDifference(("lines.size()",), 2, 1),
        ]

    def test_plain_class_fields(self, lax_differ):
        differences = lax_differ.compare(
            Account("ada", Decimal("5.00")),
            Account("ada", Decimal("5.01")),
        )
        assert differences == [
            FieldDifference(("_balance",), Decimal("5.00"), Decimal("5.01")),
        ]

    def test_ignored_instance_attribute_of_plain_class(self, lax_differ):
        lax_differ.add_ignore_field(Account, "owner")
        assert lax_differ.compare(
            Account("ada", Decimal("5.00")),
            Account("grace", Decimal("5.00")),
        ) == []

    def test_ignored_field_skipped(self, lax_differ):
        lax_differ.add_ignore_field(Order, "rate")
        assert lax_differ.compare(_order(rate=0.1), _order(rate=0.9)) == []


class TestLaxConfiguration:

    def test_value_types_rejected(self, lax_differ):
        with pytest.raises(InvalidConfigurationError):
            lax_differ.add_value_type(str)

    def test_default_value_types_rejected(self, lax_differ):
        with pytest.raises(InvalidConfigurationError):
            lax_differ.add_default_value_types()

    def test_not_strict(self, lax_differ):
        assert lax_differ.strict is False

    def test_base_engine_defaults_to_lax(self):
        assert ObjectDiff().strict is False

    def test_scale_without_normalization(self, lax_differ):
        lax_differ.set_ignore_decimal_trailing_zeros(False)
        assert lax_differ.compare(
            _order(total=Decimal("1.750")),
            _order(total=Decimal("1.75")),
        ) == [FieldDifference(("total",), Decimal("1.750"), Decimal("1.75"))]
        lax_differ.set_max_decimal_scale(2)
        assert lax_differ.compare(
            _order(total=Decimal("1.750")),
            _order(total=Decimal("1.75")),
        ) == []


class TestLaxErrorsAndLimits:

    def test_null_input(self, lax_differ):
        with pytest.raises(NullInputError):
            lax_differ.compare(_order(), None)

    def test_type_mismatch(self, lax_differ):
        with pytest.raises(TypeMismatchError) as excinfo:
            lax_differ.compare(_order(), Line("a", 1, Decimal("1")))
        assert excinfo.value.stack == ()

    def test_acyclic_chain(self, lax_differ):
        lax_differ.add_descend_into_type(Link)
        one = Link(1, Link(2, Link(3)))
        two = Link(1, Link(2, Link(4)))
        assert lax_differ.compare(one, two) == [
            FieldDifference(("next", "next", "value"), 3, 4),
        ]

    def test_cyclic_graph_exhausts_recursion(self, lax_differ):
        lax_differ.add_descend_into_type(Link)
        a = Link(1)
        a.next = a
        b = Link(1)
        b.next = b
        with pytest.raises(RecursionError):
            lax_differ.compare(a, b)


class TestLogging:

    def test_comparison_logged_at_debug(self, lax_differ, caplog):
        with caplog.at_level(logging.DEBUG, logger="objdiff.comparator"):
            lax_differ.compare(_order(rate=0.1), _order(rate=0.2))
        messages = [record.getMessage() for record in caplog.records]
        assert "comparison finished: 1 difference(s)" in messages
