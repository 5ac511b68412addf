# usage_example.py
# Minimal usage example for objdiff.StrictObjectDiff.
# This file is not part of the objdiff package. For reference only.

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from objdiff import StrictObjectDiff, format_differences


@dataclass
class Line:
    sku: str
    quantity: int
    price: Decimal


@dataclass
class Order:
    number: str
    lines: List[Line] = field(default_factory=list)
    note: Optional[str] = None


# Configure once
differ = StrictObjectDiff()
differ.add_default_value_types()
differ.add_descend_into_type(Order)
differ.add_descend_into_type(Line)
differ.set_max_decimal_scale(2)

# Compare
expected = Order("A-1", [Line("apple", 2, Decimal("0.50")), Line("pear", 1, Decimal("0.75"))])
actual   = Order("A-1", [Line("apple", 2, Decimal("0.5")), Line("pear", 3, Decimal("0.749"))], note="gift")

differences = differ.compare(expected, actual)
print(format_differences(differences, "Order"))

# Expected output:
# 2 difference(s) between Order instances:
#   lines[1].quantity: 1 != 3
#   note: 'null' != 'gift'
#
# Decimal('0.50') vs Decimal('0.5') and Decimal('0.75') vs Decimal('0.749')
# compare equal: trailing zeros are stripped and both sides are rounded
# half-up to two places.

# Error examples:
# differ.compare(expected, None)                 # NullInputError
# differ.compare(expected, actual.lines[0])      # TypeMismatchError
# differ.add_descend_into_type(SomeEnum)         # InvalidConfigurationError
