#   Copyright 2026 UCP Authors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

"""Tax aggregation across the two tax pricing modes.

With pre-tax pricing, listed prices of products, shipping and surcharges do
not include tax. A product costing $100 with $5 shipping and a 20% tax totals
$105 + 20% * $105 = $126.

With after-tax pricing the same 20% is already part of the $105, so the tax
must not be added to the total again.
"""

from typing import Optional, Sequence

from cart_checkout.models import TaxLine
from cart_checkout.money import is_absent
from cart_checkout.money import operand


def calculate_pre_tax_pricing_tax_total(
    taxes: Optional[Sequence[TaxLine]],
) -> float:
  """Sums the taxes that still have to be added to the cart total.

  Args:
    taxes: All taxes applied to the cart, if any were calculated.

  Returns:
    The tax total for all pre-tax pricing taxes. A single tax line with a
    null amount makes the whole total 0; a line with no amount at all makes
    it NaN.
  """
  if not taxes:
    return 0

  pre_tax_pricing_tax_total = 0
  for tax_line in taxes:
    if tax_line.tax is None and not is_absent(tax_line, "tax"):
      return 0
    custom_fields = tax_line.custom_fields
    if not custom_fields or not custom_fields.after_tax_pricing:
      pre_tax_pricing_tax_total += operand(tax_line, "tax")

  return pre_tax_pricing_tax_total
