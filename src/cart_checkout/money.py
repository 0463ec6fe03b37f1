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

"""Numeric helpers shared by the checkout transforms.

Amounts in a cart document are loosely typed. Where a default of zero
applies, a missing, null, NaN or zero value all give 0. Where an amount is
used directly in arithmetic, a null value counts as 0 while a missing key
makes the result NaN. These helpers keep both rules in one place.
"""

import math
from typing import Optional

from cart_checkout.models import Money
from pydantic import BaseModel

NAN = float("nan")


def is_nan(value: Optional[float]) -> bool:
  return value is not None and math.isnan(value)


def is_absent(model: BaseModel, field: str) -> bool:
  """Whether `field` was missing from the document `model` was parsed from."""
  return field not in model.model_fields_set


def or_zero(value: Optional[float]) -> float:
  """Returns `value`, or 0 when it is missing, null, NaN or zero."""
  if value is None or math.isnan(value):
    return 0
  return value


def operand(model: BaseModel, field: str) -> float:
  """Returns an amount for arithmetic: NaN when absent, 0 when null."""
  if is_absent(model, field):
    return NAN
  value = getattr(model, field)
  if value is None:
    return 0
  return value


def divide(numerator: float, denominator: float) -> float:
  """Divides with IEEE semantics instead of raising on a zero denominator."""
  if denominator == 0:
    if numerator == 0 or math.isnan(numerator):
      return NAN
    return math.copysign(math.inf, numerator) * math.copysign(1, denominator)
  return numerator / denominator


def money(amount: Optional[float], currency_code: Optional[str]) -> Money:
  return Money(amount=amount, currency_code=currency_code)
