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

"""Default rate formatter for effective tax rates."""

import math
from typing import Any, Callable, Optional

from cart_checkout.models import Rate
from cart_checkout.money import or_zero

RateFormatter = Callable[[float], Any]

# Enough digits for any real rate while dropping binary float noise such as
# 0.1 * 100 == 10.000000000000002.
_PERCENT_DIGITS = 10


def _format_percent(percent: float) -> str:
  if math.isinf(percent):
    return "Infinity" if percent > 0 else "-Infinity"
  percent = round(float(percent), _PERCENT_DIGITS)
  if percent.is_integer():
    return str(int(percent))
  return repr(percent)


def get_rate_object_for_rate(rate: Optional[float]) -> Rate:
  """Builds a display rate from a fraction.

  Args:
    rate: A fraction, e.g. 0.2 for 20%. Missing or NaN rates become 0.

  Returns:
    A Rate with the fraction, its percent value and a display string.
  """
  amount = or_zero(rate)
  percent = amount * 100
  return Rate(
      amount=amount,
      percent=percent,
      display_percent=f"{_format_percent(percent)}%",
  )
