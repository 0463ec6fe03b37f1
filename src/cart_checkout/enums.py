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

"""Enumerations for the cart checkout transforms."""

import enum


class FulfillmentType(str, enum.Enum):
  SHIPPING = "shipping"


class NullFulfillmentTotalPolicy(str, enum.Enum):
  """How a missing fulfillment total enters the grand total.

  ZERO counts it as 0. PROPAGATE makes the grand total NaN, so a cart without
  a selected shipping method never reports a payable total.
  """

  ZERO = "zero"
  PROPAGATE = "propagate"
