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

"""Checkout summaries and fulfillment groups derived from shopping carts.

    checkout = await cart_checkout.xform_cart_checkout(collections, cart)
    checkout.model_dump(mode="json")
"""

from typing import Any, Mapping, Optional, Union

from cart_checkout.enums import FulfillmentType
from cart_checkout.enums import NullFulfillmentTotalPolicy
from cart_checkout.exceptions import CheckoutError
from cart_checkout.exceptions import InvalidCartError
from cart_checkout.models import Cart
from cart_checkout.models import CartFulfillmentGroup
from cart_checkout.models import Checkout
from cart_checkout.models import CheckoutFulfillmentGroup
from cart_checkout.models import Money
from cart_checkout.models import Rate
from cart_checkout.rates import RateFormatter
from cart_checkout.rates import get_rate_object_for_rate
from cart_checkout.services.checkout_service import CheckoutService
from cart_checkout.services.checkout_service import parse_cart
from cart_checkout.services.fulfillment_service import FulfillmentService
from cart_checkout.services.tax_service import calculate_pre_tax_pricing_tax_total

__version__ = "0.1.0"


async def xform_cart_checkout(
    collections: Any,
    cart: Union[Cart, Mapping[str, Any]],
    *,
    rate_formatter: Optional[RateFormatter] = None,
    null_fulfillment_total: Optional[NullFulfillmentTotalPolicy] = None,
) -> Checkout:
  """Derives the checkout object for a cart with a one-off service."""
  service = CheckoutService(
      rate_formatter=rate_formatter,
      null_fulfillment_total=null_fulfillment_total,
  )
  return await service.xform_cart_checkout(collections, cart)


def xform_cart_fulfillment_group(
    fulfillment_group: CartFulfillmentGroup, cart: Cart
) -> CheckoutFulfillmentGroup:
  """Transforms one fulfillment group of a parsed cart."""
  return FulfillmentService().xform_cart_fulfillment_group(
      fulfillment_group, cart
  )


__all__ = (
    "Cart",
    "Checkout",
    "CheckoutError",
    "CheckoutService",
    "FulfillmentService",
    "FulfillmentType",
    "InvalidCartError",
    "Money",
    "NullFulfillmentTotalPolicy",
    "Rate",
    "RateFormatter",
    "calculate_pre_tax_pricing_tax_total",
    "get_rate_object_for_rate",
    "parse_cart",
    "xform_cart_checkout",
    "xform_cart_fulfillment_group",
)
