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

"""Checkout service for deriving a checkout object from a cart.

This module provides the `CheckoutService` class, which computes the checkout
summary of a cart (item, fulfillment, tax, surcharge and discount totals and
the grand total) and presents each fulfillment group through the
`FulfillmentService`. All of it is arithmetic over the cart document; nothing
is read from or written to storage.
"""

import logging
from typing import Any, Mapping, Optional, Union

from cart_checkout import config
from cart_checkout.enums import NullFulfillmentTotalPolicy
from cart_checkout.exceptions import InvalidCartError
from cart_checkout.models import Cart
from cart_checkout.models import Checkout
from cart_checkout.models import CheckoutSummary
from cart_checkout.money import NAN
from cart_checkout.money import divide
from cart_checkout.money import is_absent
from cart_checkout.money import is_nan
from cart_checkout.money import money
from cart_checkout.money import operand
from cart_checkout.money import or_zero
from cart_checkout.rates import RateFormatter
from cart_checkout.rates import get_rate_object_for_rate
from cart_checkout.services.fulfillment_service import FulfillmentService
from cart_checkout.services.tax_service import calculate_pre_tax_pricing_tax_total
import pydantic

logger = logging.getLogger(__name__)


def parse_cart(cart: Union[Cart, Mapping[str, Any]]) -> Cart:
  """Validates a raw cart document, passing parsed carts through."""
  if isinstance(cart, Cart):
    return cart
  try:
    return Cart.model_validate(cart)
  except pydantic.ValidationError as e:
    raise InvalidCartError(f"Invalid cart document: {e}") from e


class CheckoutService:
  """Service for composing checkout objects from carts."""

  def __init__(
      self,
      fulfillment_service: Optional[FulfillmentService] = None,
      rate_formatter: Optional[RateFormatter] = None,
      null_fulfillment_total: Optional[NullFulfillmentTotalPolicy] = None,
  ):
    self.fulfillment_service = fulfillment_service or FulfillmentService()
    self.rate_formatter = rate_formatter or get_rate_object_for_rate
    self._null_fulfillment_total = null_fulfillment_total

  @property
  def null_fulfillment_total(self) -> NullFulfillmentTotalPolicy:
    if self._null_fulfillment_total is not None:
      return self._null_fulfillment_total
    return config.get_null_fulfillment_total_policy()

  async def xform_cart_checkout(
      self,
      collections: Any,
      cart: Union[Cart, Mapping[str, Any]],
  ) -> Checkout:
    """Derives the checkout object for a cart.

    Args:
      collections: Storage handle of the caller. Not used.
      cart: The cart document, with items already transformed.

    Returns:
      The checkout object.
    """
    del collections  # Unused.
    return self.build_checkout(cart)

  def build_checkout(self, cart: Union[Cart, Mapping[str, Any]]) -> Checkout:
    """Synchronous form of `xform_cart_checkout`."""
    cart = parse_cart(cart)
    currency_code = cart.currency_code
    logger.info("Composing checkout for cart %s", cart.id)

    item_total = sum(operand(item.subtotal, "amount") for item in cart.items)

    # If there are no selected shipping methods, fulfillment_total is None
    fulfillment_groups = cart.shipping or []
    fulfillment_total = None
    shipping_total = 0
    handling_total = 0
    has_selected_shipment_method = False
    for fulfillment_group in fulfillment_groups:
      method = fulfillment_group.shipment_method
      if method is not None:
        has_selected_shipment_method = True
        shipping_total += or_zero(method.rate)
        handling_total += or_zero(method.handling)
    if has_selected_shipment_method:
      fulfillment_total = shipping_total + handling_total

    tax_summary = cart.tax_summary
    tax_total = None
    has_tax_total = False
    taxable_amount = None
    taxes = None
    if tax_summary is not None:
      tax_total = tax_summary.tax
      # Only an explicit null tax means no tax total; a missing key does not.
      has_tax_total = tax_total is not None or is_absent(tax_summary, "tax")
      taxable_amount = tax_summary.taxable_amount
      taxes = tax_summary.taxes

    pre_tax_pricing_tax_total = calculate_pre_tax_pricing_tax_total(taxes)
    discount_total = or_zero(cart.discount)
    surcharge_total = sum(
        operand(surcharge, "amount") for surcharge in cart.surcharges or []
    )

    total = self._total(
        item_total=item_total,
        fulfillment_total=fulfillment_total,
        pre_tax_pricing_tax_total=pre_tax_pricing_tax_total,
        surcharge_total=surcharge_total,
        discount_total=discount_total,
    )
    logger.debug(
        "Cart %s totals: items=%s fulfillment=%s tax=%s surcharges=%s"
        " discount=%s total=%s",
        cart.id,
        item_total,
        fulfillment_total,
        pre_tax_pricing_tax_total,
        surcharge_total,
        discount_total,
        total,
    )

    fulfillment_total_money = None
    if fulfillment_total is not None:
      fulfillment_total_money = money(fulfillment_total, currency_code)

    tax_total_money = None
    effective_tax_rate = None
    if has_tax_total:
      tax_total_money = money(tax_total, currency_code)
      effective_tax_rate = self.rate_formatter(
          divide(
              operand(tax_summary, "tax"),
              operand(tax_summary, "taxable_amount"),
          )
      )

    checkout_groups = [
        self.fulfillment_service.xform_cart_fulfillment_group(group, cart)
        for group in fulfillment_groups
    ]
    checkout_groups = [group for group in checkout_groups if group]

    return Checkout(
        fulfillment_groups=checkout_groups,
        summary=CheckoutSummary(
            discount_total=money(discount_total, currency_code),
            effective_tax_rate=effective_tax_rate,
            fulfillment_total=fulfillment_total_money,
            item_total=money(item_total, currency_code),
            taxable_amount=money(taxable_amount, currency_code),
            tax_total=tax_total_money,
            surcharge_total=money(surcharge_total, currency_code),
            total=money(total, currency_code),
        ),
    )

  def _total(
      self,
      item_total: float,
      fulfillment_total: Optional[float],
      pre_tax_pricing_tax_total: float,
      surcharge_total: float,
      discount_total: float,
  ) -> float:
    """Computes the grand total, floored at 0 unless it is NaN."""
    if fulfillment_total is None:
      if self.null_fulfillment_total == NullFulfillmentTotalPolicy.PROPAGATE:
        logger.debug("No selected shipment method; total is undefined")
        fulfillment_total = NAN
      else:
        fulfillment_total = 0

    total = (
        item_total
        + fulfillment_total
        + pre_tax_pricing_tax_total
        + surcharge_total
        - discount_total
    )
    if is_nan(total):
      return total
    return max(0, total)
