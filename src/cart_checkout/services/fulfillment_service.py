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

"""Fulfillment service for presenting cart fulfillment groups.

This module reshapes a stored fulfillment group, with its raw shipment
quotes, into the options and selection shown at checkout.
"""

import logging

from cart_checkout.enums import FulfillmentType
from cart_checkout.models import Cart
from cart_checkout.models import CartFulfillmentGroup
from cart_checkout.models import CheckoutFulfillmentGroup
from cart_checkout.models import FulfillmentGroupData
from cart_checkout.models import FulfillmentMethod
from cart_checkout.models import FulfillmentOption
from cart_checkout.models import SelectedFulfillmentOption
from cart_checkout.models import ShipmentMethod
from cart_checkout.money import money
from cart_checkout.money import operand
from cart_checkout.money import or_zero

logger = logging.getLogger(__name__)


def _xform_fulfillment_method(method: ShipmentMethod) -> FulfillmentMethod:
  return FulfillmentMethod(
      id=method.id,
      carrier=method.carrier or None,
      display_name=method.label or method.name,
      group=method.group or None,
      name=method.name,
      fulfillment_types=method.fulfillment_types,
  )


class FulfillmentService:
  """Service for handling fulfillment group presentation."""

  def xform_cart_fulfillment_group(
      self,
      fulfillment_group: CartFulfillmentGroup,
      cart: Cart,
  ) -> CheckoutFulfillmentGroup:
    """Transforms a single fulfillment group.

    Args:
      fulfillment_group: The stored fulfillment group.
      cart: The full cart, with items already transformed.

    Returns:
      The group with available options, the selected option and its items.
    """
    currency_code = cart.currency_code

    available_fulfillment_options = []
    for quote in fulfillment_group.shipment_quotes or []:
      available_fulfillment_options.append(
          FulfillmentOption(
              fulfillment_method=_xform_fulfillment_method(quote.method),
              handling_price=money(
                  or_zero(quote.handling_price), currency_code
              ),
              shipping_price=money(
                  or_zero(quote.shipping_price), currency_code
              ),
              price=money(
                  or_zero(
                      operand(quote, "rate")
                      + operand(quote, "handling_price")
                  ),
                  currency_code,
              ),
          )
      )

    selected_fulfillment_option = None
    method = fulfillment_group.shipment_method
    if method is not None:
      selected_fulfillment_option = SelectedFulfillmentOption(
          fulfillment_method=_xform_fulfillment_method(method),
          handling_price=money(or_zero(method.handling), currency_code),
          price=money(
              or_zero(operand(method, "rate") + operand(method, "handling")),
              currency_code,
          ),
      )

    # Only one group is ever set today, so it holds all of the items.
    item_ids = set(fulfillment_group.item_ids)
    items = [item for item in cart.items if item.id in item_ids]

    logger.debug(
        "Fulfillment group %s: %d options, %d items, selected=%s",
        fulfillment_group.id,
        len(available_fulfillment_options),
        len(items),
        method.id if method else None,
    )

    return CheckoutFulfillmentGroup(
        id=fulfillment_group.id,
        available_fulfillment_options=available_fulfillment_options,
        data=FulfillmentGroupData(shipping_address=fulfillment_group.address),
        items=items,
        selected_fulfillment_option=selected_fulfillment_option,
        shipping_address=fulfillment_group.address,
        shop_id=fulfillment_group.shop_id,
        # Always shipping until download, pickup, etc. types exist.
        type=FulfillmentType.SHIPPING.value,
    )
