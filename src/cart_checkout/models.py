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

"""Cart document and checkout models.

Cart models parse the stored cart document (camelCase keys, `_id`
identifiers). Unknown keys are kept so that already-transformed line items
pass through to the checkout unchanged. Numeric fields default to None; a key
that was sent as null is told apart from a missing key through
`model_fields_set`. Only values the transforms dereference (an item's
`subtotal`, a group's `itemIds`, a quote's `method`) are required. Checkout
models describe the
presentation shape returned to the API layer and serialize back to camelCase.
"""

from typing import Any, List, Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic.alias_generators import to_camel


class CartModel(BaseModel):
  """Base class for all cart document types."""

  model_config = ConfigDict(
      alias_generator=to_camel,
      populate_by_name=True,
      serialize_by_alias=True,
      extra="allow",
  )


class CheckoutModel(BaseModel):
  """Base class for all checkout response types."""

  model_config = ConfigDict(
      alias_generator=to_camel,
      populate_by_name=True,
      serialize_by_alias=True,
  )


# --- Cart document ---


class ItemSubtotal(CartModel):
  amount: Optional[float] = None
  currency_code: Optional[str] = None


class CartItem(CartModel):
  """A line item; subtotal is already quantity times unit price."""

  id: Optional[str] = Field(default=None, alias="_id")
  subtotal: ItemSubtotal


class ShipmentMethod(CartModel):
  """A shipping method, either quoted or selected on a fulfillment group."""

  id: Optional[str] = Field(default=None, alias="_id")
  carrier: Optional[str] = None
  label: Optional[str] = None
  name: Optional[str] = None
  group: Optional[str] = None
  fulfillment_types: Optional[List[str]] = None
  rate: Optional[float] = None
  handling: Optional[float] = None


class ShipmentQuote(CartModel):
  method: ShipmentMethod
  handling_price: Optional[float] = None
  shipping_price: Optional[float] = None
  rate: Optional[float] = None


class CartFulfillmentGroup(CartModel):
  """Items shipped together to one address."""

  id: Optional[str] = Field(default=None, alias="_id")
  shop_id: Optional[str] = None
  address: Optional[dict[str, Any]] = None
  item_ids: List[str]
  shipment_quotes: Optional[List[ShipmentQuote]] = None
  shipment_method: Optional[ShipmentMethod] = None


class TaxCustomFields(CartModel):
  after_tax_pricing: Optional[bool] = None


class TaxLine(CartModel):
  tax: Optional[float] = None
  custom_fields: Optional[TaxCustomFields] = None


class TaxSummary(CartModel):
  tax: Optional[float] = None
  taxable_amount: Optional[float] = None
  taxes: Optional[List[TaxLine]] = None


class Surcharge(CartModel):
  amount: Optional[float] = None


class Cart(CartModel):
  """Cart document as stored by the cart service."""

  id: Optional[str] = Field(default=None, alias="_id")
  shop_id: Optional[str] = None
  currency_code: Optional[str] = None
  items: List[CartItem] = Field(default_factory=list)
  shipping: Optional[List[CartFulfillmentGroup]] = None
  discount: Optional[float] = None
  surcharges: Optional[List[Surcharge]] = None
  tax_summary: Optional[TaxSummary] = None


# --- Checkout ---


class Money(CheckoutModel):
  amount: Optional[float]
  currency_code: Optional[str]


class Rate(CheckoutModel):
  """Display form of a fractional rate such as an effective tax rate."""

  amount: float
  percent: float
  display_percent: str


class FulfillmentMethod(CheckoutModel):
  id: Optional[str] = Field(default=None, alias="_id")
  carrier: Optional[str] = None
  display_name: Optional[str] = None
  group: Optional[str] = None
  name: Optional[str] = None
  fulfillment_types: Optional[List[str]] = None


class FulfillmentOption(CheckoutModel):
  """A quoted option the buyer can still pick."""

  fulfillment_method: FulfillmentMethod
  handling_price: Money
  shipping_price: Money
  price: Money


class SelectedFulfillmentOption(CheckoutModel):
  fulfillment_method: FulfillmentMethod
  handling_price: Money
  price: Money


class FulfillmentGroupData(CheckoutModel):
  shipping_address: Optional[dict[str, Any]] = None


class CheckoutFulfillmentGroup(CheckoutModel):
  """Presentation shape of one cart fulfillment group."""

  id: Optional[str] = Field(default=None, alias="_id")
  available_fulfillment_options: List[FulfillmentOption]
  data: FulfillmentGroupData
  items: List[CartItem]
  selected_fulfillment_option: Optional[SelectedFulfillmentOption] = None
  shipping_address: Optional[dict[str, Any]] = None
  shop_id: Optional[str] = None
  type: str


class CheckoutSummary(CheckoutModel):
  discount_total: Money
  # Shape is owned by the rate formatter in use.
  effective_tax_rate: Any = None
  fulfillment_total: Optional[Money] = None
  item_total: Money
  taxable_amount: Money
  tax_total: Optional[Money] = None
  surcharge_total: Money
  total: Money


class Checkout(CheckoutModel):
  """Checkout object derived from a cart."""

  fulfillment_groups: List[CheckoutFulfillmentGroup]
  summary: CheckoutSummary

  def get_fulfillment_group(
      self, group_id: str
  ) -> Optional[CheckoutFulfillmentGroup]:
    """Returns the transformed group with the given `_id`, if any."""
    return next(
        (g for g in self.fulfillment_groups if g.id == group_id), None
    )
