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

"""Tests for the checkout composition."""

import asyncio
import copy
import math
from typing import Any, Dict

from absl.testing import absltest
from absl.testing import parameterized
import cart_checkout
from cart_checkout.enums import NullFulfillmentTotalPolicy
from cart_checkout.exceptions import CheckoutError
from cart_checkout.exceptions import InvalidCartError
from cart_checkout.models import Rate
from cart_checkout.services.checkout_service import CheckoutService

BASE_CART = {
    "_id": "cart_1",
    "shopId": "shop_1",
    "currencyCode": "EUR",
    "items": [
        {"_id": "item_1", "subtotal": {"amount": 20}},
        {"_id": "item_2", "subtotal": {"amount": 8}},
    ],
}

SELECTED_METHOD = {
    "_id": "m1",
    "name": "standard",
    "label": "Standard",
    "rate": 10,
    "handling": 2,
}


def _cart(**overrides) -> Dict[str, Any]:
  cart = copy.deepcopy(BASE_CART)
  cart.update(overrides)
  return cart


def _group(group_id="group_1", item_ids=("item_1", "item_2"), **fields):
  group = {"_id": group_id, "shopId": "shop_1", "itemIds": list(item_ids)}
  group.update(fields)
  return group


class CheckoutServiceTest(parameterized.TestCase):
  """Tests for CheckoutService."""

  def setUp(self) -> None:
    super().setUp()
    self.service = CheckoutService(
        null_fulfillment_total=NullFulfillmentTotalPolicy.ZERO
    )

  def _checkout(self, cart, service=None):
    service = service or self.service
    return asyncio.run(service.xform_cart_checkout(None, cart))

  def test_minimal_cart(self) -> None:
    summary = self._checkout(_cart()).summary
    self.assertEqual(summary.item_total.amount, 28)
    self.assertEqual(summary.discount_total.amount, 0)
    self.assertEqual(summary.surcharge_total.amount, 0)
    self.assertEqual(summary.total.amount, 28)
    self.assertIsNone(summary.taxable_amount.amount)
    self.assertIsNone(summary.tax_total)
    self.assertIsNone(summary.effective_tax_rate)
    self.assertIsNone(summary.fulfillment_total)

  def test_every_money_carries_cart_currency(self) -> None:
    cart = _cart(
        shipping=[_group(shipmentMethod=SELECTED_METHOD)],
        discount=1,
        surcharges=[{"amount": 3}],
        taxSummary={"tax": 2, "taxableAmount": 20, "taxes": [{"tax": 2}]},
    )
    summary = self._checkout(cart).summary
    for field in (
        "discount_total",
        "fulfillment_total",
        "item_total",
        "taxable_amount",
        "tax_total",
        "surcharge_total",
        "total",
    ):
      self.assertEqual(getattr(summary, field).currency_code, "EUR", field)

  def test_empty_shipping(self) -> None:
    checkout = self._checkout(_cart(shipping=[]))
    self.assertEqual(checkout.fulfillment_groups, [])
    self.assertIsNone(checkout.summary.fulfillment_total)

  def test_missing_shipping(self) -> None:
    checkout = self._checkout(_cart())
    self.assertEqual(checkout.fulfillment_groups, [])

  def test_group_without_selected_method(self) -> None:
    checkout = self._checkout(_cart(shipping=[_group()]))
    self.assertLen(checkout.fulfillment_groups, 1)
    self.assertIsNone(checkout.summary.fulfillment_total)

  def test_fulfillment_total_skips_groups_without_method(self) -> None:
    cart = _cart(
        shipping=[
            _group("group_1", item_ids=["item_1"]),
            _group(
                "group_2", item_ids=["item_2"], shipmentMethod=SELECTED_METHOD
            ),
        ]
    )
    checkout = self._checkout(cart)
    self.assertEqual(
        checkout.summary.fulfillment_total.model_dump(),
        {"amount": 12, "currencyCode": "EUR"},
    )
    self.assertEqual(checkout.summary.total.amount, 40)

  def test_fulfillment_total_sums_groups(self) -> None:
    cart = _cart(
        shipping=[
            _group("group_1", shipmentMethod=SELECTED_METHOD),
            _group("group_2", shipmentMethod={"_id": "m2", "rate": 4}),
        ]
    )
    self.assertEqual(self._checkout(cart).summary.fulfillment_total.amount, 16)

  def test_zero_rate_method_still_sets_fulfillment_total(self) -> None:
    cart = _cart(shipping=[_group(shipmentMethod={"_id": "free"})])
    self.assertEqual(self._checkout(cart).summary.fulfillment_total.amount, 0)

  def test_tax_summary(self) -> None:
    formatted = []

    def rate_formatter(rate):
      formatted.append(rate)
      return {"rate": rate}

    service = CheckoutService(
        rate_formatter=rate_formatter,
        null_fulfillment_total=NullFulfillmentTotalPolicy.ZERO,
    )
    cart = _cart(
        items=[{"_id": "item_1", "subtotal": {"amount": 100}}],
        taxSummary={"tax": 10, "taxableAmount": 100, "taxes": [{"tax": 10}]},
    )
    summary = self._checkout(cart, service).summary
    self.assertEqual(formatted, [0.1])
    self.assertEqual(summary.effective_tax_rate, {"rate": 0.1})
    self.assertEqual(summary.tax_total.amount, 10)
    self.assertEqual(summary.taxable_amount.amount, 100)
    self.assertEqual(summary.total.amount, 110)

  def test_default_rate_formatter(self) -> None:
    cart = _cart(
        taxSummary={"tax": 5, "taxableAmount": 20, "taxes": [{"tax": 5}]}
    )
    summary = self._checkout(cart).summary
    self.assertIsInstance(summary.effective_tax_rate, Rate)
    self.assertEqual(summary.effective_tax_rate.amount, 0.25)
    self.assertEqual(
        summary.model_dump(mode="json")["effectiveTaxRate"],
        {"amount": 0.25, "percent": 25.0, "displayPercent": "25%"},
    )

  def test_after_tax_pricing_not_added_to_total(self) -> None:
    cart = _cart(
        taxSummary={
            "tax": 5,
            "taxableAmount": 28,
            "taxes": [{"tax": 5, "customFields": {"afterTaxPricing": True}}],
        }
    )
    summary = self._checkout(cart).summary
    self.assertEqual(summary.tax_total.amount, 5)
    self.assertEqual(summary.total.amount, 28)

  def test_null_tax_line_adds_no_tax(self) -> None:
    cart = _cart(
        taxSummary={
            "tax": 5,
            "taxableAmount": 28,
            "taxes": [{"tax": 5}, {"tax": None}],
        }
    )
    self.assertEqual(self._checkout(cart).summary.total.amount, 28)

  def test_null_summary_tax_has_no_tax_total(self) -> None:
    cart = _cart(taxSummary={"tax": None, "taxableAmount": 28, "taxes": []})
    summary = self._checkout(cart).summary
    self.assertIsNone(summary.tax_total)
    self.assertIsNone(summary.effective_tax_rate)
    self.assertEqual(summary.taxable_amount.amount, 28)

  def test_zero_taxable_amount_does_not_raise(self) -> None:
    cart = _cart(taxSummary={"tax": 0, "taxableAmount": 0, "taxes": []})
    summary = self._checkout(cart).summary
    self.assertEqual(summary.tax_total.amount, 0)
    self.assertEqual(summary.effective_tax_rate.amount, 0)

  def test_discount_and_surcharges(self) -> None:
    cart = _cart(discount=5, surcharges=[{"amount": 1.5}, {"amount": 2.5}])
    summary = self._checkout(cart).summary
    self.assertEqual(summary.discount_total.amount, 5)
    self.assertEqual(summary.surcharge_total.amount, 4)
    self.assertEqual(summary.total.amount, 27)

  @parameterized.parameters(100, 28.01, 1e9)
  def test_total_floored_at_zero(self, discount) -> None:
    summary = self._checkout(_cart(discount=discount)).summary
    self.assertEqual(summary.total.amount, 0)

  def test_nan_discount_is_zero(self) -> None:
    summary = self._checkout(_cart(discount=math.nan)).summary
    self.assertEqual(summary.discount_total.amount, 0)
    self.assertEqual(summary.total.amount, 28)

  def test_propagate_policy_without_fulfillment_total(self) -> None:
    service = CheckoutService(
        null_fulfillment_total=NullFulfillmentTotalPolicy.PROPAGATE
    )
    summary = self._checkout(_cart(discount=100), service).summary
    self.assertTrue(math.isnan(summary.total.amount))
    self.assertIsNone(summary.fulfillment_total)

  def test_propagate_policy_with_fulfillment_total(self) -> None:
    service = CheckoutService(
        null_fulfillment_total=NullFulfillmentTotalPolicy.PROPAGATE
    )
    cart = _cart(shipping=[_group(shipmentMethod=SELECTED_METHOD)])
    self.assertEqual(self._checkout(cart, service).summary.total.amount, 40)

  def test_policy_defaults_to_zero(self) -> None:
    self.assertEqual(
        CheckoutService().null_fulfillment_total,
        NullFulfillmentTotalPolicy.ZERO,
    )

  def test_unassigned_items_are_excluded_from_groups(self) -> None:
    cart = _cart(
        items=[
            {"_id": "item_1", "subtotal": {"amount": 20}},
            {"_id": "item_2", "subtotal": {"amount": 8}},
            {"_id": "item_3", "subtotal": {"amount": 4}},
        ],
        shipping=[_group(item_ids=["item_1", "item_3"])],
    )
    checkout = self._checkout(cart)
    grouped_ids = [
        item.id for group in checkout.fulfillment_groups for item in group.items
    ]
    self.assertEqual(grouped_ids, ["item_1", "item_3"])
    self.assertNotIn("item_2", grouped_ids)
    # Unassigned items still count towards the item total.
    self.assertEqual(checkout.summary.item_total.amount, 32)

  def test_get_fulfillment_group(self) -> None:
    cart = _cart(
        shipping=[
            _group("group_1", item_ids=["item_1"]),
            _group("group_2", item_ids=["item_2"]),
        ]
    )
    checkout = self._checkout(cart)
    group = checkout.get_fulfillment_group("group_2")
    self.assertEqual([item.id for item in group.items], ["item_2"])
    self.assertIsNone(checkout.get_fulfillment_group("group_3"))

  def test_build_checkout_accepts_parsed_cart(self) -> None:
    cart = cart_checkout.parse_cart(_cart())
    self.assertEqual(self.service.build_checkout(cart).summary.total.amount, 28)

  def test_serializes_wire_shape(self) -> None:
    cart = _cart(shipping=[_group(shipmentMethod=SELECTED_METHOD)])
    dumped = self._checkout(cart).model_dump(mode="json")
    self.assertEqual(set(dumped), {"fulfillmentGroups", "summary"})
    self.assertEqual(
        set(dumped["summary"]),
        {
            "discountTotal",
            "effectiveTaxRate",
            "fulfillmentTotal",
            "itemTotal",
            "taxableAmount",
            "taxTotal",
            "surchargeTotal",
            "total",
        },
    )
    self.assertEqual(
        dumped["summary"]["total"], {"amount": 40.0, "currencyCode": "EUR"}
    )

  @parameterized.named_parameters(
      ("missing_subtotal", {"items": [{"_id": "item_1"}]}),
      ("missing_item_ids", {"shipping": [{"_id": "group_1"}]}),
      (
          "missing_quote_method",
          {"shipping": [_group(shipmentQuotes=[{"rate": 5}])]},
      ),
  )
  def test_invalid_cart(self, overrides) -> None:
    with self.assertRaises(InvalidCartError) as cm:
      self._checkout(_cart(**overrides))
    self.assertIsInstance(cm.exception, CheckoutError)
    self.assertEqual(cm.exception.code, "INVALID_CART")

  def test_null_surcharge_amount_counts_as_zero(self) -> None:
    cart = _cart(
        items=[{"_id": "item_1", "subtotal": {"amount": 10}}],
        surcharges=[{"amount": None}],
    )
    summary = self._checkout(cart).summary
    self.assertEqual(summary.surcharge_total.amount, 0)
    self.assertEqual(summary.total.amount, 10)

  def test_missing_surcharge_amount_makes_total_nan(self) -> None:
    summary = self._checkout(_cart(surcharges=[{}])).summary
    self.assertTrue(math.isnan(summary.surcharge_total.amount))
    self.assertTrue(math.isnan(summary.total.amount))

  def test_null_subtotal_amount_counts_as_zero(self) -> None:
    cart = _cart(
        items=[
            {"_id": "item_1", "subtotal": {"amount": 20}},
            {"_id": "item_2", "subtotal": {"amount": None}},
        ]
    )
    summary = self._checkout(cart).summary
    self.assertEqual(summary.item_total.amount, 20)
    self.assertEqual(summary.total.amount, 20)

  def test_missing_subtotal_amount_makes_total_nan(self) -> None:
    cart = _cart(
        items=[
            {"_id": "item_1", "subtotal": {"amount": 20}},
            {"_id": "item_2", "subtotal": {}},
        ]
    )
    summary = self._checkout(cart).summary
    self.assertTrue(math.isnan(summary.item_total.amount))
    self.assertTrue(math.isnan(summary.total.amount))

  def test_tax_line_without_amount_makes_total_nan(self) -> None:
    cart = _cart(taxSummary={"tax": 5, "taxableAmount": 28, "taxes": [{}]})
    summary = self._checkout(cart).summary
    self.assertEqual(summary.tax_total.amount, 5)
    self.assertTrue(math.isnan(summary.total.amount))

  def test_summary_without_tax_key_reports_blank_tax_total(self) -> None:
    cart = _cart(taxSummary={"taxableAmount": 28, "taxes": []})
    summary = self._checkout(cart).summary
    self.assertIsNotNone(summary.tax_total)
    self.assertIsNone(summary.tax_total.amount)
    self.assertEqual(summary.effective_tax_rate.amount, 0)
    self.assertEqual(summary.total.amount, 28)

  def test_null_taxable_amount_gives_infinite_rate(self) -> None:
    formatted = []
    service = CheckoutService(
        rate_formatter=formatted.append,
        null_fulfillment_total=NullFulfillmentTotalPolicy.ZERO,
    )
    cart = _cart(taxSummary={"tax": 5, "taxableAmount": None, "taxes": []})
    self._checkout(cart, service)
    self.assertEqual(formatted, [math.inf])

  def test_missing_currency_code_is_passed_through(self) -> None:
    cart = _cart()
    del cart["currencyCode"]
    summary = self._checkout(cart).summary
    self.assertIsNone(summary.total.currency_code)
    self.assertEqual(summary.total.amount, 28)

  def test_module_entry_point(self) -> None:
    checkout = asyncio.run(
        cart_checkout.xform_cart_checkout(
            {"Cart": object()},
            _cart(),
            null_fulfillment_total=NullFulfillmentTotalPolicy.PROPAGATE,
        )
    )
    self.assertTrue(math.isnan(checkout.summary.total.amount))


if __name__ == "__main__":
  absltest.main()
