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

"""Utility script to print the checkout object for a cart document.

This script reads a cart document from a JSON file and prints the derived
checkout object (fulfillment groups and summary) as JSON. It is useful for
debugging totals outside of the API layer.

Usage:
  cart-checkout --cart_path=cart.json [--null_fulfillment_total=propagate]
"""

import asyncio
import json
import logging
import sys
from typing import Any, Sequence

from absl import app as absl_app
from absl import flags
from cart_checkout import config
from cart_checkout.exceptions import CheckoutError
from cart_checkout.services.checkout_service import CheckoutService

logger = logging.getLogger(__name__)

FLAGS = flags.FLAGS
flags.DEFINE_string("cart_path", None, "Path to a cart document (JSON)")
flags.DEFINE_integer("indent", 2, "Indentation of the printed JSON")


def load_cart(path: str) -> dict[str, Any]:
  """Reads a cart document from a JSON file."""
  with open(path, "r") as f:
    return json.load(f)


async def render_checkout(cart: dict[str, Any], indent: int = 2) -> str:
  """Derives the checkout for a cart and renders it as JSON."""
  service = CheckoutService(
      null_fulfillment_total=config.get_null_fulfillment_total_policy()
  )
  checkout = await service.xform_cart_checkout(None, cart)
  return json.dumps(checkout.model_dump(mode="json"), indent=indent)


def main(argv: Sequence[str]) -> None:
  """Main entry point for the checkout script."""
  del argv  # Unused.
  logging.basicConfig(level=logging.INFO)

  if not FLAGS.cart_path:
    logger.error("--cart_path must be provided.")
    print("\nUsage:")
    print(FLAGS.main_module_help())
    sys.exit(1)

  try:
    cart = load_cart(FLAGS.cart_path)
    print(asyncio.run(render_checkout(cart, indent=FLAGS.indent)))
  except (OSError, json.JSONDecodeError) as e:
    logger.error("Failed to read cart %s: %s", FLAGS.cart_path, e)
    sys.exit(1)
  except CheckoutError as e:
    logger.error("%s (%s)", e.message, e.code)
    sys.exit(1)


def run() -> None:
  absl_app.run(main)


if __name__ == "__main__":
  run()
