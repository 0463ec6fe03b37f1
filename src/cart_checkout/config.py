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

"""Shared configuration for the cart checkout transforms."""

from absl import flags
from cart_checkout.enums import NullFulfillmentTotalPolicy

FLAGS = flags.FLAGS

# Define flags only if they haven't been defined yet (to avoid duplicates
# during tests or re-imports)
try:
  flags.DEFINE_enum_class(
      "null_fulfillment_total",
      NullFulfillmentTotalPolicy.ZERO,
      NullFulfillmentTotalPolicy,
      "How a cart without any selected shipment method contributes to the"
      " grand total.",
  )
except flags.DuplicateFlagError:
  pass


def get_null_fulfillment_total_policy() -> NullFulfillmentTotalPolicy:
  """Returns the configured policy, falling back to the flag default."""
  # Read through the Flag object so library callers that never parse argv
  # still get the default.
  return FLAGS["null_fulfillment_total"].value
