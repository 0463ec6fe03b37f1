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

"""Custom exceptions for the cart checkout transforms."""


class CheckoutError(Exception):
  """Base class for all checkout exceptions."""

  def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
    self.message = message
    self.code = code
    super().__init__(self.message)


class InvalidCartError(CheckoutError):
  """Raised when a cart document is structurally invalid (e.g. missing fields)."""

  def __init__(self, message: str):
    super().__init__(message, code="INVALID_CART")
