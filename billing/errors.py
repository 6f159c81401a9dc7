"""Exception types raised by the billing core"""


class ValidationError(ValueError):
    """Invalid input: negative amounts, missing references and the like.

    Raised before anything is persisted; never retried automatically.
    """


class CalculationError(ArithmeticError):
    """A computation produced NaN or Infinity. The result must not be shown or stored."""


class PayloadError(ValueError):
    """An API response did not match the expected envelope or record shape."""
