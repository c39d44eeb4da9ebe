"""Custom exceptions for arithmetic and calculation errors."""


class MalformedDigitStringError(ValueError):
    """Raised when text is not a canonical non-negative decimal integer.

    Attributes:
        text: The offending input
    """

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Not a non-negative decimal integer: {text!r}")


class NegativeResultError(ValueError):
    """Raised when a subtraction would produce a negative digit string."""

    def __init__(self, minuend: str, subtrahend: str):
        self.minuend = minuend
        self.subtrahend = subtrahend
        super().__init__(f"Cannot subtract {subtrahend} from smaller {minuend}")


class EmptyMultisetError(ValueError):
    """Raised when an operation needs at least one entry but the multiset is empty."""


class UnsupportedGenerationError(ValueError):
    """Raised when no damage pipeline is registered for a generation."""

    def __init__(self, gen: object):
        self.gen = gen
        super().__init__(f"No damage pipeline for generation: {gen}")
