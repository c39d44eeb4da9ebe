"""Exact arithmetic over non-negative integers encoded as decimal digit strings.

Every function takes and returns canonical digit strings: ASCII digits, most
significant first, no leading zeros except for the literal "0". Values are
never mutated; each operation builds a new string.

Division by zero does not raise. It returns the sentinel strings "NaN" and
"Infinity", which callers must check for (see `is_sentinel`) before passing
the result to further arithmetic.
"""

from typing import Tuple

from sulcalc.exceptions import MalformedDigitStringError, NegativeResultError

ZERO = "0"
ONE = "1"
NAN = "NaN"
INFINITY = "Infinity"

_ORD_ZERO = ord("0")


def normalize(text: str) -> str:
    """Convert decimal text into canonical form.

    Args:
        text: Decimal digits, possibly with leading zeros (e.g. "007")

    Returns:
        Canonical digit string (e.g. "7")

    Raises:
        MalformedDigitStringError: If text is empty or has non-digit characters
    """
    if not text or not text.isascii() or not text.isdigit():
        raise MalformedDigitStringError(text)
    return text.lstrip("0") or ZERO


def from_int(value: int) -> str:
    if value < 0:
        raise MalformedDigitStringError(str(value))
    return str(value)


def to_int(num: str) -> int:
    return int(normalize(num))


def is_sentinel(num: str) -> bool:
    """Check whether a division result is one of the undefined sentinels."""
    return num in (NAN, INFINITY)


def compare(num1: str, num2: str) -> int:
    """Compare two digit strings.

    Canonical strings carry no leading zeros, so a longer string is always
    the larger value; equal lengths compare digit by digit from the left.

    Returns:
        Negative, zero or positive as num1 is less than, equal to or greater
        than num2
    """
    if len(num1) != len(num2):
        return len(num1) - len(num2)
    for digit1, digit2 in zip(num1, num2):
        if digit1 != digit2:
            return ord(digit1) - ord(digit2)
    return 0


def add(num1: str, num2: str) -> str:
    width = max(len(num1), len(num2))
    num1 = num1.rjust(width, "0")
    num2 = num2.rjust(width, "0")

    digits = []
    carry = 0
    for i in range(width - 1, -1, -1):
        total = ord(num1[i]) + ord(num2[i]) - 2 * _ORD_ZERO + carry
        carry = 1 if total > 9 else 0
        digits.append(chr(total % 10 + _ORD_ZERO))
    if carry:
        digits.append(ONE)
    return "".join(reversed(digits))


def subtract(num1: str, num2: str) -> str:
    """Subtract num2 from num1.

    Raises:
        NegativeResultError: If num2 is greater than num1
    """
    if compare(num1, num2) < 0:
        raise NegativeResultError(num1, num2)
    num2 = num2.rjust(len(num1), "0")

    digits = []
    borrow = 0
    for i in range(len(num1) - 1, -1, -1):
        diff = ord(num1[i]) - ord(num2[i]) - borrow
        borrow = 1 if diff < 0 else 0
        digits.append(chr((diff + 10 if diff < 0 else diff) + _ORD_ZERO))
    return "".join(reversed(digits)).lstrip("0") or ZERO


def multiply(num1: str, num2: str) -> str:
    """Schoolbook long multiplication, one shifted row per digit of num1."""
    if num1 == ZERO or num2 == ZERO:
        return ZERO

    product = ZERO
    zeros = ""
    for i in range(len(num1) - 1, -1, -1):
        factor = ord(num1[i]) - _ORD_ZERO
        row = []
        carry = 0
        for j in range(len(num2) - 1, -1, -1):
            partial = factor * (ord(num2[j]) - _ORD_ZERO) + carry
            carry = partial // 10
            row.append(chr(partial % 10 + _ORD_ZERO))
        if carry:
            row.append(str(carry))
        shifted = "".join(reversed(row)).lstrip("0") or ZERO
        if shifted != ZERO:
            product = add(shifted + zeros, product)
        zeros += "0"
    return product


def divide(num1: str, num2: str) -> Tuple[str, str]:
    """Long division of num1 by num2.

    Returns:
        Tuple of (quotient, remainder). Dividing by "0" yields ("NaN", "NaN")
        when num1 is also "0", otherwise ("Infinity", "NaN").
    """
    if num2 == ZERO:
        return (NAN if num1 == ZERO else INFINITY, NAN)
    if compare(num1, num2) < 0:
        return (ZERO, num1)

    # The remainder starts one digit short so each step brings down a digit.
    quotient = []
    remainder = num1[: len(num2) - 1]
    for i in range(len(num2) - 1, len(num1)):
        if remainder == ZERO:
            remainder = num1[i]
        else:
            remainder += num1[i]
        count = 0
        while compare(remainder, num2) >= 0:
            remainder = subtract(remainder, num2)
            count += 1
        if count or quotient:
            quotient.append(str(count))
    return ("".join(quotient), remainder)


def gcd(num1: str, num2: str) -> str:
    """Greatest common divisor by the Euclidean algorithm."""
    a, b = num1, num2
    while b != ZERO:
        a, b = b, divide(a, b)[1]
    return a
