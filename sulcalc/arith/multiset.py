"""Weighted outcome multiset with exact digit-string multiplicities."""

import math
from typing import (
    Any,
    Callable,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from sulcalc.arith import digit_string
from sulcalc.exceptions import EmptyMultisetError

Multiplicity = Union[int, str]
Entry = Tuple[Any, str]


def _default_compare(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _as_digits(multiplicity: Multiplicity) -> str:
    """Canonical digit string for an int or decimal-text multiplicity.

    Raises:
        MalformedDigitStringError: If multiplicity is negative or not decimal
    """
    if isinstance(multiplicity, int):
        return digit_string.from_int(multiplicity)
    return digit_string.normalize(multiplicity)


class Multiset:
    """Mapping from outcome value to how many ways it can happen.

    Multiplicities are digit strings, so repeated Cartesian products never
    overflow or lose precision. `add`, `delete` and `clear` mutate in place;
    every other operation that yields a multiset returns a fresh instance and
    leaves its operands untouched.

    Example:
        >>> rolls = Multiset([1, 2, 2])
        >>> str(rolls.permute(rolls))
        '2:1, 3:4, 4:4'
    """

    def __init__(
        self,
        iterable: Union["Multiset", Mapping[Any, Multiplicity], Iterable[Any]] = (),
    ) -> None:
        """Initialize the multiset.

        Args:
            iterable: Another Multiset to copy, a mapping of value to
                multiplicity, or values that each count once
        """
        self._data: Dict[Hashable, str] = {}
        if isinstance(iterable, Multiset):
            self._data = dict(iterable._data)
        elif isinstance(iterable, Mapping):
            for value, multiplicity in iterable.items():
                self.add(value, multiplicity)
        else:
            for value in iterable:
                self.add(value)

    @staticmethod
    def _coerce(iterable: Union["Multiset", Iterable[Any]]) -> "Multiset":
        return iterable if isinstance(iterable, Multiset) else Multiset(iterable)

    def add(self, value: Hashable, multiplicity: Multiplicity = 1) -> "Multiset":
        """Increase the multiplicity of value in place and return self."""
        self._data[value] = digit_string.add(
            self._data.get(value, digit_string.ZERO), _as_digits(multiplicity)
        )
        return self

    def clear(self) -> None:
        self._data.clear()

    def delete(self, value: Hashable) -> bool:
        if value in self._data:
            del self._data[value]
            return True
        return False

    def has(self, value: Hashable) -> bool:
        return value in self._data

    def get(self, value: Hashable) -> Optional[str]:
        return self._data.get(value)

    def count(
        self, predicate: Callable[[Any, str], bool] = lambda v, m: True
    ) -> str:
        """Sum multiplicities of entries where predicate(value, multiplicity) holds."""
        total = digit_string.ZERO
        for value, multiplicity in self._data.items():
            if predicate(value, multiplicity):
                total = digit_string.add(total, multiplicity)
        return total

    @property
    def size(self) -> str:
        """Total multiplicity across all entries, as a digit string."""
        return self.count()

    def entries(self) -> Iterator[Entry]:
        yield from self._data.items()

    items = entries

    def values(self) -> Iterator[Any]:
        yield from self._data.keys()

    def multiplicities(self) -> Iterator[str]:
        yield from self._data.values()

    def is_empty(self) -> bool:
        return not self._data

    def every(self, predicate: Callable[[Any, str], bool]) -> bool:
        return all(predicate(value, m) for value, m in self._data.items())

    def some(self, predicate: Callable[[Any, str], bool]) -> bool:
        return any(predicate(value, m) for value, m in self._data.items())

    def union(self, iterable: Union["Multiset", Iterable[Any]]) -> "Multiset":
        """Sum multiplicities value by value."""
        union = Multiset(self)
        for value, multiplicity in Multiset._coerce(iterable).entries():
            union.add(value, multiplicity)
        return union

    def intersect(self, iterable: Union["Multiset", Iterable[Any]]) -> "Multiset":
        """Keep values present in both, at the smaller multiplicity."""
        other = Multiset._coerce(iterable)
        intersection = Multiset()
        for value, multiplicity in self._data.items():
            if other.has(value):
                other_multiplicity = other._data[value]
                if digit_string.compare(multiplicity, other_multiplicity) <= 0:
                    intersection.add(value, multiplicity)
                else:
                    intersection.add(value, other_multiplicity)
        return intersection

    def scale(self, factor: Multiplicity = 1) -> "Multiset":
        factor = _as_digits(factor)
        scaled = Multiset()
        for value, multiplicity in self._data.items():
            scaled.add(value, digit_string.multiply(multiplicity, factor))
        return scaled

    def permute(
        self,
        iterable: Union["Multiset", Iterable[Any]],
        combine: Callable[[Any, Any], Any] = lambda a, b: a + b,
    ) -> "Multiset":
        """Cartesian product of two independent distributions.

        Each pair of entries contributes combine(value1, value2) with the
        product of their multiplicities.
        """
        other = Multiset._coerce(iterable)
        permutation = Multiset()
        for value1, multiplicity1 in self._data.items():
            for value2, multiplicity2 in other._data.items():
                permutation.add(
                    combine(value1, value2),
                    digit_string.multiply(multiplicity1, multiplicity2),
                )
        return permutation

    def simplify(self) -> "Multiset":
        """Divide every multiplicity by their greatest common divisor."""
        simplified = Multiset()
        if self.is_empty():
            return simplified
        multiplicities = self.multiplicities()
        divisor = next(multiplicities)
        for multiplicity in multiplicities:
            divisor = digit_string.gcd(divisor, multiplicity)
        if divisor == digit_string.ZERO:
            return Multiset(self)
        for value, multiplicity in self._data.items():
            simplified.add(value, digit_string.divide(multiplicity, divisor)[0])
        return simplified

    def map(self, fn: Callable[[Any, str, Callable[[], None]], Any]) -> "Multiset":
        """Relabel entries, dropping any for which fn calls skip().

        Args:
            fn: Called as fn(value, multiplicity, skip); its return value is the
                new value, merged with any equal values already mapped
        """
        skipped = False

        def skip() -> None:
            nonlocal skipped
            skipped = True

        mapped = Multiset()
        for value, multiplicity in self._data.items():
            new_value = fn(value, multiplicity, skip)
            if skipped:
                skipped = False
            else:
                mapped.add(new_value, multiplicity)
        return mapped

    _MISSING: Any = object()

    def reduce(
        self, fn: Callable[[Any, Any, str], Any], initial: Any = _MISSING
    ) -> Any:
        """Fold fn(total, value, multiplicity) over entries in insertion order.

        Without an initial value the first (value, multiplicity) entry seeds
        the fold.

        Raises:
            EmptyMultisetError: If no initial value is given and the multiset
                is empty
        """
        entries = self.entries()
        total = initial
        if initial is Multiset._MISSING:
            try:
                total = next(entries)
            except StopIteration:
                raise EmptyMultisetError(
                    "reduce of empty multiset with no initial value"
                )
        for value, multiplicity in entries:
            total = fn(total, value, multiplicity)
        return total

    def max(self, compare: Callable[[Any, Any], int] = _default_compare) -> Any:
        """Largest distinct value, ignoring multiplicity."""
        values = self.values()
        try:
            best = next(values)
        except StopIteration:
            raise EmptyMultisetError("max of empty multiset")
        for value in values:
            if compare(value, best) > 0:
                best = value
        return best

    def min(self, compare: Callable[[Any, Any], int] = _default_compare) -> Any:
        """Smallest distinct value, ignoring multiplicity."""
        values = self.values()
        try:
            best = next(values)
        except StopIteration:
            raise EmptyMultisetError("min of empty multiset")
        for value in values:
            if compare(value, best) < 0:
                best = value
        return best

    def to_list(self) -> List[Any]:
        """Expand into a flat list repeating each value by its multiplicity.

        Only meant for multisets whose size fits comfortably in memory.
        """
        expanded: List[Any] = []
        for value, multiplicity in self._data.items():
            expanded.extend([value] * int(multiplicity))
        return expanded

    def to_string(
        self,
        format_entry: Callable[[Entry], str] = lambda entry: f"{entry[0]}:{entry[1]}",
        sort_key: Callable[[Entry], Any] = lambda entry: entry[0],
    ) -> str:
        entries = sorted(self._data.items(), key=sort_key)
        return ", ".join(format_entry(entry) for entry in entries)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Multiset({{{self.to_string(lambda e: f'{e[0]!r}: {e[1]!r}')}}})"

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, value: object) -> bool:
        return value in self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self._nonzero() == other._nonzero()

    __hash__ = None  # type: ignore[assignment]

    def _nonzero(self) -> Dict[Hashable, str]:
        return {v: m for v, m in self._data.items() if m != digit_string.ZERO}

    @staticmethod
    def average(multiset: "Multiset", digits: int = 4) -> float:
        """Exact weighted mean of numeric values, rounded to `digits` places.

        The weighted sum and division stay in digit-string arithmetic; only the
        final rounded quotient becomes a float.

        Args:
            multiset: Multiset of non-negative integer values
            digits: Decimal places to keep

        Returns:
            The weighted mean, nan for an empty multiset
        """
        size = multiset.size
        if size == digit_string.ZERO:
            return math.nan

        weighted_sum = multiset.reduce(
            lambda total, value, multiplicity: digit_string.add(
                total,
                digit_string.multiply(digit_string.from_int(value), multiplicity),
            ),
            digit_string.ZERO,
        )
        if weighted_sum == digit_string.ZERO:
            return 0

        # One extra digit of quotient decides the final half-up rounding.
        scale = 10 ** (digits + 1)
        quotient, _ = digit_string.divide(
            digit_string.multiply(weighted_sum, str(scale)), size
        )
        return (int(quotient) + 5) // 10 * 10 / scale
