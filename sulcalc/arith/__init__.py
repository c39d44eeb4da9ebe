"""Exact arithmetic: digit strings, weighted multisets and fixed-point modifiers."""

from sulcalc.arith.fixed_point import apply_mod, chain_mod, round_half_to_zero
from sulcalc.arith.multiset import Multiset

__all__ = ["Multiset", "apply_mod", "chain_mod", "round_half_to_zero"]
