"""Damage calculation for every supported generation."""

from sulcalc.damage.calculate import (
    adv_calculate,
    b2w2_calculate,
    calculate,
    gsc_calculate,
    hgss_calculate,
    oras_calculate,
    rby_calculate,
    sm_calculate,
)
from sulcalc.damage.outcome import DamageOutcome, analyze

__all__ = [
    "DamageOutcome",
    "analyze",
    "calculate",
    "rby_calculate",
    "gsc_calculate",
    "adv_calculate",
    "hgss_calculate",
    "b2w2_calculate",
    "oras_calculate",
    "sm_calculate",
]
