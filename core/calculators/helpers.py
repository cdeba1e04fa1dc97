#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Numeric helpers shared by normalization, validation and interpolation."""

from __future__ import annotations

import math
from typing import Any


def is_number(value: Any) -> bool:
    """Finite int/float; bool is not a number here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up (8.5 -> 9, -1.5 -> -1).

    Same result as JavaScript's Math.round, unlike Python's round() which rounds halves to even.
    """
    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    """Round to one decimal place, halves up."""
    return round_half_up(value * 10) / 10


def lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def has_value(value: Any) -> bool:
    """
    Presence test for parsed JSON fields.

    None, False, 0, NaN and '' are absent; empty lists and dicts count as present.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ''
    if isinstance(value, (int, float)):
        return value == value and value != 0
    return True
