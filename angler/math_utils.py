"""Centralized math utilities for the encounter engine.

This module provides pure Python mathematical utilities, including a Vector2
implementation for lure kinematics and the scalar helpers the phase behaviors
share.
"""

from __future__ import annotations

import math


class Vector2:
    """A 2D vector class for mathematical operations."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> "Vector2":
        length = math.sqrt(self.x * self.x + self.y * self.y)
        if length == 0:
            return Vector2(0, 0)
        return Vector2(self.x / length, self.y / length)

    def distance_to(self, other: "Vector2") -> float:
        """Euclidean distance to another point."""
        return (self - other).length()

    def copy(self) -> "Vector2":
        """Return a copy of this vector."""
        return Vector2(self.x, self.y)

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __eq__(self, other: object) -> bool:
        """Check if two vectors are equal."""
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __ne__(self, other: object) -> bool:
        """Check if two vectors are not equal."""
        return not self.__eq__(other)

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def clamp01(value: float) -> float:
    """Clamp ``value`` into ``[0, 1]``."""
    return max(0.0, min(1.0, value))


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation between ``start`` and ``end`` with ``t`` clamped to [0, 1]."""
    return start + (end - start) * clamp01(t)


def progress_ratio(elapsed: float, duration: float) -> float:
    """Normalized progress through a timed phase (1.0 when duration is not positive)."""
    if duration <= 0:
        return 1.0
    return clamp01(elapsed / duration)


__all__ = ["Vector2", "clamp", "clamp01", "lerp", "progress_ratio"]
