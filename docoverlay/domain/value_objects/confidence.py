"""
Confidence value object

Represents a confidence score between 0 and 1 (inclusive) as reported by
the analysis engine. Immutable and self-validating.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Confidence:
    """
    Immutable confidence value between 0 and 1.

    Automatically clamps values to valid range [0, 1].
    """
    value: float

    def __post_init__(self):
        """Validate and clamp confidence to [0, 1] range."""
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            object.__setattr__(self, 'value', 0.0)
        elif self.value != self.value:  # NaN
            object.__setattr__(self, 'value', 0.0)
        elif self.value < 0.0:
            object.__setattr__(self, 'value', 0.0)
        elif self.value > 1.0:
            object.__setattr__(self, 'value', 1.0)
        else:
            object.__setattr__(self, 'value', float(self.value))

    @classmethod
    def from_raw(cls, raw_value: Any, default: float = 1.0) -> Confidence:
        """
        Create Confidence from any value, falling back to ``default`` when
        the engine did not report one.

        Examples:
            >>> Confidence.from_raw(0.8)
            Confidence(value=0.8)
            >>> Confidence.from_raw(None)
            Confidence(value=1.0)
            >>> Confidence.from_raw("0.75")
            Confidence(value=0.75)
            >>> Confidence.from_raw(1.5)
            Confidence(value=1.0)
        """
        if raw_value is None:
            return cls(default)
        try:
            return cls(float(raw_value))
        except (TypeError, ValueError):
            return cls(default)

    def level(self) -> str:
        """
        Qualitative band used by result lists.

        Returns:
            One of ``high`` (>= 0.9), ``medium`` (>= 0.7), ``low`` (>= 0.5)
            or ``very_low``.
        """
        if self.value >= 0.9:
            return "high"
        if self.value >= 0.7:
            return "medium"
        if self.value >= 0.5:
            return "low"
        return "very_low"

    def overlay_opacity(self) -> float:
        """Fill opacity for an overlay box carrying this confidence."""
        if self.value >= 0.9:
            return 0.8
        if self.value >= 0.7:
            return 0.6
        if self.value >= 0.5:
            return 0.4
        return 0.2

    def within(self, minimum: float, maximum: float) -> bool:
        """Check if confidence lies in the inclusive range [minimum, maximum]."""
        return minimum <= self.value <= maximum

    def percentage(self) -> float:
        """Get confidence as percentage (0-100)."""
        return self.value * 100.0

    def __str__(self) -> str:
        return f"{self.value:.2f}"

    def __float__(self) -> float:
        return self.value
