"""
Value Providers

Providers that replace a property's keyframe interpolator at runtime,
used by keypath overrides.
"""

from typing import Callable, Optional


class SingleValueProvider:
    """
    Provides one constant value for every frame.

    Reports an update once after the value is (re)assigned, then reports
    no further updates until the value changes again.
    """

    def __init__(self, value):
        self._value = value
        self._has_update = True

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        self._value = value
        self._has_update = True

    def value_at(self, frame: float):
        self._has_update = False
        return self._value

    def has_update(self, frame: float, last_frame: Optional[float]) -> bool:
        return last_frame is None or self._has_update

    def __repr__(self):
        return f"SingleValueProvider(value={self._value})"


class ClosureValueProvider:
    """Provides values computed by a callable of the frame number."""

    def __init__(self, closure: Callable[[float], object]):
        """
        Initialize closure provider.

        Args:
            closure: Function mapping a frame number to a value
        """
        self.closure = closure

    def value_at(self, frame: float):
        return self.closure(frame)

    def has_update(self, frame: float, last_frame: Optional[float]) -> bool:
        return True

    def __repr__(self):
        return f"ClosureValueProvider(closure={self.closure!r})"
