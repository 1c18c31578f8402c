"""Float-based units stored in SI.

UnitFloat subclasses ``float`` so that a unit value can be handed to any code
expecting seconds, while arithmetic between values keeps the unit type and
refuses to mix families.

Example:
    >>> class Second(UnitFloat):
    ...     IS_FAMILY_ROOT = True
    ...     SYMBOL = "s"
    >>> class Minute(Second):
    ...     SCALE_TO_SI = 60.0
    ...     SYMBOL = "min"
    >>> float(Minute(1.5))
    90.0
"""
from __future__ import annotations

from typing import ClassVar

from .unit_base import Unit

Number = int | float


class UnitFloat(float, Unit):
    """Base class for type-safe unit values with automatic SI conversion.

    Attributes:
        SCALE_TO_SI (ClassVar[float]): Conversion factor to SI units.
        IS_FAMILY_ROOT (ClassVar[bool]): Indicates if this class is a root unit.
    """

    SCALE_TO_SI: ClassVar[float] = 1.0
    IS_FAMILY_ROOT: ClassVar[bool] = True

    def __new__(cls, value: Number):
        si_val = float(value) * cls.SCALE_TO_SI
        return float.__new__(cls, si_val)

    @classmethod
    def from_si(cls, si_value: float) -> UnitFloat:
        """Create an instance directly from a value already in SI."""
        return float.__new__(cls, si_value)

    def to(self, unit_type: type[UnitFloat]) -> float:
        """Convert to another unit of the same family.

        Args:
            unit_type: Target unit type to convert to.

        Returns:
            float: Value in the target unit's scale.
        """
        self._check_same_root(unit_type)
        return float(self) / unit_type.SCALE_TO_SI


    # -------------------------------- Arithmetic Operations --------------------------------
    def __add__(self, other: UnitFloat | Number) -> UnitFloat:
        self._check_same_root(type(other))
        return type(self).from_si(float(self) + float(other))

    def __radd__(self, other: UnitFloat | Number) -> UnitFloat:
        return self.__add__(other)

    def __sub__(self, other: UnitFloat | Number) -> UnitFloat:
        self._check_same_root(type(other))
        return type(self).from_si(float(self) - float(other))

    def __lt__(self, other: UnitFloat | Number) -> bool:
        self._check_same_root(type(other))
        return float(self) < float(other)

    def __le__(self, other: UnitFloat | Number) -> bool:
        self._check_same_root(type(other))
        return float(self) <= float(other)

    def __gt__(self, other: UnitFloat | Number) -> bool:
        self._check_same_root(type(other))
        return float(self) > float(other)

    def __ge__(self, other: UnitFloat | Number) -> bool:
        self._check_same_root(type(other))
        return float(self) >= float(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        self._check_same_root(type(other))
        return float(self) == float(other)

    def __hash__(self) -> int:
        return float.__hash__(self)

    def __str__(self) -> str:
        """Return the value in the unit's native scale, e.g. ``"1.5 min"``."""
        return f"{self.to(type(self))} {type(self).SYMBOL}".strip()
