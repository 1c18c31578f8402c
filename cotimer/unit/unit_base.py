"""Unit family foundation for time quantities.

Every quantity accepted by the timer API (durations, tick deltas, random
bounds) may be given either as a plain number of seconds or as a unit value.
Units are grouped into families through a ROOT class so that a ``Minute`` and a
``Second`` can be combined while values of unrelated families cannot.

Key Concepts:
- ROOT Class: Each unit family has a root class that defines the family
- IS_FAMILY_ROOT: Boolean flag marking the base unit of each family
- Automatic Assignment: ROOT classes are resolved via the MRO at subclass time

Classes:
    Unit: Base class for all unit types with family management.
"""

from __future__ import annotations

from typing import ClassVar


class Unit:
    """Base class for all unit types.

    Concrete units inherit from UnitFloat rather than directly from this class.

    Attributes:
        ROOT (ClassVar[type[Unit]]): Root class defining the unit family.
        SYMBOL (ClassVar[str]): Unit symbol for display purposes.
        IS_FAMILY_ROOT (ClassVar[bool]): Indicates if this class is a root unit.
    """

    __slots__ = ()
    __array_priority__ = 1000

    ROOT: ClassVar[type[Unit]]
    SYMBOL: ClassVar[str] = ""
    IS_FAMILY_ROOT: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "ROOT" in cls.__dict__ and cls.ROOT is not None:
            return

        if cls.__dict__.get("IS_FAMILY_ROOT", False):
            cls.ROOT = cls
            return

        for base in cls.mro()[1:]:
            if base.__dict__.get("IS_FAMILY_ROOT", False):
                cls.ROOT = base
                return

        cls.ROOT = cls

    @classmethod
    def _check_same_root(cls, unit_type: type):
        """Check that another type belongs to the same unit family.

        Plain numbers (int/float that are not units) are accepted and treated
        as values of this family expressed in SI.

        Args:
            unit_type: The other type to check compatibility with.

        Raises:
            TypeError: If the units belong to different families.
        """
        if not issubclass(unit_type, Unit):
            return
        if cls.ROOT is not unit_type.ROOT:
            msg = f"Incompatible units: {cls.ROOT.__name__} and {unit_type.ROOT.__name__}"
            raise TypeError(msg)
