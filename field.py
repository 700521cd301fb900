"""
Field arithmetic over prime field F_p.
We use p = 2^61 - 1 (Mersenne prime) so reduction is a shift and a mask.
"""

from abc import ABC, abstractmethod

from errors import ZeroInverse


class Field(ABC):
    """
    Capability contract for a field element.

    The protocol engine only talks to elements through this interface, so any
    subclass implementing it can replace Mersenne61 without touching mpc.py.
    Elements are immutable values.
    """

    __slots__ = ()

    @abstractmethod
    def __init__(self, value):
        """Create an element from an integer."""

    @property
    @abstractmethod
    def value(self):
        """Return the canonical integer representative."""

    @abstractmethod
    def add(self, other):
        """Add two field elements."""

    @abstractmethod
    def negate(self):
        """Negate a field element."""

    @abstractmethod
    def multiply(self, other):
        """Multiply two field elements."""

    @abstractmethod
    def inverse(self):
        """Multiplicative inverse. Raises ZeroInverse for zero."""

    @classmethod
    @abstractmethod
    def random(cls, rng):
        """Sample an element using the bytes of a Prg."""

    def subtract(self, other):
        """Subtract two field elements."""
        return self.add(other.negate())

    def divide(self, other):
        """Divide two field elements."""
        return self.multiply(other.inverse())

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __mul__(self, other):
        return self.multiply(other)

    def __neg__(self):
        return self.negate()

    def __truediv__(self, other):
        return self.divide(other)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"{type(self).__name__}({self.value})"


class Mersenne61(Field):
    """Element of the Mersenne field F_p with p = 2^61 - 1."""

    __slots__ = ('_value',)

    # p = 2^POWER - 1
    POWER = 61
    ORDER = (1 << POWER) - 1

    def __init__(self, value=0):
        """
        Embed an integer into the field.

        Any int is accepted, negative or larger than 2p; values outside
        [0, p) go through a true modulo rather than a single subtraction.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected an int, got {type(value).__name__}")
        if not 0 <= value < self.ORDER:
            value %= self.ORDER
        self._value = value

    @classmethod
    def _from_reduced(cls, value):
        # Caller guarantees 0 <= value < p.
        elem = cls.__new__(cls)
        elem._value = value
        return elem

    @classmethod
    def _reduce_once(cls, value):
        # Caller guarantees 0 <= value < 2p.
        if value >= cls.ORDER:
            value -= cls.ORDER
        return cls._from_reduced(value)

    @property
    def value(self):
        return self._value

    def add(self, other):
        # Both operands are reduced, so the sum is below 2p.
        return self._reduce_once(self._value + other.value)

    def negate(self):
        if self._value == 0:
            return self
        return self._from_reduced(self.ORDER - self._value)

    def multiply(self, other):
        product = self._value * other.value
        # 2^61 = 1 (mod p): fold the high bits onto the low 61 bits.
        high = product >> self.POWER
        low = product & self.ORDER
        # high < p and low <= p, so high + low < 2p.
        return self._reduce_once(high + low)

    def inverse(self):
        """Multiplicative inverse using the extended Euclidean algorithm."""
        if self._value == 0:
            raise ZeroInverse()

        k, new_k = 0, 1
        r, new_r = self.ORDER, self._value
        while new_r != 0:
            q = r // new_r
            k, new_k = new_k, k - q * new_k
            r, new_r = new_r, r - q * new_r

        if k < 0:
            k += self.ORDER
        return self._from_reduced(k)

    @classmethod
    def random(cls, rng):
        """Generate a random field element from 8 bytes of the Prg."""
        raw = int.from_bytes(rng.next(8), 'little')
        # raw < 2^64 can exceed 2p, so use the full reduction.
        return cls(raw)

    @classmethod
    def is_valid(cls, x):
        """Check if x is a canonical representative."""
        return 0 <= x < cls.ORDER
