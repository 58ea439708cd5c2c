import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Type

_DECIMAL_LITERAL = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)


class PreciseCurrency:
    """
    Exact decimal amount with a fixed number of fractional digits.
    Stored as a scaled integer (value * 10^PRECISION) clamped to the signed
    64-bit range. Addition and subtraction saturate instead of overflowing.
    """

    PRECISION = 4
    MIN_RAW = -(2 ** 63)
    MAX_RAW = 2 ** 63 - 1

    __slots__ = ("_raw",)

    _precision_classes: Dict[int, Type["PreciseCurrency"]] = {}

    def __init__(self, raw: int = 0):
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeError(f"raw currency value must be an int, got {type(raw).__name__}")
        self._raw = self._saturate(raw)

    @classmethod
    def with_precision(cls, precision: int) -> Type["PreciseCurrency"]:
        """Return the currency class for the given number of fractional digits."""
        if precision < 0:
            raise ValueError(f"precision must be non-negative, got {precision}")
        if precision == PreciseCurrency.PRECISION:
            return PreciseCurrency
        if precision not in cls._precision_classes:
            cls._precision_classes[precision] = type(
                f"PreciseCurrency{precision}",
                (PreciseCurrency,),
                {"PRECISION": precision, "__slots__": ()},
            )
        return cls._precision_classes[precision]

    @classmethod
    def zero(cls) -> "PreciseCurrency":
        return cls(0)

    @classmethod
    def parse(cls, text: str) -> "PreciseCurrency":
        """
        Parse a decimal literal such as "12.3444", "-0.5" or "1e3".

        The value is scaled by 10^PRECISION and truncated toward zero.
        Out of range magnitudes saturate. Raises ValueError for text that
        is not a plain ASCII decimal literal.
        """
        if not isinstance(text, str) or not _DECIMAL_LITERAL.fullmatch(text.strip()):
            raise ValueError(f"invalid currency amount {text!r}")

        try:
            value = Decimal(text.strip())
        except InvalidOperation as e:
            raise ValueError(f"invalid currency amount {text!r}") from e

        if value.is_nan():
            raise ValueError(f"invalid currency amount {text!r}")
        if value.is_infinite():
            return cls(cls.MIN_RAW if value < 0 else cls.MAX_RAW)

        sign, digits, exponent = value.as_tuple()
        # Number of digits left of the point once scaled, the rest is truncated
        width = len(digits) + exponent + cls.PRECISION

        if width <= 0 or not any(digits):
            scaled = 0
        elif width > 20:
            # At least 10^20, past the 64-bit range
            scaled = cls.MAX_RAW + 1
        else:
            scaled = int("".join(map(str, digits))[:width].ljust(width, "0"))

        return cls(-scaled if sign else scaled)

    @property
    def raw(self) -> int:
        return self._raw

    def to_decimal(self) -> Decimal:
        return Decimal(self._raw).scaleb(-self.PRECISION)

    def _saturate(self, raw: int) -> int:
        return max(self.MIN_RAW, min(self.MAX_RAW, raw))

    def _same_precision(self, other) -> bool:
        return isinstance(other, PreciseCurrency) and other.PRECISION == self.PRECISION

    def __add__(self, other: "PreciseCurrency") -> "PreciseCurrency":
        if not self._same_precision(other):
            return NotImplemented
        return type(self)(self._raw + other._raw)

    def __sub__(self, other: "PreciseCurrency") -> "PreciseCurrency":
        if not self._same_precision(other):
            return NotImplemented
        return type(self)(self._raw - other._raw)

    def __eq__(self, other) -> bool:
        if not self._same_precision(other):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash((self.PRECISION, self._raw))

    def __lt__(self, other: "PreciseCurrency") -> bool:
        if not self._same_precision(other):
            return NotImplemented
        return self._raw < other._raw

    def __le__(self, other: "PreciseCurrency") -> bool:
        if not self._same_precision(other):
            return NotImplemented
        return self._raw <= other._raw

    def __gt__(self, other: "PreciseCurrency") -> bool:
        if not self._same_precision(other):
            return NotImplemented
        return self._raw > other._raw

    def __ge__(self, other: "PreciseCurrency") -> bool:
        if not self._same_precision(other):
            return NotImplemented
        return self._raw >= other._raw

    def __str__(self) -> str:
        sign = "-" if self._raw < 0 else ""
        scale = 10 ** self.PRECISION
        integer, fraction = divmod(abs(self._raw), scale)
        if self.PRECISION == 0:
            return f"{sign}{integer}"
        return f"{sign}{integer}.{fraction:0{self.PRECISION}d}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}')"


# Four digits past the decimal point
Currency = PreciseCurrency
