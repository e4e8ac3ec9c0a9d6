import re
from dataclasses import dataclass
from decimal import Decimal

SCALE = 100_000  # degrees -> fixed-point units (1e-5 deg)
FRACTION_DIGITS = 5
# keeps coordinate differences and their sums inside int64
FIXED_MAX = 2**31 - 1

_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


# Core geometry types used by mechanics
@dataclass(frozen=True)
class Coord:
    lat: int  # degrees * SCALE
    lon: int

    @classmethod
    def from_degrees(cls, lat: str | int | Decimal, lon: str | int | Decimal) -> "Coord":
        return cls(to_fixed(lat), to_fixed(lon))


@dataclass
class Path:
    vertices: list[int]
    points: list[Coord]
    total: int  # sum of manhattan edge weights, fixed-point units

    def __len__(self) -> int:
        return len(self.vertices)


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a.lat - b.lat) + abs(a.lon - b.lon)


def to_fixed(text: str | int | Decimal) -> int:
    """Decimal degrees -> fixed-point int, truncated toward zero.

    Goes through Decimal so "53.43" is exactly 5343000. Only plain ASCII
    decimals (optional exponent) are accepted, and the result must lie within
    +-FIXED_MAX; anything else is a ValueError.
    """
    if isinstance(text, str):
        text = text.strip()
        if not _DECIMAL.fullmatch(text):
            raise ValueError(f"not a decimal number: {text!r}")
    d = Decimal(text)
    if not d.is_finite():
        raise ValueError(f"not a finite number: {text!r}")
    try:
        value = int(d * SCALE)
    except ArithmeticError:
        raise ValueError(f"coordinate out of range: {text!r}") from None
    if abs(value) > FIXED_MAX:
        raise ValueError(f"coordinate out of range: {text!r}")
    return value


def format_fixed(value: int) -> str:
    """Fixed-point int -> decimal degrees with FRACTION_DIGITS digits."""
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), SCALE)
    return f"{sign}{whole}.{frac:0{FRACTION_DIGITS}d}"
