import math

Quantity = float
Percent = float

FULL_PALLET: Percent = 100.0


def parse_quantity(value) -> float:
    """Parse a carton quantity from a number or a string with a decimal comma."""
    if isinstance(value, bool):
        raise ValueError(f"not a quantity: {value!r}")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            raise ValueError("empty input")
        number = float(text.replace(",", "."))
    if not math.isfinite(number):
        raise ValueError(f"not a finite quantity: {value!r}")
    return number


def format_percent(value: float, ndigits: int = 2) -> str:
    return f"{value:.{ndigits}f}%"
