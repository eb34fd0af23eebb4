from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

AMOUNT_QUANTUM = Decimal("0.0001")

# NUMERIC(18, 4): at most 14 integer digits.
AMOUNT_LIMIT = Decimal("1E14")


def round_amount(value: Union[Decimal, float, int, str]) -> Decimal:
    """
    Round a document amount to 4 decimal places using ROUND_HALF_UP.

    Examples:
        >>> round_amount(150.5)
        Decimal('150.5000')
        >>> round_amount("0.00005")
        Decimal('0.0001')
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


def _to_decimal(value: Union[Decimal, float, int, str, None]) -> Decimal | None:
    """Finite Decimal for value, or None when it is blank or unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        parsed = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed


def amount_fits(value: Decimal) -> bool:
    """True when value can be stored in a NUMERIC(18, 4) column."""
    return abs(value) < AMOUNT_LIMIT


def parse_amount(value: Union[Decimal, float, int, str, None]) -> Decimal:
    """
    Lenient amount parsing for clerk input: blank, missing or unparseable
    values count as zero, and so do values too large to round.

    Examples:
        >>> parse_amount("150.5")
        Decimal('150.5000')
        >>> parse_amount("abc")
        Decimal('0.0000')
        >>> parse_amount(None)
        Decimal('0.0000')
    """
    parsed = _to_decimal(value)
    if parsed is None:
        return round_amount(0)
    try:
        return round_amount(parsed)
    except InvalidOperation:
        return round_amount(0)


def parse_document_amount(value: Union[Decimal, float, int, str, None]) -> Decimal:
    """
    Like parse_amount, but a readable amount that does not fit NUMERIC(18, 4)
    raises ValueError instead of being stored as something else.
    """
    parsed = _to_decimal(value)
    if parsed is None:
        return round_amount(0)
    rounded = round_amount(parsed) if amount_fits(parsed) else None
    if rounded is None or not amount_fits(rounded):
        raise ValueError(f"Amount {value} is out of range (must be below {AMOUNT_LIMIT:,.0f})")
    return rounded


def format_amount(value: Decimal) -> str:
    """Render an amount with exactly 4 decimals, e.g. 200 -> '200.0000'."""
    return f"{round_amount(value):.4f}"
