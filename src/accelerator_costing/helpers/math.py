from decimal import Decimal, InvalidOperation


def decimal(val, default=Decimal(0)) -> Decimal:
    """Coerce a usage value to Decimal, with a default for None.

    Floats go through str() so 12.5 becomes Decimal("12.5"), not its binary
    expansion. Unparseable or non-finite input (NaN, Infinity) raises ValueError.
    """
    if val is None:
        return Decimal(default)
    if isinstance(val, bool):
        raise ValueError(f"Not a quantity: {val!r}")
    if isinstance(val, Decimal):
        d = val
    else:
        try:
            d = Decimal(str(val).strip())
        except InvalidOperation:
            raise ValueError(f"Not a quantity: {val!r}") from None
    if not d.is_finite():
        raise ValueError(f"Not a finite quantity: {val!r}")
    return d
