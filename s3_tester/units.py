"""Human-readable formatting of byte counts and durations."""

KIB = 1024
MIB = KIB * 1024
GIB = MIB * 1024
TIB = GIB * 1024

# Largest unit first; a value uses the first unit it reaches
_UNITS = [
    (TIB, "TiB"),
    (GIB, "GiB"),
    (MIB, "MiB"),
    (KIB, "KiB"),
]


def human_readable_size(size: int) -> str:
    """Format a byte count using binary (1024-based) units.

    Counts below 1 KiB are shown as whole bytes, everything else with two
    decimals in the largest unit that fits.

    Args:
        size: Number of bytes, must not be negative.

    Returns:
        Formatted size such as ``"1023 B"`` or ``"5.00 MiB"``.

    Raises:
        ValueError: If size is negative.
    """
    if size < 0:
        raise ValueError(f"Size must be non-negative, got {size}")

    for threshold, unit in _UNITS:
        if size >= threshold:
            return f"{size / threshold:.2f} {unit}"

    return f"{int(size)} B"


def format_duration(seconds: float) -> str:
    """Format an elapsed time for log output.

    Examples: ``"350.120ms"``, ``"2.500s"``, ``"1m5.000s"``.
    """
    if seconds < 1:
        return f"{seconds * 1000:.3f}ms"
    if seconds < 60:
        return f"{seconds:.3f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m{rest:.3f}s"
