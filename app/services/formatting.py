"""
Display formatting for channel counters.
"""


def _compact(value: float, suffix: str) -> str:
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text + suffix


def format_count(count: int) -> str:
    """
    Render a counter the way the channel page shows it.

    1500 -> "1.5K", 2500000 -> "2.5M", 999 -> "999". One decimal place,
    a trailing ".0" is dropped.
    """
    if count >= 1_000_000:
        return _compact(count / 1_000_000, "M")
    if count >= 1_000:
        return _compact(count / 1_000, "K")
    return str(count)
