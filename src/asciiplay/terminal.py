from asciiplay.formatter import ESC, RESET

__all__ = ["RESET", "cursor_up"]


def cursor_up(lines: int) -> str:
    """Escape sequence moving the cursor ``lines`` rows up (empty for zero)."""
    if lines <= 0:
        return ""
    return f"{ESC}[{lines}A"
