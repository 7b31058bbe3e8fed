"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Utility functions - error reporting and small integer helpers
"""


def error(format_str: str, *args) -> bool:
    """
    Error reporting function (matches the node's error())

    Formats error message and prints it with "ERROR: " prefix.
    Always returns False for use in return statements.

    Args:
        format_str: Format string (supports %s, %d, etc.)
        *args: Arguments for format string

    Returns:
        Always returns False

    Example:
        if condition:
            return error("Operation failed: %s", reason)
    """
    try:
        message = format_str % args if args else format_str
    except (TypeError, ValueError):
        # Fallback if formatting fails
        message = format_str + " " + " ".join(str(arg) for arg in args)

    print(f"ERROR: {message}")
    return False


def to_int32(n: int) -> int:
    """Reinterpret the low 32 bits of n as a signed integer"""
    n &= 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n
