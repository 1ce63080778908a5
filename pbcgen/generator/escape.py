"""Escaping of raw bytes into C string literal bodies."""

_SIMPLE_ESCAPES = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord('"'): '\\"',
    ord("'"): "\\'",
    ord("\\"): "\\\\",
}

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


class EscapeCapacityError(RuntimeError):
    """Raised when escaped output does not fit the requested buffer size."""


def _is_print(byte: int) -> bool:
    return 0x20 <= byte <= 0x7E


def max_escaped_size(src_len: int) -> int:
    """Worst case buffer size for escaping src_len bytes, including the NUL."""
    return src_len * 4 + 1


def cescape(src: bytes, *, use_hex: bool = True, max_length: int | None = None) -> str:
    """Escape bytes so they can be embedded between double quotes in C.

    Non-printable bytes become fixed width escapes (\\xHH, or \\ooo when
    use_hex is False). C hex escapes are greedy, so a hex digit that directly
    follows a hex escape is escaped as well.

    Args:
        src: Raw bytes to escape
        max_length: Size of a destination buffer, including the terminating
                    NUL. Raises EscapeCapacityError when the result would not
                    fit. None means the output is unbounded.
    """
    if max_length is not None and max_length < 1:
        raise EscapeCapacityError("no room for the terminating NUL")

    out: list[str] = []
    used = 0
    last_hex_escape = False

    for byte in src:
        is_hex_escape = False
        if byte in _SIMPLE_ESCAPES:
            unit = _SIMPLE_ESCAPES[byte]
        elif not _is_print(byte) or (last_hex_escape and byte in _HEX_DIGITS):
            unit = f"\\x{byte:02x}" if use_hex else f"\\{byte:03o}"
            is_hex_escape = use_hex
        else:
            unit = chr(byte)

        used += len(unit)
        if max_length is not None and used + 1 > max_length:
            raise EscapeCapacityError(
                f"escaped data needs more than {max_length} bytes ({len(src)} input bytes)"
            )
        out.append(unit)
        last_hex_escape = is_hex_escape

    return "".join(out)
