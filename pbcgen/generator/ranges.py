"""Compression of sorted field numbers into ProtobufCIntRange tables."""

from bisect import bisect_right
from collections.abc import Sequence

from .printer import Printer
from .types import IntRange


def compress_ranges(values: Sequence[int]) -> tuple[list[IntRange], int]:
    """Compress ascending values into runs of consecutive numbers.

    Returns the range entries followed by a sentinel IntRange(0, len(values)),
    and the number of real ranges. Empty input yields no table at all.
    values must already be sorted; this is not checked.
    """
    if not values:
        return [], 0

    ranges: list[IntRange] = []
    last_range_start = 0
    for i in range(1, len(values)):
        if values[i - 1] + 1 != values[i]:
            count = i - last_range_start
            expected = values[i - 1] + 1
            ranges.append(IntRange(expected - count, last_range_start))
            last_range_start = i

    # last real entry
    count = len(values) - last_range_start
    expected = values[-1] + 1
    ranges.append(IntRange(expected - count, last_range_start))

    n_ranges = len(ranges)
    ranges.append(IntRange(0, len(values)))
    return ranges, n_ranges


def lookup_int_range(ranges: Sequence[IntRange], n_ranges: int, value: int) -> int | None:
    """Find the original index of value in a compressed table.

    This is the binary search the C runtime runs over the generated table.
    Returns None when value is not one of the compressed numbers.
    """
    if n_ranges == 0:
        return None

    starts = [r.start_value for r in ranges[:n_ranges]]
    pos = bisect_right(starts, value) - 1
    if pos < 0:
        return None

    entry = ranges[pos]
    # The next entry (or the sentinel) bounds the run length
    run_length = ranges[pos + 1].orig_index - entry.orig_index
    offset = value - entry.start_value
    if offset >= run_length:
        return None
    return entry.orig_index + offset


def write_int_ranges(printer: Printer, values: Sequence[int], name: str) -> int:
    """Emit a static ProtobufCIntRange table and return the number of ranges.

    Empty input emits a NULL define instead of a table.
    """
    variables = {"name": name}
    ranges, n_ranges = compress_ranges(values)
    if n_ranges == 0:
        printer.print("#define $name$ NULL\n", variables)
        return 0

    variables["n_ranges"] = str(n_ranges)
    printer.print("static const ProtobufCIntRange $name$[$n_ranges$ + 1] =\n{\n", variables)
    for entry in ranges[:n_ranges]:
        printer.print(
            "  { $start_value$, $orig_offset$ },\n",
            {"start_value": str(entry.start_value), "orig_offset": str(entry.orig_index)},
        )
    # sentinel
    printer.print("  { 0, $n_entries$ }\n", {"n_entries": str(len(values))})
    printer.print("};\n")
    return n_ranges
