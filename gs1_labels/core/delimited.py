"""
Delimited text tokenizing.

Handles the loosely formatted CSV exports that label batches arrive in:
- Delimiter detection from the header line (comma, semicolon, tab, pipe)
- Double-quote quoting with "" as an escaped quote
- Graceful degradation on unbalanced quotes
"""

from __future__ import annotations

from typing import List, Sequence, Tuple


QUOTE = '"'

# Declared order doubles as the tie-breaker: comma wins ties.
CANDIDATE_DELIMITERS: Tuple[str, ...] = (",", ";", "\t", "|")

DEFAULT_DELIMITER = ","


def detect_delimiter(
    header_line: str,
    candidates: Sequence[str] = CANDIDATE_DELIMITERS
) -> str:
    """
    Pick the delimiter that occurs most often in a header line.

    Ties go to the candidate declared first. If no candidate occurs at
    all (single-column header) the result is a comma.

    Args:
        header_line: First line of the file
        candidates: Ordered candidate delimiters

    Returns:
        The detected delimiter character
    """
    best = DEFAULT_DELIMITER
    best_count = 0
    for candidate in candidates:
        count = header_line.count(candidate)
        # strict > keeps the earlier candidate on ties
        if count > best_count:
            best = candidate
            best_count = count
    return best


def parse_delimited_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """
    Split one line into trimmed cell values.

    A quote outside a field toggles quoted state; inside quotes the
    delimiter is literal and a doubled quote stands for one quote
    character. An unmatched quote leaves the rest of the line quoted.

    Examples:
        >>> parse_delimited_line('a, "b,c" ,d')
        ['a', 'b,c', 'd']
        >>> parse_delimited_line('"a ""b"" c";x', ';')
        ['a "b" c', 'x']
        >>> parse_delimited_line('')
        ['']
    """
    cells: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1

    cells.append("".join(current).strip())
    return cells
