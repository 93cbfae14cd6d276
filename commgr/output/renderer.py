"""
CSV rendering of community lists.

Rows are written and flushed one at a time, so a failure part way
through leaves a valid CSV prefix in the sink.
"""

import csv
from typing import Iterable, TextIO

from commgr.core.models import FIELDS, Community
from commgr.exceptions import WriteError


def render_csv(communities: Iterable[Community], sink: TextIO) -> int:
    """
    Write communities to a text stream as CSV.

    Emits the header ``id,clients,persistent`` followed by one row per
    community in the given order.

    Parameters
    ----------
    communities : Iterable[Community]
        Communities to render
    sink : TextIO
        Output stream (e.g. sys.stdout)

    Returns
    -------
    int
        Number of data rows written

    Raises
    ------
    WriteError
        On the first failed write or flush; remaining rows are skipped

    Examples
    --------
    >>> import sys
    >>> render_csv([Community("a", 3, True)], sys.stdout)
    id,clients,persistent
    a,3,true
    1
    """
    writer = csv.writer(sink, lineterminator="\n")

    _write_row(writer, sink, FIELDS)

    count = 0
    for community in communities:
        _write_row(writer, sink, community.to_row())
        count += 1

    return count


def _write_row(writer, sink: TextIO, row) -> None:
    """Write and flush a single row."""
    try:
        writer.writerow(row)
        sink.flush()
    except (OSError, ValueError) as e:
        # ValueError: I/O operation on closed file
        raise WriteError(f"Failed to write output: {e}") from e
