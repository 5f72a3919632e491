"""Control sequence codec.

The control sequence is the ordered list of state ids still to visit,
joined with ``+``. Zero is never a valid state id; it marks the end of
the pipeline.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from .fields import CONTROL_SEP, TERMINAL


_leading_integer = re.compile(r"\s*(-?)(0x[0-9a-f]+|[0-9]+)", re.IGNORECASE)


def lenient_int(text) -> int:
    """ Convert the leading integer of *text* to an int. Surrounding text
        is ignored; anything that does not start with a (possibly negative)
        decimal or ``0x`` hexadecimal number yields zero.
    """

    if text is None:
        return TERMINAL

    match = _leading_integer.match(str(text))
    if match is None:
        return TERMINAL

    sign, digits = match.groups()

    if digits[:2].lower() == "0x":
        value = int(digits, 16)
    else:
        value = int(digits)

    if sign:
        value = -value

    return value


def split_head(text: str) -> Tuple[str, str]:
    """ Split control text at its first separator, returning the head text
        and the remainder. The remainder is empty if there is no separator.
    """

    head, _sep, rest = text.partition(CONTROL_SEP)
    return head, rest


def encode(ids: Iterable[int]) -> str:
    """ Join state ids into control text. Zero is rejected, it cannot be
        represented as an element of the sequence.
    """

    parts = list()

    for state_id in ids:
        state_id = int(state_id)
        if state_id == TERMINAL:
            raise ValueError("state id 0 is reserved and cannot be sent")
        parts.append(str(state_id))

    return CONTROL_SEP.join(parts)


def decode(text: str) -> List[int]:
    """ Parse control text into a list of state ids. Parsing stops at the
        first element that does not cast to a non-zero integer, since the
        pipeline terminates there.
    """

    ids = list()

    while text:
        head, text = split_head(text)
        state_id = lenient_int(head)
        if state_id == TERMINAL:
            break
        ids.append(state_id)

    return ids


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
