"""Data stack codec.

A data stack is an ordered list of strings joined with ``|``. There is no
escaping: an element containing ``|`` will be split on decode.
"""

from __future__ import annotations

from typing import Iterable, List

from .fields import DATA_SEP


def encode(values: Iterable) -> str:
    """ Join *values* into a single data stack string. Non-string values
        are converted with :func:`str`.
    """

    return DATA_SEP.join(str(value) for value in values)


def decode(text: str) -> List[str]:
    """ Split a data stack string into its elements. Empty elements are
        retained; the empty string decodes to an empty stack.
    """

    if not text:
        return []

    return text.split(DATA_SEP)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
