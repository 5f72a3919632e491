"""Message codec.

Layout of a message on the wire::

    [control][|][data]

The control half is a ``+``-separated sequence of state ids, the data half
a ``|``-separated stack of strings. Either half may be empty; if there is
no ``|`` at all the whole message is control text.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from . import control
from . import datastack
from .fields import DATA_SEP, TERMINAL
from .message import State


def _parse(raw: str) -> Tuple[str, str, str, str]:
    """ Return (head_text, rest, seq, data) for the *raw* message text.
    """

    seq, sep, data = raw.partition(DATA_SEP)

    if sep and seq == "":
        # Nothing in front of the separator: an explicit terminal head.
        head = "0"
        rest = ""
    else:
        head, rest = control.split_head(seq)

    return head, rest, seq, data


def decode(raw: str) -> State:
    """ Deserialize message text -> State
    """

    head, rest, seq, data = _parse(raw)

    if head == "":
        next = TERMINAL
    else:
        next = control.lenient_int(head)

    return State(next=next, rest=rest, seq=seq, data=data)


def decode_listen(raw: str) -> State:
    """ Deserialize message text -> State, for messages received by a
        channel listener. The routing channel is derived from the same head
        text as :attr:`State.next`; existing deployments route on it.
    """

    state = decode(raw)

    head, _rest, _seq, _data = _parse(raw)

    if head == "":
        state.channel = TERMINAL
    else:
        state.channel = control.lenient_int(head)

    return state


def encode(state: State) -> str:
    """ Serialize State -> message text for the next hop. The head has
        already served its purpose (selecting the destination) and is not
        included.
    """

    return state.rest + DATA_SEP + state.data


def split(raw: str) -> Tuple[List[int], List[str]]:
    """ Parse message text into its control sequence and data stack.
    """

    seq, _sep, data = raw.partition(DATA_SEP)
    return control.decode(seq), datastack.decode(data)


def join(ids: Iterable[int], values: Iterable) -> str:
    """ Build message text from a control sequence and a data stack.
    """

    return control.encode(ids) + DATA_SEP + datastack.encode(values)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
