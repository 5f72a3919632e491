""" The working state for a single in-flight message. A :class:`State` is
    created when a message is decoded, mutated in place by the state logic
    via the stack operations defined here, and discarded once the message
    has been dispatched to the next hop.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from . import control as control_codec
from . import datastack
from .fields import CONTROL_SEP, DATA_SEP, LIST_SEP, TERMINAL


class State:
    """ A :class:`State` holds everything a state handler can read or
        modify while processing one message. The fields mirror the two
        halves of the wire format:

        :ivar next: The head of the control sequence; the state id the
            message will be sent to next. Zero means the pipeline ends here.
        :ivar rest: The control text remaining after *next* is removed.
        :ivar seq: The full control text, *next* included.
        :ivar data: The data stack text.
        :ivar channel: The routing channel the message arrived on, if the
            message was received by a listener; None otherwise.

        Whenever *next* is non-zero, *seq* is *next* joined to *rest*. The
        data stack operations never touch the control fields, and vice versa.
    """

    def __init__(self, next=TERMINAL, rest="", seq="", data="", channel=None):

        self.next = next
        self.rest = rest
        self.seq = seq
        self.data = data
        self.channel = channel


    def __repr__(self):
        return "State(next=%r, rest=%r, seq=%r, data=%r, channel=%r)" % (
            self.next, self.rest, self.seq, self.data, self.channel)


    def __eq__(self, other):

        if not isinstance(other, State):
            return NotImplemented

        mine = (self.next, self.rest, self.seq, self.data, self.channel)
        theirs = (other.next, other.rest, other.seq, other.data, other.channel)
        return mine == theirs


    @property
    def control(self) -> List[int]:
        """ The pending control sequence as a list of state ids, head first.
            A terminal state has no pending control sequence.
        """

        if self.next == TERMINAL:
            return []

        return [self.next] + control_codec.decode(self.rest)


    @property
    def items(self) -> List[str]:
        """ The data stack as a list of strings, top first.
        """

        return datastack.decode(self.data)


    def is_empty(self) -> bool:
        return self.data == ""


    def is_terminal(self) -> bool:
        return self.next == TERMINAL


    def _rebuild_seq(self):

        if self.next == TERMINAL:
            self.seq = self.rest
        elif self.rest:
            self.seq = str(self.next) + CONTROL_SEP + self.rest
        else:
            self.seq = str(self.next)


    # Data stack operations.

    def peek(self) -> str:
        """ Return the top of the data stack without removing it.
        """

        top, _sep, _rest = self.data.partition(DATA_SEP)
        return top


    def pop(self) -> str:
        """ Remove and return the top of the data stack. An empty element
            on top of the stack pops as the empty string, the same as an
            empty stack does; the difference is that the separator behind
            an empty element is consumed along with it.
        """

        top, sep, remainder = self.data.partition(DATA_SEP)

        if sep:
            self.data = remainder
        else:
            self.data = ""

        return top


    def pop_default(self, default):
        """ Remove and return the top of the data stack, or return *default*
            if the stack is empty. An explicit empty element is returned as
            the empty string, not as the default.
        """

        if self.data == "":
            return default

        return self.pop()


    def pop_list(self, sep=LIST_SEP) -> List[str]:
        """ Remove the top of the data stack and split it by *sep* into a
            list, retaining empty substrings. An empty stack is left as-is
            and yields an empty list; an explicit empty element is consumed
            and also yields an empty list.
        """

        if self.data == "":
            return []

        top = self.pop()

        if top == "":
            return []

        return top.split(sep)


    def push(self, value):
        """ Put *value* on top of the data stack. This is safe to call
            regardless of whether the stack is empty.
        """

        value = str(value)

        if self.data == "":
            self.data = value
        else:
            self.data = value + DATA_SEP + self.data


    def push_known_nonempty(self, value):
        """ Put *value* on top of a data stack the caller knows is not
            empty. Calling this on an empty stack leaves a trailing empty
            element behind *value*.
        """

        self.data = str(value) + DATA_SEP + self.data


    def push_list(self, values: Iterable, sep=LIST_SEP):
        """ Join *values* with *sep* and push the result as one element.
            This is the inverse of :func:`pop_list`.
        """

        self.push(sep.join(str(value) for value in values))


    # Control sequence operations.

    def push_head(self, state_id):
        """ Schedule *state_id* to run immediately after :attr:`next`, ahead
            of the rest of the previously scheduled sequence.
        """

        state_id = str(state_id)

        if self.rest:
            self.rest = state_id + CONTROL_SEP + self.rest
        else:
            self.rest = state_id

        self._rebuild_seq()


    def push_head_known_nonempty(self, state_id):
        self.rest = str(state_id) + CONTROL_SEP + self.rest
        self._rebuild_seq()


    def append_tail(self, state_id):
        """ Schedule *state_id* to run after everything else in the control
            sequence.
        """

        state_id = str(state_id)

        if self.rest:
            self.rest = self.rest + CONTROL_SEP + state_id
        else:
            self.rest = state_id

        if self.seq:
            self.seq = self.seq + CONTROL_SEP + state_id
        else:
            self.seq = state_id


    def append_tail_known_nonempty(self, state_id):
        state_id = str(state_id)
        self.rest = self.rest + CONTROL_SEP + state_id
        self.seq = self.seq + CONTROL_SEP + state_id


    def pop_head(self) -> int:
        """ Discard :attr:`next` and advance to the following state id,
            which is returned. Advancing past the end of the sequence leaves
            the state terminal.
        """

        remainder = self.rest
        self.seq = remainder

        if remainder:
            head, self.rest = control_codec.split_head(remainder)
            self.next = control_codec.lenient_int(head)
        else:
            self.next = TERMINAL

        return self.next


    def replace_head(self, state_id):
        """ Send the message to *state_id* next, instead of :attr:`next`.
            Nothing previously scheduled is discarded: the old sequence,
            including the old head, becomes the remainder.
        """

        self.rest = self.seq
        self.next = int(state_id)
        self._rebuild_seq()


# end of class State


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
