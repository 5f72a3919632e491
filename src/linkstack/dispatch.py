""" Hand a processed message on to the next hop. This is the last thing that
    happens to a :class:`linkstack.protocol.State`: the state is re-encoded
    and sent on the slot named by its head, or, if the head is terminal,
    nothing happens at all and the pipeline ends.
"""

import structlog

from . import config
from . import transport
from .protocol import wire
from .protocol.fields import TERMINAL


logger = structlog.get_logger(__name__)


def advance_or_stop(state, link_target=None, token=None, send=None):
    """ Send *state* to the state id in ``state.next``, unless it is terminal.

        *link_target* selects which listeners the transport should deliver
        to; it defaults to :func:`linkstack.config.link_target`. *token* is
        passed along untouched, for the benefit of callers matching requests
        to responses. *send* is the send primitive, called as
        ``send(link_target, slot, payload, token)``; it defaults to the
        ``send`` method of :func:`linkstack.transport.default`.

        Nothing is returned. Whether the message arrives is not observable
        here.
    """

    if state.next == TERMINAL:
        logger.debug('pipeline complete', seq=state.seq)
        return

    if link_target is None:
        link_target = config.link_target()

    if send is None:
        send = transport.default().send

    payload = wire.encode(state)

    logger.debug('advancing', slot=state.next, target=link_target, payload=payload)
    send(link_target, state.next, payload, token)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
