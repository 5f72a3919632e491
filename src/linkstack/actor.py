""" The :class:`Actor` ties state handlers to a transport. Each handler is
    the local processing for one state id: it receives the decoded
    :class:`linkstack.protocol.State`, reads and writes the stacks, and
    returns. The actor then re-encodes the state and advances the pipeline.
"""

import structlog

from . import config
from . import dispatch
from . import transport as transport_module
from .protocol import wire
from .protocol.fields import TERMINAL


logger = structlog.get_logger(__name__)


class Actor:
    """ An :class:`Actor` is one independent state machine sharing a
        transport with its peers. It answers to the state ids it has
        handlers for, and nothing else.

        *transport* defaults to :func:`linkstack.transport.default`.
        *link_target* is passed to the transport with every outbound
        message; it defaults to :func:`linkstack.config.link_target`.
        *registry*, if provided, allows handlers to be registered by state
        name instead of by state id.

        Messages are processed one at a time: decode, handler, dispatch. A
        handler that raises is logged, and the message goes no further.
    """

    def __init__(self, transport=None, link_target=None, registry=None):

        if transport is None:
            transport = transport_module.default()

        if link_target is None:
            link_target = config.link_target()

        self.transport = transport
        self.link_target = link_target
        self.registry = registry

        self.handlers = dict()
        self.channels = set()


    def _resolve(self, state):

        if isinstance(state, str):
            if self.registry is None:
                raise ValueError('no registry to look up state name ' + repr(state))
            state_id = self.registry[state]
        else:
            state_id = int(state)

        if state_id == TERMINAL:
            raise ValueError('state id 0 is reserved and cannot have a handler')

        return state_id


    def _claim(self, slot):

        if slot in self.handlers or slot in self.channels:
            raise ValueError('slot %d is already in use by this actor' % (slot))

        if self.transport.listening(slot):
            raise ValueError('slot %d is already in use on this transport' % (slot))


    def on(self, state):
        """ Decorator form of :func:`add_handler`::

                @actor.on(10)
                def greet(state):
                    state.push('hello ' + state.pop())
        """

        def decorator(handler):
            self.add_handler(state, handler)
            return handler

        return decorator


    def add_handler(self, state, handler):
        """ Invoke *handler* for every message sent to *state*, which is
            either a state id or a name known to the registry. Returns the
            state id.
        """

        state_id = self._resolve(state)
        self._claim(state_id)

        self.handlers[state_id] = handler
        self.transport.listen(state_id, self.receive)

        logger.debug('handler added', state=state_id, handler=getattr(handler, '__name__', repr(handler)))
        return state_id


    def remove_handler(self, state):

        state_id = self._resolve(state)

        try:
            del self.handlers[state_id]
        except KeyError:
            return

        self.transport.unlisten(state_id)


    def listen_channel(self, channel):
        """ Accept complete messages on *channel*. Unlike a message sent to
            a state handler, a channel message still carries its routing
            head; see :func:`hear`.
        """

        channel = int(channel)
        self._claim(channel)

        self.channels.add(channel)
        self.transport.listen(channel, self.hear)


    def close(self):

        for state_id in list(self.handlers):
            self.remove_handler(state_id)

        for channel in list(self.channels):
            self.transport.unlisten(channel)

        self.channels.clear()


    def advance(self, state, token=None):
        dispatch.advance_or_stop(state, self.link_target, token, send=self.transport.send)


    def start(self, raw, token=None):
        """ Inject the message *raw* into the pipeline. The first state id
            in *raw* is the first handler to run.
        """

        state = wire.decode(raw)
        self.advance(state, token)
        return state


    def hear(self, slot, payload, token=None):
        """ Transport callback for channel listeners. The channel message is
            decoded with its routing head intact and forwarded to the state
            handler that head names.
        """

        state = wire.decode_listen(payload)

        if state.channel != slot:
            logger.debug('channel head mismatch', slot=slot, channel=state.channel)

        self.advance(state, token)


    def receive(self, slot, payload, token=None):
        """ Transport callback for state handlers. *slot* is the state id
            the message was addressed to; *payload* carries the rest of the
            pipeline and the data stack.
        """

        try:
            handler = self.handlers[slot]
        except KeyError:
            logger.debug('no handler for state', state=slot)
            return

        state = wire.decode(payload)
        state.channel = slot

        try:
            handler(state)
        except Exception:
            logger.exception('handler failed, pipeline stopped', state=slot, seq=state.seq)
            return

        self.advance(state, token)


# end of class Actor


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
