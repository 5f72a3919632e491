from . import fields
from . import control
from . import datastack
from . import message
from . import wire

from .fields import PROTOCOL_VERSION, TERMINAL
from .message import State
from .wire import decode, decode_listen, encode


"""
linkstack Protocol Layer
========================

This package defines the transport-agnostic message format used by
linkstack actors. A message is a single string carrying both "what happens
next" and "what data travels with it"::

    10+12+11|data 1||data 3
    ^^^^^^^^ ^^^^^^^^^^^^^^
    control  data stack

The protocol layer MUST NOT depend on any transport implementation
(e.g. the in-process link queue, ZeroMQ, etc).

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

State logic
    │
    ▼
Working State (message.py)
    Stack algebra applied in place during local processing
    - peek() / pop() / pop_default() / pop_list() / push()
    - push_head() / append_tail() / pop_head() / replace_head()

    │
    ▼
Message Codec (wire.py)
    State <-> message text
    - decode() / decode_listen()
    - encode()

    │
    ▼
Sequence Codecs (control.py, datastack.py)
    Ordered lists <-> separator-joined text
    Lenient integer conversion of state ids

    │
    ▼
Field Vocabulary (fields.py)
    Reserved separators and the terminal sentinel

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Dispatch
    advance_or_stop(): re-encode the state and hand it to the transport,
    unless the pipeline is terminal

Transport Layer
    Moves message text between actors
    - in-process link queue
    - ZeroMQ PUB/SUB bus

---------------------------------------------------------------------

Design Principles
-----------------

1. Transport Agnostic
   A message means the same thing regardless of how it travelled.

2. Degrade, Never Raise
   Malformed inbound text decodes to a terminal head and/or empty data.
   Nothing in the inbound path raises.

3. No Escaping
   ``|`` is reserved everywhere, ``+`` within the control sequence and
   within list-valued elements. A data element containing ``|`` corrupts
   the parse of everything behind it.

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
