""" Python implementation of linkstack: a message format, and the stack
    algebra around it, for chaining independent state-machine actors over a
    shared, unordered message channel. A message names the states still to
    visit and carries the data they operate on, all in one string.
"""

# Utility components.

from . import json
from . import log

# Submodules used by multiple other components.

from . import protocol
from . import registry
from . import config
home = config.directory

from . import transport
from . import dispatch

# Primary public-facing interfaces.

from .protocol import State, decode, decode_listen, encode
from .dispatch import advance_or_stop
from .registry import Registry
from .actor import Actor

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
