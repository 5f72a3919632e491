"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Separates control from data, and each data element from the next.
DATA_SEP = "|"

# Separates state ids within the control sequence.
CONTROL_SEP = "+"

# Default separator for list-valued data elements.
LIST_SEP = "+"

# Reserved head value: no further hop.
TERMINAL = 0

# Version byte for transports that frame messages (see transport.zmq).
PROTOCOL_VERSION = "a"
