"""ZeroMQ transport backend."""

from .bus import Bus, BROADCAST, bus
