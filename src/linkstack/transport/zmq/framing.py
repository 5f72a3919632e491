"""ZMQ multipart framing for linkstack messages.

PUB/SUB
    topic_with_trailing_dot, version, target, payload, token

The topic is the destination slot; the trailing dot keeps a subscription
to slot 1 from also matching slots 10, 11, 100 and so on. The payload is
the message text exactly as the dispatcher produced it.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ...protocol import PROTOCOL_VERSION


_VERSION_BYTES = PROTOCOL_VERSION.encode()


def topic(slot: int) -> bytes:
    return (str(int(slot)) + ".").encode()


def to_frames(target: str, slot: int, payload: str, token: Optional[str] = None) -> Tuple[bytes, ...]:
    """Encode one outbound message for a PUB socket."""

    if token is None:
        token_b = b""
    else:
        token_b = str(token).encode()

    return (
        topic(slot),
        _VERSION_BYTES,
        (target or "").encode(),
        payload.encode(),
        token_b,
    )


def from_frames(parts: Sequence[bytes]) -> Tuple[str, int, str, Optional[str]]:
    """Decode SUB parts into (target, slot, payload, token).

    Raises ValueError for anything that is not a linkstack message of this
    protocol version.
    """

    if len(parts) < 5:
        raise ValueError("invalid linkstack message: %d parts" % (len(parts)))

    their_version = parts[1]
    if their_version != _VERSION_BYTES:
        raise ValueError(
            f"message is linkstack protocol {their_version!r}, recipient expects {_VERSION_BYTES!r}"
        )

    slot = parts[0].decode()
    if slot.endswith("."):
        slot = slot[:-1]

    target = parts[2].decode()
    payload = parts[3].decode()
    token = parts[4].decode() if parts[4] not in (b"", None) else None

    return target, int(slot), payload, token
