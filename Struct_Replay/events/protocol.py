"""MessagePack helpers for event logs and structure snapshots.

Backends running outside the engine process exchange ``EventLog`` and
``Snapshot`` messages. Payloads are versioned via a ``v`` field and include a
``type`` discriminator. Unknown versions, missing fields and record kinds
that do not belong to the message's structure family raise a ``ValueError``
to keep the contract stable.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

import msgpack  # type: ignore[import-untyped]

from .log import EventLog
from .records import KINDS, ActionRecord, BucketData, Family, GraphSnapshot, TreeNodeData

EVENT_LOG_VERSION = 1
SNAPSHOT_VERSION = 1


def _check(msg: Dict[str, Any], expected: str, version: int) -> None:
    if not isinstance(msg, dict) or msg.get("type") != expected:
        raise ValueError(f"expected type '{expected}'")
    if "v" not in msg:
        raise ValueError("missing 'v' field")
    if msg["v"] != version:
        raise ValueError(f"unsupported {expected} version: {msg['v']}")


def pack_event_log(log: EventLog, family: str) -> bytes:
    """Return msgpack-encoded ``EventLog`` message for ``family``."""
    payload = {
        "type": "EventLog",
        "v": EVENT_LOG_VERSION,
        "family": family,
        "records": [r.to_dict() for r in log],
    }
    return msgpack.packb(payload, use_bin_type=True)


def _event_log_from_msg(msg: Dict[str, Any]) -> tuple[str, EventLog]:
    _check(msg, "EventLog", EVENT_LOG_VERSION)
    try:
        family = Family(msg.get("family"))
    except ValueError:
        raise ValueError(f"unknown structure family: {msg.get('family')!r}") from None
    records = [ActionRecord.from_dict(r) for r in msg.get("records", [])]
    for rec in records:
        if rec.kind not in KINDS[family]:
            raise ValueError(f"{family.value} logs have no {rec.kind!r} records")
    return family.value, EventLog(records)


def unpack_event_log(raw: bytes) -> tuple[str, EventLog]:
    """Decode an ``EventLog`` message and return ``(family, log)``."""
    return _event_log_from_msg(msgpack.unpackb(raw, raw=False))


def unpack_event_logs(raw: bytes) -> List[tuple[str, EventLog]]:
    """Decode a stream of concatenated ``EventLog`` messages."""
    unpacker = msgpack.Unpacker(raw=False)
    unpacker.feed(raw)
    return [_event_log_from_msg(msg) for msg in unpacker]


def pack_snapshot(family: str, snapshot: Any) -> bytes:
    """Return msgpack-encoded ``Snapshot`` message.

    ``snapshot`` is the value returned by the backend's ``snapshot`` (or
    ``array`` for heaps) call.
    """
    if family == "tree":
        body: Any = [asdict(n) for n in snapshot]
    elif family == "hash":
        body = [{"index": b.index, "keys": list(b.keys)} for b in snapshot]
    elif family == "graph":
        body = {
            "vertices": list(snapshot.vertices),
            "edges": [list(e) for e in snapshot.edges],
        }
    elif family == "heap":
        body = list(snapshot)
    else:
        raise ValueError(f"unknown structure family: {family}")
    payload = {"type": "Snapshot", "v": SNAPSHOT_VERSION, "family": family, "data": body}
    return msgpack.packb(payload, use_bin_type=True)


def unpack_snapshot(raw: bytes) -> tuple[str, Any]:
    """Decode a ``Snapshot`` message and return ``(family, snapshot)``."""
    msg = msgpack.unpackb(raw, raw=False)
    _check(msg, "Snapshot", SNAPSHOT_VERSION)
    family = msg.get("family")
    data = msg.get("data")
    if family == "tree":
        nodes: List[TreeNodeData] = [TreeNodeData(**n) for n in data]
        return family, nodes
    if family == "hash":
        return family, [BucketData(b["index"], tuple(b["keys"])) for b in data]
    if family == "graph":
        return family, GraphSnapshot(
            vertices=tuple(data["vertices"]),
            edges=tuple(tuple(e) for e in data["edges"]),
        )
    if family == "heap":
        return family, list(data)
    raise ValueError(f"unknown structure family: {family}")


__all__ = [
    "pack_event_log",
    "unpack_event_log",
    "unpack_event_logs",
    "pack_snapshot",
    "unpack_snapshot",
]
