"""Unit tests for the realtime broadcaster."""

import pytest

from ferrecloud.core import realtime
from ferrecloud.core.realtime import ConnectionManager, build_event, publish_safely


class FakeSocket:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


def test_build_event_shape():
    event = build_event("price_update", "applied", {"id": 7})

    assert event["type"] == "price_update.applied"
    assert event["channel"] == "global"
    assert event["payload"] == {"id": 7}
    assert event["sentAt"]


@pytest.mark.asyncio
async def test_broadcast_drops_broken_clients():
    mgr = ConnectionManager()
    ok, broken = FakeSocket(), FakeSocket(fail=True)
    await mgr.connect(ok)
    await mgr.connect(broken)

    delivered = await mgr.broadcast({"type": "product.updated"})

    assert ok.accepted and broken.accepted
    assert delivered == 1
    assert ok.sent == [{"type": "product.updated"}]
    assert mgr.size == 1


@pytest.mark.asyncio
async def test_publish_safely_never_raises(monkeypatch):
    async def boom(message):
        raise RuntimeError("broker down")

    monkeypatch.setattr(realtime.manager, "broadcast", boom)

    await publish_safely("product", "updated", {"id": 1})
