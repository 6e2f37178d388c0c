import asyncio
from datetime import timedelta

from fabricctl.inlet.models import Failed, InletRequest, InletStatus, Successful
from fabricctl.inlet.route import Route
from fabricctl.utils.net import SocketAddress


class ScriptedChannel:
    """Returns the scripted replies in order; the last one repeats."""

    def __init__(self, replies, delay=0.0):
        self.replies = list(replies)
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def create_inlet(self, bind_addr, route, alias, authorized, connection_wait):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.calls.append((bind_addr, route, alias, authorized, connection_wait))
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]


def ok_reply(bind="127.0.0.1:5000", route="/service/outlet"):
    return Successful(InletStatus(bind_addr=bind, alias="inlet-1", outlet_route=route))


def not_ready(status=503):
    return Failed(message="outlet not ready", status=status)


def make_request(**kw):
    base = dict(
        node="n1",
        bind_addr=SocketAddress("127.0.0.1", 5000),
        route=Route.parse("/service/outlet"),
        connection_wait=timedelta(seconds=5),
        retry_wait=timedelta(seconds=20),
    )
    base.update(kw)
    return InletRequest(**base)


def no_guard(addr):
    return None
