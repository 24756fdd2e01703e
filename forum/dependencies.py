"""
FastAPI dependencies

The relay lives on ``app.state`` so tests and embedding hosts can supply
their own registry through ``create_app``.
"""

from __future__ import annotations

from fastapi import Depends, Request

from forum.hooks.relay import EventRelay
from forum.hooks.request import RequestContext


def get_relay(request: Request) -> EventRelay:
    return request.app.state.relay


async def forum_request(request: Request, relay: EventRelay = Depends(get_relay)) -> RequestContext:
    """
    Run the host's per-request hooks for a theme-side forum request.

    Fires ``set_current_user`` and then ``template_redirect`` with the
    request context, which is where the forum's request checkpoints are
    bound.
    """
    context = await RequestContext.from_starlette(request)
    relay.registry.do_action("set_current_user")
    relay.registry.do_action("template_redirect", context)
    return context
