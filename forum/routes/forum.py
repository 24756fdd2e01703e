"""
Theme-side forum routes

GET  /forum  → render entry point; fires forum_get_request[_<action>]
POST /forum  → form handler entry point; fires forum_post_request[_<action>]

Rendering itself belongs to the host; these routes report which template
and query variables the forum's filters settled on.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from forum.dependencies import forum_request, get_relay
from forum.hooks.relay import EventRelay
from forum.hooks.request import RequestContext  # noqa: TC001

router = APIRouter(tags=["Forum"])

DEFAULT_TEMPLATE = "forum/index.html"


class ForumPageResponse(BaseModel):
    method: str
    template: str
    locale: str
    query_vars: dict[str, Any]


def _page(relay: EventRelay, context: RequestContext) -> ForumPageResponse:
    registry = relay.registry
    query_vars = registry.apply_filters("request", dict(context.query))
    template = registry.apply_filters("template_include", DEFAULT_TEMPLATE)
    return ForumPageResponse(method=context.method, template=template, locale=relay.locale(), query_vars=query_vars)


@router.get("", response_model=ForumPageResponse)
async def forum_get(
    context: RequestContext = Depends(forum_request),
    relay: EventRelay = Depends(get_relay),
) -> ForumPageResponse:
    return _page(relay, context)


@router.post("", response_model=ForumPageResponse)
async def forum_post(
    context: RequestContext = Depends(forum_request),
    relay: EventRelay = Depends(get_relay),
) -> ForumPageResponse:
    return _page(relay, context)
