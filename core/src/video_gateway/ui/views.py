"""Server-side view routes: which page a URL renders, and its markup."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from video_gateway.ui.state import InitialState
from video_gateway.ui.templating import templates


@dataclass(frozen=True)
class ViewRoute:
    name: str
    pattern: re.Pattern[str] | None
    template: str
    with_layout: bool = True
    requires_login: bool = False

    def match(self, path: str) -> dict[str, str] | None:
        if self.pattern is None:
            return {}
        m = self.pattern.fullmatch(path)
        return m.groupdict() if m else None


HOME = ViewRoute("home", re.compile(r"/"), "views/home.html", requires_login=True)
PLAYER = ViewRoute(
    "player",
    re.compile(r"/player/(?P<id>[^/]+)"),
    "views/player.html",
    with_layout=False,
    requires_login=True,
)
LOGIN = ViewRoute("login", re.compile(r"/login"), "views/login.html")
REGISTER = ViewRoute("register", re.compile(r"/register"), "views/register.html")
NOT_FOUND = ViewRoute("not_found", None, "views/not_found.html")

# First match wins; NOT_FOUND matches anything.
ROUTES: tuple[ViewRoute, ...] = (HOME, PLAYER, LOGIN, REGISTER, NOT_FOUND)


def resolve_view(path: str, logged: bool) -> tuple[ViewRoute, dict[str, str]]:
    if len(path) > 1:
        path = path.rstrip("/")
    for route in ROUTES:
        params = route.match(path)
        if params is None:
            continue
        if route.requires_login and not logged:
            return LOGIN, {}
        return route, params
    return NOT_FOUND, {}


def render_view(path: str, state: InitialState) -> str:
    """Render the markup for `path` (no document wrapper)."""

    route, params = resolve_view(path, state.logged)

    context: dict[str, Any] = {
        "user": state.user,
        "logged": state.logged,
        "my_list": state.my_list,
        "trends": state.trends,
        "originals": state.originals,
    }

    if route is PLAYER:
        movie = state.find_movie(params["id"])
        if movie is None:
            route = NOT_FOUND
        context["movie"] = movie

    context["view"] = route.name
    context["with_layout"] = route.with_layout
    return templates.get_template(route.template).render(context)
