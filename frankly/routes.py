"""
Resource route table.

Every per-resource method on FranklyClient (create_room, read_user,
delete_room_owner, ...) is generated from a row of this table and
dispatched through FranklyClient.request.

Calling convention of a generated method:
    positional arguments fill the {placeholders} of the template in order;
    one extra argument is the JSON payload (body routes) or the query
    params (query routes). ``payload=`` and ``params=`` also work as
    keywords.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable

_PLACEHOLDER = re.compile(r"^\{(\w+)\}$")

ROOM_ROLES = ("owner", "moderator", "member", "announcer", "subscriber")


@dataclass(frozen=True)
class Route:
    name: str
    method: str
    template: str
    body: bool = False
    query: bool = False

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Names of the identifier segments, in path order."""
        return tuple(
            match.group(1)
            for match in map(_PLACEHOLDER.match, self.template.split("/"))
            if match
        )

    def path(self, *ids: Any) -> list[str]:
        """Substitute identifiers into the template, returning path segments."""
        names = self.placeholders
        if len(ids) != len(names):
            raise TypeError(
                f"{self.name}() takes {len(names)} identifier(s) "
                f"({', '.join(names) or 'none'}), got {len(ids)}"
            )
        values = iter(ids)
        return [
            str(next(values)) if _PLACEHOLDER.match(segment) else segment
            for segment in self.template.split("/")
        ]


def _room_role_routes() -> list[Route]:
    routes = []
    for role in ROOM_ROLES:
        collection = f"rooms/{{room_id}}/{role}s"
        routes += [
            Route(f"create_room_{role}", "POST", f"{collection}/{{user_id}}"),
            Route(f"read_room_{role}_list", "GET", collection),
            Route(f"delete_room_{role}", "DELETE", f"{collection}/{{user_id}}"),
        ]
    return routes


ROUTES: tuple[Route, ...] = (
    # Rooms
    Route("create_room", "POST", "rooms", body=True),
    Route("read_room_list", "GET", "rooms", query=True),
    Route("read_room", "GET", "rooms/{room_id}"),
    Route("update_room", "PUT", "rooms/{room_id}", body=True),
    Route("delete_room", "DELETE", "rooms/{room_id}"),
    Route("read_room_participant_list", "GET", "rooms/{room_id}/participants"),
    Route("read_room_count", "GET", "rooms/{room_id}/count"),
    *_room_role_routes(),
    # Announcements
    Route("create_announcement", "POST", "announcements", body=True),
    Route("read_announcement_list", "GET", "announcements"),
    Route("read_announcement", "GET", "announcements/{announcement_id}"),
    Route("delete_announcement", "DELETE", "announcements/{announcement_id}"),
    Route("read_announcement_room_list", "GET", "announcements/{announcement_id}/rooms"),
    # Messages
    Route("create_room_message", "POST", "rooms/{room_id}/messages", body=True),
    Route("read_room_message_list", "GET", "rooms/{room_id}/messages", query=True),
    Route("read_room_message", "GET", "rooms/{room_id}/messages/{message_id}"),
    Route("create_room_message_flag", "POST", "rooms/{room_id}/messages/{message_id}/flag"),
    # Users
    Route("create_user", "POST", "users", body=True),
    Route("read_user", "GET", "users/{user_id}"),
    Route("update_user", "PUT", "users/{user_id}", body=True),
    Route("delete_user", "DELETE", "users/{user_id}"),
    Route("read_user_ban", "GET", "users/{user_id}/ban"),
    # Files
    Route("create_file", "POST", "files", body=True),
    # Sessions
    Route("read_session", "GET", "sessions"),
    Route("delete_session", "DELETE", "sessions"),
    # Apps
    Route("read_app", "GET", "apps/{app_id}"),
)

ROUTES_BY_NAME = {route.name: route for route in ROUTES}


def make_method(route: Route) -> Callable[..., Any]:
    """Build the client method for one route."""
    arity = len(route.placeholders)

    def method(self, *args: Any, payload: Any = None, params: Any = None) -> Any:
        ids, extra = args[:arity], args[arity:]
        if len(extra) > 1 or (extra and not (route.body or route.query)):
            raise TypeError(
                f"{route.name}() takes {arity} positional argument(s), got {len(args)}"
            )
        if extra and route.body:
            payload = extra[0]
        elif extra:
            params = extra[0]
        return self.request(route.method, route.path(*ids), params=params, payload=payload)

    args = ", ".join(route.placeholders + (("payload",) if route.body else ()))
    method.__name__ = route.name
    method.__qualname__ = route.name
    method.__doc__ = f"{route.name}({args}) -> {route.method} /{route.template}"
    return method


def bind_routes(cls: type) -> type:
    """
    Class decorator installing one method per route.

    Methods the class defines itself take precedence over the table.
    """
    for route in ROUTES:
        if route.name not in cls.__dict__:
            setattr(cls, route.name, make_method(route))
    return cls
