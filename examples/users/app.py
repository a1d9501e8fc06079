"""Users — a JSON API on exact-match routes.

Every route is a fixed method + path; the record to act on travels in
the JSON body rather than the URL.

Run with any ASGI server, e.g.:
    cd examples/users && <asgi-server> app:app
"""

import threading
from dataclasses import dataclass

from tern import App

app = App()


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    age: int


_users: dict[int, User] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return n


def _to_dict(user: User) -> dict:
    return {"id": user.id, "name": user.name, "age": user.age}


def _require_object(request, response) -> dict | None:
    if not isinstance(request.body, dict):
        response.send_json({"error": "expected a JSON object"}, status=422)
        return None
    return request.body


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/users")
def list_users(request, response):
    response.send_json([_to_dict(u) for u in _users.values()])


@app.post("/users")
def create_user(request, response):
    data = _require_object(request, response)
    if data is None:
        return
    user = User(id=_get_next_id(), name=str(data["name"]), age=int(data.get("age", 0)))
    _users[user.id] = user
    response.send_json(_to_dict(user), status=201)


@app.put("/users")
def update_user(request, response):
    data = _require_object(request, response)
    if data is None:
        return
    existing = _users.get(data.get("id"))
    if existing is None:
        response.send_json({"error": "user not found"}, status=404)
        return
    user = User(
        id=existing.id,
        name=str(data.get("name", existing.name)),
        age=int(data.get("age", existing.age)),
    )
    _users[user.id] = user
    response.send_json(_to_dict(user))


@app.delete("/users")
def delete_user(request, response):
    data = _require_object(request, response)
    if data is None:
        return
    if _users.pop(data.get("id"), None) is None:
        response.send_json({"error": "user not found"}, status=404)
        return
    response.status = 204
    response.end()
