"""
HTTP client for the todo procedures.

Each method maps to one named procedure and decodes the
`{"result": {"data": ...}}` envelope. Server-side failures surface as
`RemoteCallError`; anything that prevents reaching or decoding the server
surfaces as `TransportError`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from ..errors import RemoteCallError, TransportError
from ..models import TodoStatus
from ..schemas import DeleteResult, HealthOut, TodoOut

logger = logging.getLogger(__name__)

_TODO_LIST = TypeAdapter(List[TodoOut])


# PUBLIC_INTERFACE
class TodoClient:
    """
    Typed caller for the remote procedures.

    Pass `http` to reuse an existing `httpx.Client` (FastAPI's TestClient
    works too); otherwise one is created for `base_url` and closed by
    `close()`.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:2022",
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
        prefix: str = "/trpc",
    ) -> None:
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)
        self._prefix = prefix.rstrip("/")

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "TodoClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _call(self, procedure: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self._prefix}/{procedure}"
        try:
            if payload is None:
                resp = self._http.get(url)
            else:
                resp = self._http.post(url, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("procedure_unreachable procedure=%s error=%s", procedure, exc)
            raise TransportError(f"{procedure}: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise TransportError(
                f"{procedure}: non-JSON response with status {resp.status_code}: {resp.text[:300]}"
            ) from exc

        if not isinstance(body, dict):
            raise TransportError(f"{procedure}: unexpected response body")

        error = body.get("error")
        if isinstance(error, dict):
            raise RemoteCallError(
                code=str(error.get("code") or "INTERNAL_SERVER_ERROR"),
                message=str(error.get("message") or ""),
                http_status=resp.status_code,
            )

        result = body.get("result")
        if resp.status_code != 200 or not isinstance(result, dict) or "data" not in result:
            raise TransportError(f"{procedure}: malformed response with status {resp.status_code}")
        return result["data"]

    def _decode(self, procedure: str, model: Any, data: Any) -> Any:
        try:
            if isinstance(model, TypeAdapter):
                return model.validate_python(data)
            return model.model_validate(data)
        except ValidationError as exc:
            raise TransportError(f"{procedure}: could not decode response: {exc}") from exc

    def healthcheck(self) -> HealthOut:
        return self._decode("healthcheck", HealthOut, self._call("healthcheck"))

    def get_todos(self) -> List[TodoOut]:
        return self._decode("getTodos", _TODO_LIST, self._call("getTodos"))

    def create_todo(self, title: str) -> TodoOut:
        data = self._call("createTodo", {"title": title})
        return self._decode("createTodo", TodoOut, data)

    def update_todo_title(self, todo_id: int, title: str) -> TodoOut:
        data = self._call("updateTodoTitle", {"id": todo_id, "title": title})
        return self._decode("updateTodoTitle", TodoOut, data)

    def update_todo_status(self, todo_id: int, status: TodoStatus) -> TodoOut:
        data = self._call("updateTodoStatus", {"id": todo_id, "status": TodoStatus(status).value})
        return self._decode("updateTodoStatus", TodoOut, data)

    def delete_todo(self, todo_id: int) -> DeleteResult:
        data = self._call("deleteTodo", {"id": todo_id})
        return self._decode("deleteTodo", DeleteResult, data)
