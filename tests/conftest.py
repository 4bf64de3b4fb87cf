from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import pytest


@dataclass(slots=True)
class RecordedRequest:
    method: str
    path: str
    body: Optional[dict[str, Any]]


class RecordingExecutor:
    """Request executor double that records calls and replays a canned body."""

    def __init__(self, response: bytes = b'{"success": true, "result": null}') -> None:
        self.response = response
        self.error: Optional[Exception] = None
        self.requests: list[RecordedRequest] = []

    def respond_with(self, result: Any, **envelope: Any) -> None:
        payload = {"success": True, "errors": [], "messages": [], "result": result}
        payload.update(envelope)
        self.response = json.dumps(payload).encode("utf-8")

    async def make_request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        self.requests.append(
            RecordedRequest(method, path, dict(body) if body is not None else None)
        )
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()
