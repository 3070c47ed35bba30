"""Pytest configuration and fixtures."""

import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

# Settings are read at import time; keep tests off real services
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("OPENAI_API_KEY", "")
os.environ.setdefault("ANTHROPIC_API_KEY", "")
os.environ.setdefault("USE_MOCK_LLM", "false")
os.environ.setdefault("DAILY_VERSE_SCHEDULER_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.core.dependencies import RequestContext  # noqa: E402


class FakeQuery:
    """Records every builder call; execute() returns the next queued result for the table."""

    def __init__(self, client: "FakeSupabase", name: str):
        self.client = client
        self.name = name
        self.ops: List[tuple] = []

    def __getattr__(self, op: str):
        def method(*args, **kwargs):
            self.ops.append((op, args, kwargs))
            return self
        return method

    def execute(self):
        return self.client._next(self.name)

    def args_for(self, op: str) -> List[tuple]:
        return [args for name, args, _ in self.ops if name == op]

    def has(self, op: str, *args) -> bool:
        return any(name == op and (not args or called[:len(args)] == args) for name, called, _ in self.ops)


class FakeSupabase:
    """Chainable stand-in for the supabase Client used by the services."""

    def __init__(self):
        self.responses: Dict[str, List[Any]] = {}
        self.queries: List[FakeQuery] = []
        self.auth = MagicMock()

    def queue(self, name: str, *results: Any) -> "FakeSupabase":
        """Queue results (data values or exceptions) for a table, or 'rpc:<function>'."""
        self.responses.setdefault(name, []).extend(results)
        return self

    def table(self, name: str) -> FakeQuery:
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    def rpc(self, fn: str, params: Optional[Dict[str, Any]] = None) -> FakeQuery:
        query = FakeQuery(self, f"rpc:{fn}")
        query.ops.append(("rpc", (fn, params or {}), {}))
        self.queries.append(query)
        return query

    def _next(self, name: str):
        pending = self.responses.get(name)
        result = pending.pop(0) if pending else []
        if isinstance(result, Exception):
            raise result
        return SimpleNamespace(data=result)

    def queries_for(self, name: str) -> List[FakeQuery]:
        return [q for q in self.queries if q.name == name]

    def inserted(self, name: str) -> List[Dict[str, Any]]:
        return [args[0] for q in self.queries_for(name) for args in q.args_for("insert")]


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Provide a fresh fake Supabase client."""
    return FakeSupabase()


@pytest.fixture
def user_context() -> RequestContext:
    """A signed-in caller on the standard plan."""
    return RequestContext(
        user_type="authenticated",
        user_id="11111111-1111-1111-1111-111111111111",
        user={"id": "11111111-1111-1111-1111-111111111111", "app_metadata": {"plan": "standard"}},
    )


@pytest.fixture
def anonymous_context() -> RequestContext:
    """An anonymous caller identified by session id."""
    return RequestContext(user_type="anonymous", session_id="22222222-2222-2222-2222-222222222222")


@pytest.fixture
def study_guide_row() -> Dict[str, Any]:
    """A stored study guide row as Supabase returns it."""
    return {
        "id": "33333333-3333-3333-3333-333333333333",
        "user_id": "11111111-1111-1111-1111-111111111111",
        "input_type": "scripture",
        "input_value": "John 3:16",
        "study_mode": "standard",
        "summary": "God's love for the world",
        "interpretation": "The verse shows the scope of God's love.",
        "context": "Jesus speaks with Nicodemus at night.",
        "related_verses": ["Romans 5:8", "1 John 4:9"],
        "reflection_questions": ["How have you experienced God's love?"],
        "prayer_points": ["Thank God for the gift of his Son"],
        "language": "en",
        "is_saved": False,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": None,
    }
