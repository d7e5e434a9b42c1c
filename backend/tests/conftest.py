from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
from mongomock_motor import AsyncMongoMockClient

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT))

from backend.app.core.config import settings  # noqa: E402
from backend.app.db import init  # noqa: E402
from backend.app.db.mongo import MongoConnectionManager  # noqa: E402
from backend.app.db.redis import RedisConnectionManager  # noqa: E402
from backend.app.services import llm as llm_service  # noqa: E402

SAMPLE_PHILOSOPHY = """### 🏛️ 건축 철학
임금이 정사를 돌보던 공간으로, 좌우 대칭의 배치가 질서를 드러냅니다.

### 📚 역사적 맥락
태조 4년에 처음 세워졌고 임진왜란 이후 고종 때 중건되었습니다.

### 🎨 문화적 가치
단청과 월대가 조선 궁궐 건축의 품격을 보여줍니다.

### 💭 현대적 해석
공적인 책임과 절제의 가치를 오늘날에도 되새기게 합니다.
"""


class _DummyRedisClient:
    """테스트용 인메모리 Redis (사용하는 명령만 구현)"""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.expirations: dict[str, int | None] = {}

    async def ping(self) -> bool:
        return True

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def set(self, key: str, value: Any, ex: int | None = None) -> bool:
        self.store[key] = str(value)
        self.expirations[key] = ex
        return True

    async def exists(self, *keys: str) -> int:
        return sum(1 for key in keys if key in self.store)

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed

    async def close(self) -> None:
        return None


@pytest.fixture(autouse=True)
def stub_infrastructure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """MongoDB는 mongomock-motor, Redis는 인메모리 dummy로 대체"""
    mongo_client = AsyncMongoMockClient()
    redis_client = _DummyRedisClient()

    async def _noop_ensure_indexes(_db: Any) -> None:
        return None

    async def _noop_close(cls: type) -> None:
        return None

    monkeypatch.setattr(MongoConnectionManager, "get_client", classmethod(lambda cls: mongo_client))
    monkeypatch.setattr(RedisConnectionManager, "get_client", classmethod(lambda cls: redis_client))
    monkeypatch.setattr(MongoConnectionManager, "close", classmethod(_noop_close))
    monkeypatch.setattr(RedisConnectionManager, "close", classmethod(_noop_close))
    monkeypatch.setattr(init, "ensure_indexes", _noop_ensure_indexes)
    monkeypatch.setattr(settings, "upload_dir", tmp_path / "uploads")


@pytest.fixture(autouse=True)
def mock_llm_service(monkeypatch: pytest.MonkeyPatch) -> None:
    """Gemini 호출을 고정 응답으로 대체"""

    async def fake_invoke(_prompt: str) -> str:
        return SAMPLE_PHILOSOPHY

    monkeypatch.setattr(llm_service, "_invoke_gemini", fake_invoke)


@pytest.fixture
def db():
    return MongoConnectionManager.get_database()


@pytest.fixture
def redis_client() -> _DummyRedisClient:
    return RedisConnectionManager.get_client()
