"""Shared fixtures: in-memory record store and an assembler wired to stubs."""

from __future__ import annotations

import pathlib
import sys
from typing import Optional

HERE = pathlib.Path(__file__).resolve().parent
for path in (HERE.parent, HERE):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest

from metadata_api.core.cache import Cache
from metadata_api.core.config import Settings
from metadata_api.data.record_store import CachedRecordStore
from metadata_api.render.composer import RenderConfig
from metadata_api.services.metadata_service import MetadataAssembler

from stubs import StubModeration, StubReputation, StubResolver

BACKGROUNDS = tuple(f"https://assets.test/planet{i}.png" for i in range(1, 8))


@pytest.fixture
def render_config() -> RenderConfig:
    return RenderConfig(backgrounds=BACKGROUNDS, suffix="beb", score_label="BEB Score")


@pytest.fixture
def records() -> CachedRecordStore:
    return CachedRecordStore(Cache(ttl_seconds=None, use_redis=False))


@pytest.fixture
def test_settings() -> Settings:
    return Settings(MODE="hosted", UPSTREAM_TIMEOUT_SECONDS=0.5, HOST_URL=None)


@pytest.fixture
def make_assembler(records, render_config, test_settings):
    def _make(
        owners: Optional[dict] = None,
        reputation: StubReputation | None = None,
        moderation: StubModeration | None = None,
        settings: Settings | None = None,
        seeds=None,
    ) -> MetadataAssembler:
        return MetadataAssembler(
            records=records,
            resolver=StubResolver(owners),
            reputation=reputation or StubReputation(score=None),
            moderation=moderation or StubModeration(),
            render_config=render_config,
            settings=settings or test_settings,
            seeds=seeds,
        )

    return _make
