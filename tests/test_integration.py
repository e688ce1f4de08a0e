"""Integration tests for shortlink."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from app import build_registry, lifespan
from config import Config
from shortlink.common.logging_config import setup_logging
from shortlink.storage import create_store, FileStore, MemoryStore
from web_app import create_app


class TestIntegration:
    """End-to-end integration tests."""

    async def test_full_link_lifecycle(self, tmp_path):
        """Test complete link lifecycle on the file backend, across a restart."""
        data_file = tmp_path / "links.json"
        config = Config(
            storage_backend="file",
            data_file=str(data_file),
            base_url="http://testserver",
        )

        app = create_app(store_instance=None, registry_instance=None, config=config)
        app.state.logger = setup_logging(level="DEBUG")

        async with lifespan(app):
            assert isinstance(app.state.store, FileStore)
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as client:
                create = await client.post(
                    "/api/shorten",
                    json={"url": "https://example.com/integration", "custom_code": "integ"},
                )
                assert create.status_code == 201
                assert create.json()["short_url"] == "http://testserver/integ"

                redirect = await client.get("/integ")
                assert redirect.status_code == 302

        # Restart from the journal
        async with lifespan(app):
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
                info = await client.get("/api/links/integ")
                assert info.status_code == 200
                assert info.json()["hit_count"] == 1

                delete = await client.delete("/api/links/integ")
                assert delete.status_code == 204

        assert json.loads(data_file.read_text()) == {"links": {}}


class TestStoreFactory:
    """Test backend selection."""

    def test_memory(self):
        assert isinstance(create_store(Config(storage_backend="memory")), MemoryStore)

    def test_file(self, tmp_path):
        store = create_store(Config(storage_backend="file", data_file=str(tmp_path / "l.json")))

        assert isinstance(store, FileStore)
        assert store.path == str(tmp_path / "l.json")

    def test_unknown_backend(self):
        config = Config(storage_backend="memory")
        config.storage_backend = "redis"

        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_store(config)

    def test_build_registry_uses_config(self):
        config = Config(
            storage_backend="memory",
            base_url="https://sho.rt",
            code_length=10,
            max_collision_retries=3,
            operation_timeout_seconds=1.5,
        )

        registry = build_registry(config, MemoryStore())

        assert registry.base_url == "https://sho.rt"
        assert registry.generator.default_length == 10
        assert registry.max_attempts == 3
        assert registry.timeout == 1.5
