# Tests for registry.py
# Created: 2026-10-19

import pytest

from coaclient.errors import CreateClientAppError
from coaclient.models import AuthTokens
from coaclient.registry import ClientRegistry


@pytest.fixture
def registry(settings):
    return ClientRegistry(settings)


class TestClientRegistry:
    def test_work_scenario(self, registry, settings):
        registry.register("work", "id-1", "secret-1", {"read", "write"})

        line = settings.config_path.read_text().splitlines()[1]
        assert line in ("work,id-1,secret-1,read+write", "work,id-1,secret-1,write+read")

        tokens = AuthTokens(refresh_token="r1", access_token="a1", expires_in="3600")
        registry.save_tokens("work", tokens)
        assert registry.load_tokens("work") == AuthTokens("r1", "a1", "3600")

    def test_register_duplicate(self, registry):
        registry.register("work", "id-1", "s", [])
        with pytest.raises(CreateClientAppError):
            registry.register("work", "id-2", "s", [])

    def test_find_and_list(self, registry):
        registry.register("a", "id-a", "s", ["x"])
        registry.register("b", "id-b", "s", ["y"])
        assert registry.find_client("id-b").name == "b"
        assert registry.find_client("missing") is None
        assert [c.name for c in registry.list_clients()] == ["a", "b"]

    def test_delete_removes_tokens(self, registry):
        registry.register("work", "id-1", "s", [])
        registry.save_tokens("work", AuthTokens("r", "a", "1"))

        assert registry.delete_client("work").value is True
        assert registry.find_client("work") is None
        assert registry.load_tokens("work") is None

    def test_delete_unknown_is_noop(self, registry):
        result = registry.delete_client("nope")
        assert not result.value

    def test_orphan_token_files(self, registry):
        registry.register("work", "id-1", "s", [])
        registry.save_tokens("work", AuthTokens("r", "a", "1"))
        registry.save_tokens("ghost", AuthTokens("r", "a", "1"))
        assert registry.orphan_token_files() == ["ghost"]

    def test_delete_cannot_reach_outside_storage_dir(self, registry, settings):
        registry.register("work", "id-1", "s", [])
        victim = settings.storage_dir.parent / "victim_aout2.csv"
        victim.write_text("keep me")

        registry.delete_client("../victim")

        assert victim.exists()

    def test_name_with_separator_rejected(self, registry):
        with pytest.raises(CreateClientAppError):
            registry.register("a,b", "id-1", "s", [])
        assert registry.find_client("a,b") is None
        assert registry.list_clients() == []
