"""Tests for the profile based configuration."""

import json

import pytest

from config import Config


@pytest.fixture
def dirs(tmp_path):
    profiles = tmp_path / "profiles"
    secrets = tmp_path / "secrets"
    profiles.mkdir()
    secrets.mkdir()
    return profiles, secrets


class TestConfig:
    """Tests for Config."""

    def test_default_profile_is_created(self, dirs) -> None:
        """A missing default profile is written as an empty file."""
        profiles, secrets = dirs
        config = Config(config_dir=str(profiles), secrets_dir=str(secrets))

        assert config.get() == {}
        assert json.loads((profiles / "default.json").read_text()) == {}

    def test_secrets_are_merged(self, dirs) -> None:
        """Secrets override profile values key by key."""
        profiles, secrets = dirs
        (profiles / "server.json").write_text(json.dumps({
            "general": {"log_level": "DEBUG"},
            "log_source": {"url": "https://example.com/public.log", "timeout": 10},
        }))
        (secrets / "server_secrets.json").write_text(json.dumps({
            "log_source": {"url": "https://example.com/private.log"},
        }))

        config = Config(config_dir=str(profiles), secrets_dir=str(secrets), profile="server")

        assert config.get("log_source.url") == "https://example.com/private.log"
        assert config.get("log_source.timeout") == 10
        assert config.get("general.log_level") == "DEBUG"
        assert config.get("general.missing", "fallback") == "fallback"

    def test_missing_named_profile(self, dirs) -> None:
        """An unknown profile yields an empty configuration."""
        profiles, secrets = dirs
        config = Config(config_dir=str(profiles), secrets_dir=str(secrets), profile="nope")
        assert config.get() == {}
        assert not (profiles / "nope.json").exists()

    def test_list_profiles(self, dirs) -> None:
        """Profiles are listed by file stem, sorted."""
        profiles, secrets = dirs
        (profiles / "server.json").write_text(json.dumps({"report": {"export_formats": ["csv"]}}))
        (profiles / "notes.txt").write_text("not a profile")
        config = Config(config_dir=str(profiles), secrets_dir=str(secrets))

        assert config.list_profiles() == ["default", "server"]
