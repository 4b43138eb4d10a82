"""
Tests for AnonBoard Configuration
"""

from anonboard.config import (
    Config,
    BoardConfig,
    CryptoConfig,
    WebConfig,
    load_config,
    create_default_config,
)


class TestLoadConfig:
    """Tests for loading TOML configuration."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.toml")

        assert config == Config()
        assert config.board.list_limit == 10
        assert config.board.preview_replies == 3
        assert config.board.redaction_marker == "[deleted]"

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[board]\nname = "Test"\nlist_limit = 5\n\n'
            '[database]\npath = "/tmp/test.db"\n'
        )

        config = load_config(path)

        assert config.board.name == "Test"
        assert config.board.list_limit == 5
        assert config.board.preview_replies == 3
        assert config.database.path == "/tmp/test.db"
        assert config.web == WebConfig()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.toml"
        config = Config()
        config.board = BoardConfig(name="Saved", redaction_marker="[gone]")
        config.crypto = CryptoConfig(argon2_time_cost=2)
        config.web = WebConfig(port=9000, debug=True)

        config.save(path)
        loaded = load_config(path)

        assert loaded == config

    def test_create_default_config(self, tmp_path):
        path = tmp_path / "config.toml"

        create_default_config(path)

        assert path.exists()
        assert load_config(path) == Config()


class TestValidateConfig:
    """Tests for config validation."""

    def test_defaults_valid(self):
        assert Config().validate() == []

    def test_invalid_values(self):
        config = Config()
        config.board.list_limit = 0
        config.board.redaction_marker = ""
        config.web.port = 70000
        config.logging.level = "LOUD"

        errors = config.validate()

        assert any("list_limit" in e for e in errors)
        assert any("redaction_marker" in e for e in errors)
        assert any("web.port" in e for e in errors)
        assert any("logging.level" in e for e in errors)

    def test_argon2_memory_floor(self):
        config = Config()
        config.crypto.argon2_memory_kb = 4

        assert any("argon2_memory_kb" in e for e in config.validate())
