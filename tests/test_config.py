"""Tests for configuration loading."""

from pathlib import Path

from eisenhower.config import DATA_DIR, Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")
        assert config == Config()
        assert config.reminder_interval == 30
        assert config.reminder_window == 60

    def test_parses_values(self, tmp_path):
        conf = tmp_path / "eisenhower.conf"
        conf.write_text(
            "# comment line\n"
            'DATA_DIR="~/matrix data"  # quoted with comment\n'
            "SCOPE = alice\n"
            "DEFAULT_BOARD_NAME='Inbox'\n"
            "REMINDER_INTERVAL=15\n"
            "REMINDER_WINDOW=120 # seconds\n"
            "TIMEZONE=Europe/Berlin\n"
            "TELEGRAM_BOT_TOKEN=abc:123\n"
            "TELEGRAM_CHAT_IDS=1, 2,3\n"
            "UNKNOWN_KEY=ignored\n"
            "not a setting\n"
        )
        config = load_config(conf)

        assert config.data_dir == "~/matrix data"
        assert config.scope == "alice"
        assert config.default_board_name == "Inbox"
        assert config.reminder_interval == 15
        assert config.reminder_window == 120
        assert config.timezone == "Europe/Berlin"
        assert config.telegram_bot_token == "abc:123"
        assert config.telegram_chat_ids == [1, 2, 3]

    def test_invalid_numbers_keep_defaults(self, tmp_path, caplog):
        conf = tmp_path / "eisenhower.conf"
        conf.write_text("REMINDER_INTERVAL=soon\nREMINDER_WINDOW=-5\nTELEGRAM_CHAT_IDS=abc\n")
        config = load_config(conf)

        assert config.reminder_interval == 30
        assert config.reminder_window == 60
        assert config.telegram_chat_ids == []
        assert "Invalid REMINDER_INTERVAL" in caplog.text

    def test_data_path_expands_user(self):
        assert Config(data_dir="~/somewhere").data_path == Path.home() / "somewhere"

    def test_data_path_default(self):
        assert Config().data_path == DATA_DIR
