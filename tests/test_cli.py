"""
Tests for the token-notifier command surface.

Commands are driven through ``main(argv)`` against a temp database.
"""

import sqlite3

import pytest

from token_notifier import cli
from token_notifier.store import TokenStore


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep CLI runs from reconfiguring the root logger under pytest."""
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def env_file(tmp_path):
    path = tmp_path / "settings.env"
    path.write_text("")
    return path


@pytest.fixture
def run(db_path, env_file):
    def _run(*argv):
        return cli.main(["--db", str(db_path), "--env-file", str(env_file), *argv])

    return _run


class TestAddRemoveList:
    def test_add_prints_confirmation(self, run, db_path, capsys):
        assert run("add", "svc-key", "2024-01-01") == 0
        assert "Token 'svc-key' added successfully!" in capsys.readouterr().out
        assert TokenStore(db_path).get("svc-key") is not None

    def test_add_invalid_date_exits_nonzero(self, run, db_path, capsys):
        assert run("add", "svc-key", "2024-13-40") == 1
        captured = capsys.readouterr()
        assert "Invalid input" in captured.err
        assert TokenStore(db_path).list() == []

    def test_remove_absent_exits_zero(self, run, capsys):
        assert run("remove", "missing") == 0
        assert "Token 'missing' removed successfully!" in capsys.readouterr().out

    def test_list_table(self, run, db_path, capsys):
        run("add", "svc-key", "2024-01-01")
        run("add", "db-password", "2025-12-31")
        capsys.readouterr()

        assert run("list") == 0
        out = capsys.readouterr().out.splitlines()

        assert out[0] == "Tracked Tokens:"
        assert out[1].split() == ["Name", "Expires", "Last", "Notified"]
        assert out[2] == "-" * 50
        rows = {line.split()[0]: line.split()[1:] for line in out[3:]}
        assert rows["svc-key"] == ["2024-01-01", "Never"]
        assert rows["db-password"] == ["2025-12-31", "Never"]

    def test_list_works_without_messaging_config(self, run):
        assert run("list") == 0

    def test_storage_failure_exits_nonzero(self, tmp_path, env_file, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        code = cli.main(
            ["--db", str(blocker / "tokens.db"), "--env-file", str(env_file), "list"]
        )
        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_corrupt_row_exits_nonzero(self, run, db_path, capsys):
        run("add", "svc-key", "2024-01-01")
        conn = sqlite3.connect(str(db_path))
        conn.execute("INSERT INTO tokens (name, expires_at) VALUES ('legacy', '2024/06/01')")
        conn.commit()
        conn.close()
        capsys.readouterr()

        assert run("list") == 1
        assert "Corrupt row 'legacy'" in capsys.readouterr().err

    def test_unusable_app_home_exits_nonzero(self, tmp_path, env_file, monkeypatch, capsys):
        blocker = tmp_path / "home-is-a-file"
        blocker.write_text("")
        monkeypatch.setenv("TOKEN_NOTIFIER_HOME", str(blocker))

        assert cli.main(["--env-file", str(env_file), "list"]) == 1
        assert "Could not prepare data directory" in capsys.readouterr().err

    def test_missing_command_is_usage_error(self):
        with pytest.raises(SystemExit) as exc:
            cli.main([])
        assert exc.value.code == 2


class TestDaemonCommands:
    def test_daemon_without_config_fails_before_store_access(self, run, db_path, capsys):
        assert run("daemon") == 1
        assert "TELEGRAM_BOT_TOKEN" in capsys.readouterr().err
        assert not db_path.exists()

    def test_check_dry_run_with_env_file(self, run, db_path, env_file, monkeypatch, capsys):
        # Register the vars with monkeypatch so whatever load_dotenv sets is undone.
        for var in ("TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID"):
            monkeypatch.setenv(var, "placeholder")
            monkeypatch.delenv(var)
        env_file.write_text("TELEGRAM_BOT_TOKEN=123456:ABC\nTELEGRAM_CHAT_ID=42\n")
        run("add", "svc-key", "2000-01-01")
        capsys.readouterr()

        assert run("check", "--dry-run") == 0
        assert "0 notified, 0 failed, 1 dry run" in capsys.readouterr().out
        assert TokenStore(db_path).get("svc-key").last_notified is None

    def test_check_reports_storage_abort(self, run, monkeypatch, capsys):
        from token_notifier.errors import StorageError

        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123456:ABC")
        monkeypatch.setenv("TELEGRAM_CHAT_ID", "42")

        def boom(self, *args, **kwargs):
            raise StorageError("database disk image is malformed")

        monkeypatch.setattr(TokenStore, "find_expiring", boom)

        assert run("check", "--dry-run") == 1
        assert "malformed" in capsys.readouterr().err

    def test_daemon_exits_cleanly_on_interrupt(self, run, monkeypatch):
        from token_notifier.daemon import NotifierDaemon

        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123456:ABC")
        monkeypatch.setenv("TELEGRAM_CHAT_ID", "42")

        def interrupted(self):
            raise KeyboardInterrupt

        monkeypatch.setattr(NotifierDaemon, "run", interrupted)

        assert run("daemon") == 0
