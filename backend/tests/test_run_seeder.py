"""Tests for the run_seeder command-line entry point."""

import pytest
from unittest.mock import MagicMock, patch

import run_seeder
from shared.config import get_settings
from modules.seeder.exceptions import SeedDataError


@pytest.fixture
def mock_service():
    with patch("run_seeder.create_seeder_service") as mock_create:
        service = MagicMock()
        mock_create.return_value = service
        yield service


class TestCommands:
    def test_seed(self, mock_service):
        assert run_seeder.main(["seed"]) == 0
        mock_service.seed_all.assert_called_once()
        mock_service.clear.assert_not_called()

    def test_clear(self, mock_service):
        assert run_seeder.main(["clear"]) == 0
        mock_service.clear.assert_called_once()
        mock_service.seed_all.assert_not_called()

    def test_reset(self, mock_service):
        assert run_seeder.main(["reset"]) == 0
        mock_service.reset_and_seed.assert_called_once()

    def test_unknown_command(self, mock_service, capsys):
        assert run_seeder.main(["migrate"]) == 1
        mock_service.seed_all.assert_not_called()

        output = capsys.readouterr().out
        assert "Unknown command" in output
        for name in ("seed", "clear", "reset"):
            assert name in output

    def test_banner_shows_app_name_and_version(self, mock_service, capsys):
        run_seeder.main(["seed"])
        settings = get_settings()
        output = capsys.readouterr().out
        assert f"{settings.app_name} v{settings.app_version}" in output

    def test_missing_command(self, mock_service):
        assert run_seeder.main([]) == 1


class TestFailures:
    def test_seeder_error_exits_non_zero(self, mock_service):
        mock_service.seed_all.side_effect = SeedDataError("users.json", "missing users array")
        assert run_seeder.main(["seed"]) == 1

    def test_unconfigured_database_exits_non_zero(self):
        with patch("run_seeder.create_seeder_service", side_effect=RuntimeError("Supabase configuration missing")):
            assert run_seeder.main(["seed"]) == 1

    def test_success_reports_duration(self, mock_service, capsys):
        run_seeder.main(["seed"])
        assert "ms" in capsys.readouterr().out


class TestDataOverride:
    def test_data_path_is_passed_through(self, tmp_path):
        with patch("run_seeder.create_seeder_service") as mock_create:
            run_seeder.main(["seed", "--data", str(tmp_path / "users.json")])

        assert mock_create.call_args.kwargs["data_path"] == tmp_path / "users.json"
