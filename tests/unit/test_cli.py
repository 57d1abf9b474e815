"""
Unit tests for the run_archive entry point
"""

from unittest.mock import AsyncMock, patch

from scripts import run_archive


def test_main_passes_config_file():
    with patch.object(run_archive, "ArchiveRunner") as runner_cls, \
            patch.object(run_archive, "setup_logging"):
        runner_cls.return_value.run = AsyncMock(return_value={"status": "success"})

        assert run_archive.main(["/etc/archiver/config.json"]) == 0

    runner_cls.return_value.run.assert_awaited_once_with("/etc/archiver/config.json")


def test_main_without_argument_uses_default():
    with patch.object(run_archive, "ArchiveRunner") as runner_cls, \
            patch.object(run_archive, "setup_logging"):
        runner_cls.return_value.run = AsyncMock(return_value={"status": "failed"})

        # a failed run still completes
        assert run_archive.main([]) == 0

    runner_cls.return_value.run.assert_awaited_once_with(None)


def test_main_returns_one_when_run_raises():
    with patch.object(run_archive, "ArchiveRunner") as runner_cls, \
            patch.object(run_archive, "setup_logging"):
        runner_cls.return_value.run = AsyncMock(side_effect=RuntimeError("boom"))

        assert run_archive.main(["config.json"]) == 1
