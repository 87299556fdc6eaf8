from unittest.mock import AsyncMock, patch

import pytest

from image_worker_mcp.cli import main


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in (
        "IMAGE_WORKER_COMMAND",
        "IMAGE_WORKER_TIMEOUT",
        "IMAGE_WORKER_REQUIRE_OUTPUT_DIR",
        "IMAGE_WORKER_LOG_LEVEL",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


def test_main_builds_config_from_flags() -> None:
    with patch("image_worker_mcp.cli.serve_stdio", new_callable=AsyncMock) as serve, patch(
        "image_worker_mcp.cli.setup_logging"
    ) as setup:
        main(["--command", "ai-image-bin", "--timeout", "60", "--require-output-dir", "--log-level", "debug"])

    config = serve.await_args.args[0]
    assert config.command == "ai-image-bin"
    assert config.timeout == 60.0
    assert config.require_output_dir is True
    assert config.forward_api_key is False
    setup.assert_called_once_with("DEBUG")


def test_main_rejects_invalid_config() -> None:
    with patch("image_worker_mcp.cli.serve_stdio", new_callable=AsyncMock) as serve:
        with pytest.raises(SystemExit) as exc_info:
            main(["--timeout", "-1"])

    assert exc_info.value.code == 2
    serve.assert_not_called()


def test_main_exits_non_zero_when_server_fails() -> None:
    serve = AsyncMock(side_effect=RuntimeError("transport closed"))
    with patch("image_worker_mcp.cli.serve_stdio", serve), patch("image_worker_mcp.cli.setup_logging"):
        with pytest.raises(SystemExit) as exc_info:
            main([])

    assert exc_info.value.code == 1


def test_main_rejects_unknown_log_level(capsys) -> None:
    with patch("image_worker_mcp.cli.serve_stdio", new_callable=AsyncMock) as serve:
        with pytest.raises(SystemExit) as exc_info:
            main(["--log-level", "verbose"])

    assert exc_info.value.code == 2
    assert "log_level" in capsys.readouterr().err
    serve.assert_not_called()
