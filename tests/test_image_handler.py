from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from image_worker_mcp import ImageGenerationHandler, WorkerConfig
from image_worker_mcp.core import ImageGenerationError, InvalidArgumentsError, ProcessExecutionError
from image_worker_mcp.handlers import prepare_output_dir
from image_worker_mcp.runner import ProcessResult


def test_prepare_output_dir_rejects_relative_path(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(InvalidArgumentsError, match="must be an absolute path"):
        prepare_output_dir("relative/path")

    assert not (tmp_path / "relative").exists()


def test_prepare_output_dir_creates_and_cleans_up(tmp_path: Path) -> None:
    target = tmp_path / "new" / "images"

    result = prepare_output_dir(str(target))

    assert result == target
    assert target.is_dir()
    assert list(target.iterdir()) == []


def test_prepare_output_dir_normalizes(tmp_path: Path) -> None:
    assert prepare_output_dir(f"{tmp_path}/a/../b") == tmp_path / "b"


def test_prepare_output_dir_reports_filesystem_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")

    with pytest.raises(InvalidArgumentsError, match="is not writable") as exc_info:
        prepare_output_dir(str(blocker / "images"))

    assert isinstance(exc_info.value.__cause__, OSError)


def test_prepare_output_dir_reports_failed_probe(tmp_path: Path, monkeypatch) -> None:
    def deny(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "write_text", deny)

    with pytest.raises(InvalidArgumentsError, match="Permission denied"):
        prepare_output_dir(str(tmp_path))


@pytest.mark.asyncio
async def test_generate_formats_success_payload(mock_runner: AsyncMock) -> None:
    mock_runner.run.return_value = ProcessResult(
        command="npx ai-image generate --prompt fox --size 1024x1024", stdout="saved", stderr="", exit_code=0
    )
    handler = ImageGenerationHandler(WorkerConfig(), runner=mock_runner)

    content = await handler.generate({"prompt": "fox"})

    assert len(content) == 1
    assert content[0].type == "text"
    assert content[0].text == (
        "Image generation completed successfully!\n\n"
        "Command executed: npx ai-image generate --prompt fox --size 1024x1024\n\n"
        "Output:\nsaved"
    )


@pytest.mark.asyncio
async def test_generate_appends_stderr_when_present(mock_runner: AsyncMock) -> None:
    mock_runner.run.return_value = ProcessResult(command="cmd", stdout="saved", stderr="slow model", exit_code=0)
    handler = ImageGenerationHandler(WorkerConfig(), runner=mock_runner)

    content = await handler.generate({"prompt": "fox"})

    assert content[0].text.endswith("\n\nErrors/Warnings:\nslow model")


@pytest.mark.asyncio
async def test_generate_wraps_process_failure(mock_runner: AsyncMock) -> None:
    mock_runner.run.side_effect = ProcessExecutionError(2, "out", "bad prompt")
    handler = ImageGenerationHandler(WorkerConfig(), runner=mock_runner)

    with pytest.raises(ImageGenerationError, match="Failed to generate image: Command failed with exit code 2"):
        await handler.generate({"prompt": "fox"})


@pytest.mark.asyncio
async def test_generate_passes_normalized_output_dir(mock_runner: AsyncMock, tmp_path: Path) -> None:
    handler = ImageGenerationHandler(WorkerConfig(), runner=mock_runner)

    await handler.generate({"prompt": "fox", "output_dir": f"{tmp_path}/x/../out"})

    command_line = mock_runner.run.call_args.args[0]
    assert command_line[command_line.index("--output-dir") + 1] == str(tmp_path / "out")


@pytest.mark.asyncio
async def test_required_output_dir_missing(mock_runner: AsyncMock) -> None:
    handler = ImageGenerationHandler(WorkerConfig(require_output_dir=True), runner=mock_runner)

    with pytest.raises(InvalidArgumentsError, match="output_dir is required"):
        await handler.generate({"prompt": "fox"})

    mock_runner.run.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_size_rejected(mock_runner: AsyncMock) -> None:
    handler = ImageGenerationHandler(WorkerConfig(), runner=mock_runner)

    with pytest.raises(InvalidArgumentsError, match="size"):
        await handler.generate({"prompt": "fox", "size": "large"})

    mock_runner.run.assert_not_called()


@pytest.mark.asyncio
async def test_progress_callback_forwarded(mock_runner: AsyncMock) -> None:
    handler = ImageGenerationHandler(WorkerConfig(), runner=mock_runner)
    on_progress = AsyncMock()

    await handler.generate({"prompt": "fox"}, on_progress)

    assert mock_runner.run.call_args.args[1] is on_progress


def test_prepare_output_dir_rejects_null_byte(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgumentsError, match="is not writable"):
        prepare_output_dir(f"{tmp_path}/a\x00b")


def test_prepare_output_dir_removes_partially_written_file(tmp_path: Path, monkeypatch) -> None:
    original_write_text = Path.write_text

    def write_then_fail(self, *args, **kwargs):
        original_write_text(self, "partial")
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(Path, "write_text", write_then_fail)

    with pytest.raises(InvalidArgumentsError, match="No space left on device"):
        prepare_output_dir(str(tmp_path))

    assert list(tmp_path.iterdir()) == []
