import os
import stat
from unittest.mock import patch

import pytest

from mdinclude.sync.errors import WriteFailureError
from mdinclude.sync.writer import atomic_write_text


def test_replaces_file_contents(tmp_path):
    target = tmp_path / "README.md"
    target.write_text("old\n")

    atomic_write_text(target, "new\r\nlines\n")

    assert target.read_bytes() == b"new\r\nlines\n"
    assert [p.name for p in tmp_path.iterdir()] == ["README.md"]


def test_preserves_permissions(tmp_path):
    target = tmp_path / "README.md"
    target.write_text("old\n")
    os.chmod(target, 0o640)

    atomic_write_text(target, "new\n")

    assert stat.S_IMODE(target.stat().st_mode) == 0o640


def test_failed_rename_keeps_original_and_removes_temp_file(tmp_path):
    """If the final rename fails, the original stays and no temp file is left behind."""
    target = tmp_path / "README.md"
    target.write_text("original\n")

    with patch("mdinclude.sync.writer.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(WriteFailureError) as exc_info:
            atomic_write_text(target, "new\n")

    assert "disk full" in str(exc_info.value)
    assert exc_info.value.path == target
    assert target.read_text() == "original\n"
    assert [p.name for p in tmp_path.iterdir()] == ["README.md"]


def test_missing_directory_raises_write_failure(tmp_path):
    with pytest.raises(WriteFailureError):
        atomic_write_text(tmp_path / "missing" / "README.md", "new\n")
