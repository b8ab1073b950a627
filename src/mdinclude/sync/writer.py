import os
import shutil
import tempfile
from pathlib import Path

from loguru import logger

from mdinclude.sync.errors import WriteFailureError


def atomic_write_text(path: Path, text: str) -> None:
    """
    Replace the contents of a file without ever exposing a partial write.

    The new text goes to a temporary file next to the target, which is then
    renamed over it. The temporary file is removed if anything fails.
    Args:
        path: File to replace
        text: New contents, written as UTF-8 with line terminators untouched
    Raises:
        WriteFailureError: if the temporary file cannot be written or moved into place
    """
    path = Path(path)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())

        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            except OSError as cleanup_error:
                logger.warning(f"Could not remove temporary file '{tmp_name}': {cleanup_error}")
        raise WriteFailureError(path, str(e)) from e
