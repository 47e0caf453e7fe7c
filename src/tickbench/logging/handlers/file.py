from pathlib import Path
from typing import TextIO

from tickbench.logging.handlers.base import BaseLogHandler


class FileLogHandler(BaseLogHandler):
    """Appends flushed lines to a ``.txt`` file, keeping it open until ``close``.

    Args:
        filepath: Target path; must end with ".txt".
        create: Create the file and any missing parent directories up front.
            Otherwise the file is created on the first push.

    Raises:
        ValueError: If ``filepath`` does not end with ".txt".
    """

    def __init__(self, filepath: str, create: bool = False) -> None:
        super().__init__()

        if not filepath.endswith(".txt"):
            raise ValueError(
                f"Invalid filepath; expected string ending with '.txt' but got {filepath}"
            )
        self.filepath = filepath
        self._file: TextIO | None = None

        if create:
            path = Path(filepath)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch(exist_ok=True)

    def push(self, buffer: list[str]) -> None:
        if self._file is None:
            self._file = open(self.filepath, "a")
        self._file.write("\n".join(buffer) + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
