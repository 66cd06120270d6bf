"""Output destination for the generated script."""

import sys
from pathlib import Path
from typing import Optional, TextIO


class ScriptSink:
    """Write script text to a file or to stdout.

    Use as a context manager; a file is opened on enter and closed on exit,
    stdout is only flushed.

    Example:
        >>> with ScriptSink(Path("dump.sql")) as sink:
        ...     sink.println("USE shop;")
    """

    def __init__(
        self,
        output_file: Optional[Path] = None,
        stream: Optional[TextIO] = None,
    ):
        """
        Initialize the sink.

        Args:
            output_file: File to write to. If None, writes to stream.
            stream: Stream used when no file is given. Defaults to sys.stdout.
        """
        self.output_file = output_file
        self._stream = stream
        self._handle: Optional[TextIO] = None

    def __enter__(self) -> "ScriptSink":
        if self.output_file is not None:
            self._handle = open(self.output_file, "w", encoding="utf-8", newline="\n")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def stream(self) -> TextIO:
        if self._handle is not None:
            return self._handle
        return self._stream if self._stream is not None else sys.stdout

    def print(self, text: str) -> None:
        self.stream.write(text)

    def println(self, text: str = "") -> None:
        self.stream.write(text)
        self.stream.write("\n")

    def flush(self) -> None:
        self.stream.flush()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        else:
            self.flush()
