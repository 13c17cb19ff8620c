import re
import threading
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, List, Optional, TextIO

# Remove ANSI color codes before forwarding to the log file
ANSI_ESCAPE = re.compile(r"\x1B\[[0-9;]*[A-Za-z]")
LINE_BREAK = re.compile(r"\r\n|\r|\n")


class LineBufferingRedirector:
    """
    Text stream that stands in for stdout while console capture is active.

    Everything written is passed straight through to the original stream. A
    second copy is cut into lines (``\\r\\n``, ``\\n`` and ``\\r`` all end a
    line) and every non-empty line is handed to ``forward`` with ``prefix``
    in front of it. Text after the last line break stays buffered until the
    next break or :meth:`flush`.
    """

    def __init__(
        self,
        original: TextIO,
        forward: Callable[[str], None],
        prefix: str = "[Console] ",
        strip_ansi: bool = True,
    ) -> None:
        if original is None:
            raise ValueError("original stream is required")
        self._original: Optional[TextIO] = original
        self._forward = forward
        self.prefix = prefix
        self.strip_ansi = strip_ansi
        self._buffer: List[str] = []
        # Last chunk ended in "\r": a leading "\n" next time belongs to the same break.
        self._after_cr = False
        self._closed = False
        self._local = threading.local()

    @property
    def original(self) -> Optional[TextIO]:
        return self._original

    @property
    def pending(self) -> str:
        """Text written since the last line break."""
        return "".join(self._buffer)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def encoding(self) -> str:
        return getattr(self._original, "encoding", None) or "utf-8"

    def writable(self) -> bool:
        return not self._closed

    def isatty(self) -> bool:
        # Progress bars and colour detection look at the real terminal.
        return bool(getattr(self._original, "isatty", lambda: False)())

    def fileno(self) -> int:
        self._check_open()
        return self._original.fileno()

    def write(self, data: str) -> int:
        self._check_open()
        if not isinstance(data, str):
            raise TypeError(f"write() argument must be str, not {type(data).__name__}")
        if not data:
            return 0
        self._original.write(data)
        if self._forwarding:
            # Output produced while handing a line to the sink only goes to the console.
            return len(data)

        text = data
        if self._after_cr and text.startswith("\n"):
            text = text[1:]
        self._after_cr = data.endswith("\r")

        pieces = LINE_BREAK.split(text)
        for piece in pieces[:-1]:
            if piece:
                self._buffer.append(piece)
            self._emit()
        if pieces[-1]:
            self._buffer.append(pieces[-1])
        return len(data)

    def writelines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        self._check_open()
        if self._buffer and not self._forwarding:
            self._emit()
        self._original.flush()

    def close(self) -> None:
        """Flush the pending partial line and let go of the original stream.

        The original stream is not closed; it still belongs to whoever owned it
        before capture started.
        """
        if self._closed:
            return
        try:
            self.flush()
        finally:
            self._closed = True
            self._original = None

    @contextmanager
    def passthrough(self) -> Iterator[None]:
        """Send writes made on this thread to the console only while active.

        Nests: the previous state is restored on exit.
        """
        previous = self._forwarding
        self._local.forwarding = True
        try:
            yield
        finally:
            self._local.forwarding = previous

    @property
    def _forwarding(self) -> bool:
        return getattr(self._local, "forwarding", False)

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed file.")

    def _emit(self) -> None:
        line = "".join(self._buffer).rstrip("\r\n")
        self._buffer.clear()
        if self.strip_ansi:
            line = ANSI_ESCAPE.sub("", line)
        if not line:
            return
        with self.passthrough():
            self._forward(f"{self.prefix}{line}")
