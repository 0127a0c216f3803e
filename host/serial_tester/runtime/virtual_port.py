from typing import Optional

from .device_manager import SerialPort
from ..exceptions import PortError


class LoopbackPort(SerialPort):
    """In-memory port that returns every written byte on the next read."""

    def __init__(self, baudrate: Optional[int] = 115200):
        self.baudrate = baudrate
        self.rx = bytearray()
        self.writes = []
        self.flushes = 0

    def flush(self):
        self.flushes += 1

    def reset_input_buffer(self):
        self.rx.clear()

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        self.rx.extend(self.echo(bytes(data)))
        return len(data)

    def echo(self, data: bytes) -> bytes:
        return data

    def read(self, buffer: bytearray) -> int:
        n = min(len(buffer), len(self.rx))
        buffer[:n] = self.rx[:n]
        del self.rx[:n]
        return n

    def current_baud_rate(self) -> Optional[int]:
        return self.baudrate


class FaultInjectingPort(LoopbackPort):
    """
    Loopback port with injectable faults.

    Args:
        flush_error: flush() raises PortError
        write_error: write() raises PortError without echoing anything
        read_error: read() raises PortError without filling the buffer
        silent: nothing is echoed back, reads come back empty
        corrupt_index: XOR 0xFF into the echoed byte at this offset
        truncate: echo at most this many bytes per write
        baudrate: reported baud rate (None = unavailable)
    """

    def __init__(self, flush_error=False, write_error=False, read_error=False,
                 silent=False, corrupt_index=None, truncate=None,
                 baudrate: Optional[int] = 115200):
        super().__init__(baudrate)
        self.flush_error = flush_error
        self.write_error = write_error
        self.read_error = read_error
        self.silent = silent
        self.corrupt_index = corrupt_index
        self.truncate = truncate

    def flush(self):
        super().flush()
        if self.flush_error:
            raise PortError("injected flush failure")

    def write(self, data: bytes) -> int:
        if self.write_error:
            raise PortError("injected write failure")
        return super().write(data)

    def echo(self, data: bytes) -> bytes:
        if self.silent:
            return b''
        out = bytearray(data)
        if self.corrupt_index is not None and self.corrupt_index < len(out):
            out[self.corrupt_index] ^= 0xFF
        if self.truncate is not None:
            del out[self.truncate:]
        return bytes(out)

    def read(self, buffer: bytearray) -> int:
        if self.read_error:
            raise PortError("injected read failure")
        return super().read(buffer)
