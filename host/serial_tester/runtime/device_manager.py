import abc
from typing import List, Optional, Tuple

import serial
import serial.tools.list_ports

from ..exceptions import PortError
from ..utils.logger import setup_logger, INFO_VERBOSE

logger = setup_logger(__name__)


class SerialPort(abc.ABC):
    """
    Capabilities the echo test needs from a serial device.

    Implementations raise PortError from flush(), write() and read().
    """

    @abc.abstractmethod
    def flush(self):
        """Block until all written bytes have left the output buffer."""

    def reset_input_buffer(self):
        """Discard bytes received but not yet read."""

    @abc.abstractmethod
    def write(self, data: bytes) -> int:
        """Write data, returning the number of bytes written."""

    @abc.abstractmethod
    def read(self, buffer: bytearray) -> int:
        """Read into buffer, returning the number of bytes read. May be short."""

    @abc.abstractmethod
    def current_baud_rate(self) -> Optional[int]:
        """The negotiated baud rate, or None if unavailable."""


class DeviceManager(SerialPort):
    """
    Hardware serial port backed by pyserial.

    The port name may be a device path (/dev/ttyUSB0, COM3) or any pyserial
    URL such as loop:// or socket://host:port.
    """
    def __init__(self, settings):
        self.settings = settings
        self.serial: Optional[serial.SerialBase] = None

    def connect(self):
        """
        Open the port, then apply baud rate and framing.

        Raises:
            PortError: If the port cannot be opened. Failing to apply the
                settings on an open port is logged and not fatal.
        """
        s = self.settings
        try:
            self.serial = serial.serial_for_url(s.port, do_not_open=True)
            self.serial.timeout = s.timeout
            self.serial.open()
        except (serial.SerialException, OSError, ValueError) as e:
            self.serial = None
            raise PortError(f"Could not open port: {s.port} ({e})") from e

        logger.log(INFO_VERBOSE, f"Opened {s.port}")

        try:
            self.serial.baudrate = s.baud
            self.serial.bytesize = s.bytesize
            self.serial.parity = s.parity
            self.serial.stopbits = s.stopbits
            self.serial.xonxoff = s.xonxoff
            self.serial.rtscts = s.rtscts
        except (serial.SerialException, OSError, ValueError) as e:
            logger.warning(f"Error configuring: {e}")
        else:
            logger.log(INFO_VERBOSE,
                       f"Configured {s.port}: {s.baud} baud, "
                       f"{s.bytesize}{s.parity}{s.stopbits}, "
                       f"xonxoff={s.xonxoff}, rtscts={s.rtscts}")

    def disconnect(self):
        if self.serial and self.serial.is_open:
            self.serial.close()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.disconnect()

    def _require_open(self):
        if not self.serial or not self.serial.is_open:
            raise PortError("Device not connected")
        return self.serial

    def flush(self):
        port = self._require_open()
        try:
            port.flush()
        except (serial.SerialException, OSError) as e:
            raise PortError(str(e)) from e

    def reset_input_buffer(self):
        port = self._require_open()
        try:
            port.reset_input_buffer()
        except (serial.SerialException, OSError) as e:
            raise PortError(str(e)) from e

    def write(self, data: bytes) -> int:
        port = self._require_open()
        try:
            written = port.write(data)
        except (serial.SerialException, OSError) as e:
            raise PortError(str(e)) from e
        return len(data) if written is None else written

    def read(self, buffer: bytearray) -> int:
        port = self._require_open()
        try:
            return port.readinto(buffer)
        except (serial.SerialException, OSError) as e:
            raise PortError(str(e)) from e

    def current_baud_rate(self) -> Optional[int]:
        if not self.serial or not self.serial.is_open:
            return None
        return self.serial.baudrate


def list_ports() -> List[Tuple[str, str]]:
    """Available serial ports as (device, description) pairs."""
    return [(p.device, p.description) for p in sorted(serial.tools.list_ports.comports())]
