import pytest

from serial_tester.exceptions import PortError
from serial_tester.runtime.device_manager import DeviceManager, list_ports
from serial_tester.runtime.echo_test import EchoTest
from serial_tester.runtime.payload import PayloadGenerator
from serial_tester.settings import PortSettings


def loop_settings(baud=115200):
    return PortSettings(port='loop://', baud=baud, timeout=0.1)


def test_loop_url_connects_and_reports_baud():
    with DeviceManager(loop_settings(57600)) as dev:
        assert dev.current_baud_rate() == 57600
    assert dev.current_baud_rate() is None


def test_write_then_read_over_loop():
    with DeviceManager(loop_settings()) as dev:
        assert dev.write(b'hello') == 5
        buf = bytearray(5)
        assert dev.read(buf) == 5
        assert buf == b'hello'


def test_short_read_leaves_zeros():
    with DeviceManager(loop_settings()) as dev:
        dev.write(b'\x07\x08')
        buf = bytearray(4)
        assert dev.read(buf) == 2
        assert buf == b'\x07\x08\x00\x00'


def test_echo_trial_over_loop():
    engine = EchoTest(PayloadGenerator(), sleep=lambda s: None)
    with DeviceManager(loop_settings()) as dev:
        for size in (0, 1, 16, 256):
            assert engine.run_trial(dev, PayloadGenerator().random(size))


def test_open_failure_raises_port_error():
    dev = DeviceManager(PortSettings(port='/dev/serial-tester-missing-port', baud=9600))
    with pytest.raises(PortError):
        dev.connect()
    assert dev.serial is None


def test_unknown_url_scheme_raises_port_error():
    with pytest.raises(PortError):
        DeviceManager(PortSettings(port='nosuchscheme://x', baud=9600)).connect()


def test_io_before_connect_raises_port_error():
    dev = DeviceManager(loop_settings())
    with pytest.raises(PortError):
        dev.write(b'x')
    with pytest.raises(PortError):
        dev.read(bytearray(1))
    with pytest.raises(PortError):
        dev.flush()


def test_list_ports_returns_pairs():
    for entry in list_ports():
        device, description = entry
        assert isinstance(device, str)
