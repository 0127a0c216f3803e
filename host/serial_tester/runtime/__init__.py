from .device_manager import SerialPort, DeviceManager, list_ports
from .echo_test import EchoTest, TimingPolicy, wait_duration
from .payload import PayloadGenerator, RANDOM, ZERO
from .virtual_port import LoopbackPort, FaultInjectingPort
