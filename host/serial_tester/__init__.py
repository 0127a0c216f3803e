import logging
from .runtime.device_manager import SerialPort, DeviceManager, list_ports
from .runtime.echo_test import EchoTest, TimingPolicy, wait_duration
from .runtime.payload import PayloadGenerator
from .runtime.virtual_port import LoopbackPort, FaultInjectingPort
from .settings import TestConfiguration, PortSettings, Settings, load_config, build_settings
from .tester import SerialTester, SizeGroup, TrialOutcome
from .reporter import Reporter
from .exceptions import SerialTesterError, ConfigError, PortError
from .utils.logger import setup_logger, set_global_level, INFO_VERBOSE

# Initialize Root Logger
# All 'serial_tester.*' loggers propagate to this one
setup_logger('serial_tester', level=logging.INFO)

def set_log_level(level):
    """
    Set logging level: 'DEBUG', 'INFO_VERBOSE', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'

    Example:
        import serial_tester
        serial_tester.set_log_level('DEBUG')
    """
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO_VERBOSE': INFO_VERBOSE,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }

    if isinstance(level, int):
        val = level
    else:
        val = level_map.get(level.upper(), logging.INFO)

    set_global_level(val)
