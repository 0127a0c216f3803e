import argparse
import sys

import yaml

from . import set_log_level
from .exceptions import ConfigError, PortError
from .reporter import Reporter
from .runtime.device_manager import DeviceManager, list_ports
from .settings import load_config, build_settings
from .tester import SerialTester


class _ArgumentParser(argparse.ArgumentParser):
    """Exit with status 1 on bad arguments, like any other configuration error."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = _ArgumentParser(
        prog='serial-tester',
        description="Echo test a serial device: send random payloads and check they come back unchanged.")
    parser.add_argument('-p', '--port', help="Serial port or pyserial URL (e.g. /dev/ttyUSB0, COM3, loop://)")
    parser.add_argument('-b', '--baud', help="Baud rate")
    parser.add_argument('-r', '--reps', help="Repetitions for each size")
    parser.add_argument('-s', '--size', dest='sizes', action='extend', nargs='+', metavar='SIZE',
                        help="Payload size in bytes, K/M suffix allowed. Repeatable.")
    parser.add_argument('-f', '--fail-only', action='store_true', default=None,
                        help="Only show failures")
    parser.add_argument('--config', help="YAML file overriding the defaults")
    parser.add_argument('--log-level', help="DEBUG, INFO_VERBOSE, INFO, WARNING, ERROR")
    parser.add_argument('--no-color', dest='color', action='store_false', default=None,
                        help="Disable colored output")
    parser.add_argument('--list-ports', action='store_true', help="List serial ports and exit")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_ports:
        for device, description in list_ports():
            print(f"{device}\t{description}")
        return 0

    try:
        settings = build_settings(load_config(args.config), {
            'port': args.port,
            'baud': args.baud,
            'repetitions': args.reps,
            'sizes': args.sizes,
            'fail_only': args.fail_only,
            'log_level': args.log_level,
            'color': args.color,
        })
    except (ConfigError, OSError, yaml.YAMLError) as e:
        print(e)
        return 1

    set_log_level(settings.log_level)

    device = DeviceManager(settings.port)
    try:
        device.connect()
    except PortError:
        print(f"Could not open port: {settings.port.port}")
        return 1

    try:
        tester = SerialTester(settings.test, device, timing=settings.timing)
        reporter = Reporter(settings.test.fail_only, color=None if settings.color else False)
        for _ in tester.run(reporter):
            pass
    finally:
        device.disconnect()

    return 0
