import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

import yaml

from .exceptions import ConfigError
from .runtime.echo_test import TimingPolicy
from .validator import Validator

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'config', 'defaults.yaml')


@dataclass(frozen=True)
class TestConfiguration:
    """What to test. Built once before any trial runs."""
    __test__ = False  # not a pytest class

    baud: int
    fail_only: bool
    repetitions: int
    sizes: Tuple[int, ...]

    def __post_init__(self):
        if self.repetitions < 1:
            raise ConfigError(f"Bad reps value: {self.repetitions}")
        for size in self.sizes:
            if size < 0:
                raise ConfigError(f"Bad size value: {size}")


@dataclass(frozen=True)
class PortSettings:
    port: str
    baud: int
    bytesize: int = 8
    parity: str = 'N'
    stopbits: float = 1
    xonxoff: bool = False
    rtscts: bool = False
    timeout: Optional[float] = 0.1


@dataclass(frozen=True)
class Settings:
    test: TestConfiguration
    port: PortSettings
    timing: TimingPolicy = field(default_factory=TimingPolicy)
    log_level: str = 'INFO'
    color: bool = True


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(config_path):
    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


def load_config(config_path: str = None) -> dict:
    """
    Load the packaged defaults, overlaid with a user YAML file if given.

    Args:
        config_path (str): Optional path to a YAML file. Relative paths are
            resolved against the current directory.

    Returns:
        dict: Merged raw configuration
    """
    config = _read_yaml(DEFAULT_CONFIG_PATH)
    if config_path:
        config = _merge(config, _read_yaml(os.path.abspath(config_path)))
    return config


def build_settings(raw: dict, overrides: dict = None) -> Settings:
    """
    Validate raw configuration into Settings.

    Args:
        raw (dict): Output of load_config()
        overrides (dict): Command-line values; None entries are ignored.
            Keys: port, baud, repetitions, sizes, fail_only, log_level, color

    Raises:
        ConfigError: If any value is malformed
    """
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    port_cfg = raw.get('port') or {}
    test_cfg = raw.get('test') or {}
    timing_cfg = raw.get('timing') or {}

    v = Validator()

    baud = v.parse_baud(overrides.get('baud', port_cfg.get('baud')))
    test = TestConfiguration(
        baud=baud,
        fail_only=v.parse_flag(overrides.get('fail_only', test_cfg.get('fail_only', False)), 'fail_only'),
        repetitions=v.parse_reps(overrides.get('repetitions', test_cfg.get('repetitions'))),
        sizes=tuple(v.parse_sizes(overrides.get('sizes', test_cfg.get('sizes', [])))),
    )

    bytesize = port_cfg.get('bytesize', 8)
    parity = str(port_cfg.get('parity', 'N')).upper()
    stopbits = port_cfg.get('stopbits', 1)
    v.validate_framing(bytesize, parity, stopbits)
    port = PortSettings(
        port=v.validate_port(overrides.get('port', port_cfg.get('name'))),
        baud=baud,
        bytesize=bytesize,
        parity=parity,
        stopbits=stopbits,
        xonxoff=v.parse_flag(port_cfg.get('xonxoff', False), 'xonxoff'),
        rtscts=v.parse_flag(port_cfg.get('rtscts', False), 'rtscts'),
        timeout=v.validate_timeout(port_cfg.get('timeout', 0.1)),
    )

    defaults = TimingPolicy()
    factor, fallback_baud, frame_bits = v.validate_timing(
        timing_cfg.get('round_trip_factor', defaults.round_trip_factor),
        timing_cfg.get('fallback_baud', defaults.fallback_baud),
        timing_cfg.get('frame_bits', defaults.frame_bits),
    )
    timing = TimingPolicy(round_trip_factor=factor, fallback_baud=fallback_baud, frame_bits=frame_bits)

    log_cfg = raw.get('logging') or {}
    output_cfg = raw.get('output') or {}
    return Settings(
        test=test,
        port=port,
        timing=timing,
        log_level=str(overrides.get('log_level', log_cfg.get('level', 'INFO'))),
        color=v.parse_flag(overrides.get('color', output_cfg.get('color', True)), 'color'),
    )
