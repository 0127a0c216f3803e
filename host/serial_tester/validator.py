from .exceptions import ConfigError

VALID_BYTESIZES = (5, 6, 7, 8)
VALID_PARITIES = ('N', 'E', 'O', 'M', 'S')
VALID_STOPBITS = (1, 1.5, 2)


class Validator:
    """Parses and validates test and port configuration values."""

    def _parse_count(self, value, label):
        """Parse a non-negative integer from an int or decimal string."""
        if isinstance(value, bool):
            raise ConfigError(f"Bad {label} value: {value}")
        if isinstance(value, int):
            number = value
        elif isinstance(value, str) and value.strip().isdecimal():
            number = int(value.strip())
        else:
            raise ConfigError(f"Bad {label} value: {value}")

        if number < 0:
            raise ConfigError(f"Bad {label} value: {value}")
        return number

    def parse_size(self, value):
        """
        Parse a payload size like '256', '4K' or '1M' to bytes.

        Args:
            value (int or str): Size value

        Returns:
            int: Size in bytes

        Raises:
            ConfigError: If the value is not a non-negative size
        """
        multiplier = 1
        digits = value
        if isinstance(value, str):
            digits = value.strip().upper()
            if digits.endswith('K'):
                multiplier = 1024
                digits = digits[:-1]
            elif digits.endswith('M'):
                multiplier = 1024 * 1024
                digits = digits[:-1]

        try:
            return self._parse_count(digits, 'size') * multiplier
        except ConfigError:
            raise ConfigError(f"Bad size value: {value}") from None

    def parse_sizes(self, values):
        """Parse every size, keeping the given order."""
        if isinstance(values, (str, int)):
            values = [values]
        sizes = [self.parse_size(v) for v in values]
        if not sizes:
            raise ConfigError("At least one test size is required")
        return sizes

    def parse_baud(self, value):
        baud = self._parse_count(value, 'baud')
        if baud == 0:
            raise ConfigError(f"Bad baud value: {value}")
        return baud

    def parse_reps(self, value):
        reps = self._parse_count(value, 'reps')
        if reps < 1:
            raise ConfigError(f"Bad reps value: {value}")
        return reps

    def parse_flag(self, value, label):
        """Accept only real booleans; quoted 'no' or 'false' are rejected."""
        if not isinstance(value, bool):
            raise ConfigError(f"Bad {label} value: {value}")
        return value

    def validate_port(self, port):
        if port is None or port == '':
            raise ConfigError("No serial port specified")
        if not isinstance(port, str):
            raise ConfigError(f"Bad port value: {port}")
        return port

    def validate_framing(self, bytesize, parity, stopbits):
        """
        Validate character framing settings.

        Raises:
            ConfigError: If any setting is not supported by the driver
        """
        if bytesize not in VALID_BYTESIZES:
            raise ConfigError(f"Bad bytesize value: {bytesize}")
        if str(parity).upper() not in VALID_PARITIES:
            raise ConfigError(f"Bad parity value: {parity}")
        if stopbits not in VALID_STOPBITS:
            raise ConfigError(f"Bad stopbits value: {stopbits}")

    def validate_timeout(self, timeout):
        if timeout is None:
            return None
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout < 0:
            raise ConfigError(f"Bad timeout value: {timeout}")
        return float(timeout)

    def validate_timing(self, round_trip_factor, fallback_baud, frame_bits):
        """
        Validate timing settings.

        Returns:
            tuple: (round_trip_factor, fallback_baud, frame_bits) as
                (float, int, int)
        """
        if isinstance(round_trip_factor, bool) or not isinstance(round_trip_factor, (int, float)) \
                or round_trip_factor < 0:
            raise ConfigError(f"Bad round_trip_factor value: {round_trip_factor}")
        baud = self.parse_baud(fallback_baud)
        bits = self._parse_count(frame_bits, 'frame_bits')
        if bits == 0:
            raise ConfigError(f"Bad frame_bits value: {frame_bits}")
        return float(round_trip_factor), baud, bits
