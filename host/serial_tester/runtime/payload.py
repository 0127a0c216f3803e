import numpy as np

RANDOM = 'random'
ZERO = 'zero'


class PayloadGenerator:
    """
    Produces test payloads.

    Random payloads come from a numpy Generator, so a seed or an explicit
    generator can be passed in to make a run reproducible.
    """

    def __init__(self, rng: np.random.Generator = None, seed: int = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def random(self, size: int) -> bytes:
        """Bytes drawn uniformly from 0x00-0xFF."""
        return self.rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()

    def zero(self, size: int) -> bytearray:
        """A cleared, writable receive buffer."""
        return bytearray(size)

    def generate(self, size: int, mode: str = RANDOM):
        if mode == RANDOM:
            return self.random(size)
        elif mode == ZERO:
            return self.zero(size)
        else:
            raise ValueError(f"Unknown payload mode: {mode}")
