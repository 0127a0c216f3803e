from dataclasses import dataclass, field
from typing import Iterator, List

from .runtime.echo_test import EchoTest, TimingPolicy
from .runtime.payload import PayloadGenerator, RANDOM
from .settings import TestConfiguration
from .utils.logger import setup_logger, INFO_VERBOSE

logger = setup_logger(__name__)


@dataclass(frozen=True)
class TrialOutcome:
    index: int  # 1-based within the size group
    size: int
    passed: bool


@dataclass
class SizeGroup:
    size: int
    repetitions: int
    outcomes: List[TrialOutcome] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return all(o.passed for o in self.outcomes)

    @property
    def failures(self) -> int:
        return sum(1 for o in self.outcomes if not o.passed)


class SerialTester:
    """
    Runs the configured echo trials against an open port.

    The port is borrowed: it must already be open and configured, and it is
    left open when the run finishes.

    Usage:
        tester = SerialTester(config, port)
        for group in tester.run(reporter):
            ...
    """
    def __init__(self,
                 config: TestConfiguration,
                 port,
                 payloads: PayloadGenerator = None,
                 timing: TimingPolicy = None,
                 engine: EchoTest = None,
                 sleep=None):
        self.config = config
        self.port = port
        self.payloads = payloads or PayloadGenerator()

        if engine is None:
            kwargs = {'payloads': self.payloads, 'timing': timing}
            if sleep is not None:
                kwargs['sleep'] = sleep
            engine = EchoTest(**kwargs)
        self.engine = engine

    def run_size(self, size: int, listener=None) -> SizeGroup:
        """
        Run every repetition for one payload size, one after another.

        Args:
            size (int): Payload size in bytes
            listener: Optional object with begin_group(size, reps),
                trial(outcome) and end_group(group) callbacks.
        """
        reps = self.config.repetitions
        group = SizeGroup(size=size, repetitions=reps)
        if listener:
            listener.begin_group(size, reps)

        for i in range(reps):
            wdata = self.payloads.generate(size, RANDOM)
            passed = self.engine.run_trial(self.port, wdata)
            outcome = TrialOutcome(index=i + 1, size=len(wdata), passed=passed)
            group.outcomes.append(outcome)
            if listener:
                listener.trial(outcome)

        logger.log(INFO_VERBOSE, f"Size {size}: {reps - group.failures}/{reps} passed")
        if listener:
            listener.end_group(group)
        return group

    def run(self, listener=None) -> Iterator[SizeGroup]:
        """Yield one SizeGroup per configured size, in the configured order."""
        for size in self.config.sizes:
            yield self.run_size(size, listener)
