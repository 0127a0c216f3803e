import sys


class Colors:
    OKGREEN = '\033[92m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'


class Reporter:
    """
    Prints trial results as they arrive.

    In fail-only mode passing trials are not printed; a size group where
    every trial passed gets a single "All passed" line instead.
    """

    def __init__(self, fail_only: bool = False, stream=None, color: bool = None):
        self.fail_only = fail_only
        self.stream = stream if stream is not None else sys.stdout
        if color is None:
            color = hasattr(self.stream, 'isatty') and self.stream.isatty()
        self.color = color

    def _paint(self, text, code):
        if not self.color:
            return text
        return f"{code}{text}{Colors.ENDC}"

    def _print(self, text=''):
        print(text, file=self.stream)

    def begin_group(self, size, repetitions):
        title = f"Size={size}, Reps={repetitions}"
        self._print()
        self._print(title)
        self._print('-' * len(title))

    def trial(self, outcome):
        if outcome.passed and self.fail_only:
            return
        if outcome.passed:
            status = self._paint('Passed', Colors.OKGREEN)
        else:
            status = self._paint('Failed', Colors.FAIL)
        self._print(f"{outcome.index} ({outcome.size} bytes): {status}")

    def end_group(self, group):
        if self.fail_only and group.all_passed:
            self._print(self._paint('All passed', Colors.OKGREEN))

    def report_group(self, group):
        """Render an already finished size group."""
        self.begin_group(group.size, group.repetitions)
        for outcome in group.outcomes:
            self.trial(outcome)
        self.end_group(group)

    def report(self, groups):
        for group in groups:
            self.report_group(group)
