"""
Evaluation session - holds the live input snapshot and runs recompute cycles
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .history import DEFAULT_CAPACITY, HistoryBuffer, HistorySample
from .stress import StressInputs, StressResult, StressScorer, get_preset
from .stress.presets import DEFAULT_PRESET

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CycleOutput:
    """Everything a rendering surface needs after one recompute"""

    inputs: StressInputs
    result: StressResult
    history: Tuple[HistorySample, ...]


Listener = Callable[[CycleOutput], None]


class StressSession:
    """Runs one synchronous evaluate-and-record cycle per input change"""

    def __init__(
        self,
        inputs: StressInputs = None,
        scorer: StressScorer = None,
        history: HistoryBuffer = None,
        label_format: str = "%H:%M:%S",
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize session

        Args:
            inputs: Starting inputs (default: the svb preset)
            scorer: StressScorer instance (optional)
            history: HistoryBuffer instance (optional, 30 samples)
            label_format: strftime format for history labels
            clock: Callable returning the current time
        """
        self._inputs = inputs or get_preset(DEFAULT_PRESET)
        self.scorer = scorer or StressScorer()
        self.history = history if history is not None else HistoryBuffer(DEFAULT_CAPACITY)
        self.label_format = label_format
        self.clock = clock
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    @property
    def inputs(self) -> StressInputs:
        with self._lock:
            return self._inputs

    def subscribe(self, listener: Listener):
        """Register a callable notified with every CycleOutput"""
        self._listeners.append(listener)

    def evaluate_once(self) -> CycleOutput:
        """
        Run one cycle on the current snapshot

        Evaluates, appends the score to history and notifies listeners.

        Returns:
            CycleOutput for the rendering surface
        """
        with self._lock:
            output = self._record_cycle()
        return self._notify(output)

    def _record_cycle(self) -> CycleOutput:
        # Caller holds self._lock
        inputs = self._inputs
        result = self.scorer.evaluate(inputs)
        label = self.clock().strftime(self.label_format)
        self.history.append(result.score, label)

        logger.debug(f"Cycle at {label}: score={result.score:.2f} tier={result.tier.value}")
        return CycleOutput(inputs=inputs, result=result, history=self.history.current())

    def _notify(self, output: CycleOutput) -> CycleOutput:
        # Listeners run outside the lock
        for listener in list(self._listeners):
            listener(output)
        return output

    def set_inputs(self, inputs: StressInputs) -> CycleOutput:
        """Replace the whole snapshot and recompute"""
        if not isinstance(inputs, StressInputs):
            raise TypeError(f"Expected StressInputs, got {type(inputs).__name__}")

        with self._lock:
            self._inputs = inputs
            output = self._record_cycle()
        return self._notify(output)

    def update(self, **changes) -> CycleOutput:
        """Change individual fields (a slider move) and recompute"""
        with self._lock:
            self._inputs = self._inputs.replace(**changes)
            output = self._record_cycle()
        return self._notify(output)

    def apply_preset(self, name: str) -> CycleOutput:
        """
        Overwrite the snapshot with a named preset and recompute

        Raises:
            KeyError: If the preset is unknown
        """
        preset = get_preset(name)
        logger.info(f"Applying preset '{name}'")
        return self.set_inputs(preset)

    def latest(self) -> Optional[HistorySample]:
        return self.history.latest()
