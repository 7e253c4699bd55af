import time
from collections.abc import Callable
from dataclasses import replace

from export_intake.intake.models import (
    ProgressEvent,
    ProgressStage,
    ProgressSummary,
    StageTiming,
)
from export_intake.logging.logger import Log

ProgressSink = Callable[[ProgressEvent], None]

STAGE_ORDER: tuple[ProgressStage, ...] = (
    ProgressStage.INITIALIZING,
    ProgressStage.VALIDATING,
    ProgressStage.EXTRACTING,
    ProgressStage.ORGANIZING,
    ProgressStage.FINALIZING,
    ProgressStage.COMPLETED,
)
TERMINAL_STAGES = frozenset({ProgressStage.COMPLETED, ProgressStage.ERROR})


class ProgressReporter:
    """Emits timestamped progress events for one intake run.

    Stages only move forward through ``STAGE_ORDER``; ``error`` may follow any
    stage. ``completed`` and ``error`` are terminal.
    """

    def __init__(self, sink: ProgressSink | None = None) -> None:
        self._sink = sink
        self._started_at = time.monotonic()
        self._current: ProgressStage | None = None
        self._stages: dict[ProgressStage, StageTiming] = {}
        self._percent = 0.0

    @property
    def current_stage(self) -> ProgressStage | None:
        return self._current

    @property
    def is_terminal(self) -> bool:
        return self._current in TERMINAL_STAGES

    def report(self, stage: ProgressStage, percent: float, message: str) -> ProgressEvent:
        """Record and emit one progress event.

        Raises:
            ValueError: on a backwards stage transition or a report after a
                terminal stage.
        """
        self._check_transition(stage)
        now = time.monotonic()
        timing = self._stages.get(stage)
        if timing is None:
            if self._current is not None and self._current in self._stages:
                self._stages[self._current].ended_at = now
            timing = StageTiming(started_at=now)
            self._stages[stage] = timing
        self._current = stage

        percent = min(100.0, max(0.0, float(percent)))
        self._percent = percent
        if percent >= 100 or stage in TERMINAL_STAGES:
            timing.completed = stage is not ProgressStage.ERROR
            timing.ended_at = now

        event = ProgressEvent(
            stage=stage,
            percent=percent,
            message=message,
            timestamp_millis=int(time.time() * 1000),
            elapsed_millis=_millis(now - self._started_at),
            stage_elapsed_millis=_millis(now - timing.started_at),
        )
        Log.debug(f"{stage.value}: {percent:.0f}% - {message}")
        if self._sink is not None:
            self._sink(event)
        return event

    def start_stage(self, stage: ProgressStage, message: str) -> ProgressEvent:
        return self.report(stage, 0, message)

    def complete_stage(self, stage: ProgressStage, message: str = "Completed") -> ProgressEvent:
        return self.report(stage, 100, message)

    def update_with_count(
        self,
        stage: ProgressStage,
        current: int,
        total: int,
        message: str,
    ) -> ProgressEvent:
        percent = round(current / total * 100) if total > 0 else 0
        return self.report(stage, percent, message)

    def complete(self, message: str = "Process completed successfully") -> ProgressEvent:
        return self.report(ProgressStage.COMPLETED, 100, message)

    def fail(self, message: str) -> ProgressEvent:
        return self.report(ProgressStage.ERROR, self._percent, message)

    def summary(self) -> ProgressSummary:
        return ProgressSummary(
            total_elapsed_millis=_millis(time.monotonic() - self._started_at),
            stages={stage: replace(timing) for stage, timing in self._stages.items()},
        )

    def _check_transition(self, stage: ProgressStage) -> None:
        if self._current is None:
            return
        if self._current in TERMINAL_STAGES:
            raise ValueError(
                f"Progress already finished with '{self._current.value}', "
                f"cannot report '{stage.value}'"
            )
        if stage is ProgressStage.ERROR:
            return
        if STAGE_ORDER.index(stage) < STAGE_ORDER.index(self._current):
            raise ValueError(
                f"Progress stage cannot move back from '{self._current.value}' "
                f"to '{stage.value}'"
            )


def _millis(seconds: float) -> int:
    return int(seconds * 1000)
