"""Cooperative control loop for the data logger."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from models.records import AgentConfig, AgentContext
from models.schemas import TransmissionResult
from services.commands import CommandInterpreter, Emit
from services.console import LineSource
from services.link import LinkMonitor
from services.scheduler import Scheduler, Trigger
from settings import Settings, get_settings
from transports.dispatcher import TransportDispatcher, build_dispatcher

logger = logging.getLogger(__name__)


class DataLoggerAgent:
    """Drains operator input, checks both timers and sends at most once per iteration."""

    def __init__(
        self,
        context: AgentContext,
        interpreter: CommandInterpreter,
        dispatcher: TransportDispatcher,
        scheduler: Scheduler,
        source: LineSource,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.context = context
        self.interpreter = interpreter
        self.dispatcher = dispatcher
        self.scheduler = scheduler
        self.source = source
        self._sleep = sleep

    def run_once(self) -> Optional[TransmissionResult]:
        for line in self.source.drain():
            self.interpreter.handle(line)

        config = self.context.config
        triggers = self.scheduler.poll(config.send_interval_seconds, config.recap_interval_minutes)

        result: Optional[TransmissionResult] = None
        if Trigger.transmission_due in triggers:
            result = self.dispatcher.dispatch(self.context)
            self._log_result(result)

        if Trigger.recap_due in triggers:
            logger.info(
                "[RECAP] Interval %d min reached",
                config.recap_interval_minutes,
                extra={"interval": config.recap_interval_minutes},
            )
        return result

    def run_forever(self, idle_sleep: float = 0.05) -> None:
        logger.info(
            "Agent started",
            extra={"protocol": self.context.config.protocol, "sensor": self.context.config.sensor_name},
        )
        while True:
            try:
                self.run_once()
            except Exception:  # noqa: BLE001
                logger.exception("Control loop iteration failed")
            self._sleep(idle_sleep)

    @staticmethod
    def _log_result(result: TransmissionResult) -> None:
        error_kind = result.error_kind.value if result.error_kind else None
        extra = {
            "protocol": result.protocol,
            "status_code": result.status_code,
            "error_kind": error_kind,
        }
        if result.success:
            logger.info("Transmission succeeded", extra=extra)
        else:
            logger.warning("Transmission failed", extra=extra)


def build_agent(
    config: AgentConfig,
    source: LineSource,
    link: LinkMonitor,
    emit: Emit = print,
    settings: Optional[Settings] = None,
) -> DataLoggerAgent:
    settings = settings or get_settings()
    context = AgentContext(config)
    return DataLoggerAgent(
        context=context,
        interpreter=CommandInterpreter(context, emit=emit),
        dispatcher=build_dispatcher(link, settings),
        scheduler=Scheduler(),
        source=source,
    )
