"""Line-oriented operator commands."""

from __future__ import annotations

import logging
import re
import time
from typing import Callable, List, Optional, Tuple

from models.records import AgentConfig, AgentContext

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]

_LEADING_INT = re.compile(r"[-+]?\d+")
_LEADING_FLOAT = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_LITERAL_ZEROES = {"0", "0.0"}

COMMAND_HELP: List[Tuple[str, str]] = [
    ("url:<endpoint>", "Set Server URL / Broker IP"),
    ("user:<name>", "Set Username"),
    ("proto:<HTTP/MQTT>", "Set Protocol"),
    ("erp_url:<url>", "Set ERP URL (Overrides default URL)"),
    ("erp_user:<user>", "Set ERP Username"),
    ("erp_pass:<pass>", "Set ERP Password"),
    ("recap:<min>", "Set Recap Interval (Minutes)"),
    ("<number>", "Set Temperature (e.g., 25.5)"),
]


def parse_leading_int(text: str) -> int:
    match = _LEADING_INT.match(text.strip())
    return int(match.group(0)) if match else 0


def parse_leading_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text.strip())
    return float(match.group(0)) if match else 0.0


def _set_endpoint(config: AgentConfig, value: str) -> str:
    config.endpoint = value
    return f"Endpoint set to: {value}"


def _set_username(config: AgentConfig, value: str) -> str:
    config.username = value
    return f"User set to: {value}"


def _set_protocol(config: AgentConfig, value: str) -> str:
    config.protocol = value
    return f"Protocol set to: {value}"


def _set_override_endpoint(config: AgentConfig, value: str) -> str:
    config.override_endpoint = value
    return f"ERP URL set to: {value}"


def _set_override_username(config: AgentConfig, value: str) -> str:
    config.override_username = value
    return f"ERP User set to: {value}"


def _set_password(config: AgentConfig, value: str) -> str:
    config.password = value
    return "ERP Password set."


def _set_recap(config: AgentConfig, value: str) -> str:
    config.recap_interval_minutes = parse_leading_int(value)
    return f"Recap Interval set to: {config.recap_interval_minutes} minutes"


# Ordered so that a longer prefix is always tried before any prefix it contains.
_HANDLERS: List[Tuple[str, Callable[[AgentConfig, str], str]]] = sorted(
    [
        ("url:", _set_endpoint),
        ("user:", _set_username),
        ("proto:", _set_protocol),
        ("erp_url:", _set_override_endpoint),
        ("erp_user:", _set_override_username),
        ("erp_pass:", _set_password),
        ("recap:", _set_recap),
    ],
    key=lambda item: len(item[0]),
    reverse=True,
)


class CommandInterpreter:
    """Applies one command line at a time to an :class:`AgentContext`.

    Configuration commands are stored verbatim; bad values surface at the next
    send attempt. A line that is neither a command nor a number is ignored.
    """

    def __init__(
        self,
        context: AgentContext,
        emit: Emit = print,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.context = context
        self._emit = emit
        self._clock = clock

    def handle(self, line: str) -> Optional[str]:
        text = line.strip()
        if not text:
            return None

        for prefix, handler in _HANDLERS:
            if text.startswith(prefix):
                ack = handler(self.context.config, text[len(prefix):])
                return self._acknowledge(ack)

        value = parse_leading_float(text)
        if value == 0.0 and text not in _LITERAL_ZEROES:
            logger.debug("Ignoring unrecognised input %r", text)
            return None

        reading = self.context.reading
        reading.value = value
        reading.updated_at = self._clock()
        logger.debug("Reading updated", extra={"sensor": reading.sensor_name, "value": value})
        return self._acknowledge(f"[SENSOR] Temp updated: {value:.2f}")

    def _acknowledge(self, message: str) -> str:
        self._emit(message)
        return message
