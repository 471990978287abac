"""Mutable agent state shared across the control loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

PROTOCOL_HTTP = "HTTP"
PROTOCOL_MQTT = "MQTT"


@dataclass
class AgentConfig:
    """Runtime configuration; any field may be rewritten by an operator command.

    ``protocol`` is a free-form string so that unknown values can be stored and
    only rejected when a transmission is attempted.
    """

    protocol: str = PROTOCOL_HTTP
    endpoint: str = ""
    override_endpoint: str = ""
    username: str = ""
    override_username: str = ""
    password: str = ""
    sensor_name: str = ""
    send_interval_seconds: float = 10.0
    recap_interval_minutes: int = 5

    @property
    def effective_endpoint(self) -> str:
        return self.override_endpoint if self.override_endpoint else self.endpoint

    @property
    def effective_username(self) -> str:
        return self.override_username if self.override_username else self.username


@dataclass(slots=True)
class Reading:
    """The single scalar value held by the agent."""

    sensor_name: str
    value: float = 0.0
    updated_at: Optional[float] = None


@dataclass
class AgentContext:
    """Owns the configuration and the current reading for the agent's lifetime."""

    config: AgentConfig
    reading: Reading = field(init=False)

    def __post_init__(self) -> None:
        self.reading = Reading(sensor_name=self.config.sensor_name)
