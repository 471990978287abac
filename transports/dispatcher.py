"""Chooses the active transport for each send and prepares its inputs."""

from __future__ import annotations

import logging
from typing import Optional

from models.records import PROTOCOL_HTTP, PROTOCOL_MQTT, AgentContext
from models.schemas import ErrorKind, TransmissionResult
from services.link import LinkMonitor
from settings import Settings, get_settings
from transports.auth import basic_auth_token
from transports.http import HttpTransport
from transports.mqtt import MqttTransport, topic_for
from transports.urls import MalformedURL, decompose_url

logger = logging.getLogger(__name__)


def format_value(value: float) -> str:
    return f"{value:.2f}"


def build_payload(sensor_name: str, value: float, username: str) -> str:
    # Field name is dynamic, so the document is assembled as text. Neither the
    # sensor name nor the username is escaped.
    return '{"' + sensor_name + '": ' + format_value(value) + ', "user": "' + username + '"}'


class TransportDispatcher:
    """Routes a send to the HTTP transport or the MQTT placeholder by protocol name."""

    def __init__(self, http: HttpTransport, mqtt: MqttTransport) -> None:
        self.http = http
        self.mqtt = mqtt

    def dispatch(self, context: AgentContext) -> TransmissionResult:
        protocol = context.config.protocol
        logger.info("Transmission interval reached", extra={"protocol": protocol})
        if protocol == PROTOCOL_HTTP:
            return self._send_http(context)
        if protocol == PROTOCOL_MQTT:
            return self._send_mqtt(context)
        logger.error("Unknown protocol %r", protocol, extra={"protocol": protocol})
        return TransmissionResult.failure(protocol, ErrorKind.unknown_protocol)

    def _send_http(self, context: AgentContext) -> TransmissionResult:
        config = context.config
        # Overrides are merged on every send so runtime commands apply immediately.
        target_url = config.effective_endpoint
        target_user = config.effective_username
        try:
            url = decompose_url(target_url)
        except MalformedURL as exc:
            logger.error("%s", exc, extra={"protocol": PROTOCOL_HTTP})
            return TransmissionResult.failure(PROTOCOL_HTTP, ErrorKind.malformed_url)

        payload = build_payload(config.sensor_name, context.reading.value, target_user)
        token = basic_auth_token(config.override_username, config.password)
        return self.http.send(url, payload, token)

    def _send_mqtt(self, context: AgentContext) -> TransmissionResult:
        config = context.config
        return self.mqtt.publish(
            topic_for(config.sensor_name),
            format_value(context.reading.value),
            broker=config.endpoint,
            username=config.username,
        )


def build_dispatcher(link: LinkMonitor, settings: Optional[Settings] = None) -> TransportDispatcher:
    """Wire both transports from settings."""
    settings = settings or get_settings()
    http = HttpTransport(read_timeout=settings.read_timeout, user_agent=settings.user_agent)
    return TransportDispatcher(http=http, mqtt=MqttTransport(link))
