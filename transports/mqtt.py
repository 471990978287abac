"""Publish-only MQTT placeholder.

This is not an MQTT client. No broker connection is opened, no CONNECT or
PUBLISH packet is written and there is no QoS or acknowledgement handling.
``publish`` only checks that the network link is up and then reports success,
so the agent can be exercised end to end with ``proto:MQTT``.
"""

from __future__ import annotations

import logging

from models.records import PROTOCOL_MQTT
from models.schemas import ErrorKind, TransmissionResult
from services.link import LinkMonitor

logger = logging.getLogger(__name__)


def topic_for(sensor_name: str) -> str:
    return f"sensors/{sensor_name}"


class MqttTransport:

    def __init__(self, link: LinkMonitor) -> None:
        self._link = link

    def publish(
        self,
        topic: str,
        payload: str,
        broker: str = "",
        username: str = "",
    ) -> TransmissionResult:
        context = {"protocol": PROTOCOL_MQTT}
        logger.info("Connecting to broker: %s", broker, extra=context)
        logger.info("Authenticating as user: %s", username, extra=context)

        if not self._link.is_up():
            logger.error("No network link", extra=context)
            return TransmissionResult.failure(PROTOCOL_MQTT, ErrorKind.link_down)

        logger.info("Publishing to topic '%s': %s", topic, payload, extra=context)
        logger.info("Data sent successfully", extra=context)
        return TransmissionResult(success=True, protocol=PROTOCOL_MQTT)
