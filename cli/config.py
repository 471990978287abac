from __future__ import annotations

from typing import Optional

from models.records import AgentConfig
from settings import Settings, get_settings


def load_config(
    endpoint: Optional[str] = None,
    protocol: Optional[str] = None,
    sensor_name: Optional[str] = None,
    send_interval: Optional[float] = None,
    recap_interval: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> AgentConfig:
    """Build the startup configuration; explicit options win over settings."""
    settings = settings or get_settings()
    if send_interval is None or send_interval <= 0:
        send_interval = settings.send_interval_seconds
    return AgentConfig(
        protocol=protocol or settings.protocol,
        endpoint=endpoint or settings.endpoint,
        override_endpoint=settings.erp_url,
        username=settings.username,
        override_username=settings.erp_username,
        password=settings.erp_password,
        sensor_name=sensor_name or settings.sensor_name,
        send_interval_seconds=send_interval,
        recap_interval_minutes=(
            settings.recap_interval_minutes if recap_interval is None else recap_interval
        ),
    )
