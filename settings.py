from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_PROTOCOL_ENV = "LOGGER_PROTOCOL"
_ENDPOINT_ENV = "LOGGER_ENDPOINT"
_USERNAME_ENV = "LOGGER_USERNAME"
_ERP_URL_ENV = "LOGGER_ERP_URL"
_ERP_USERNAME_ENV = "LOGGER_ERP_USERNAME"
_ERP_PASSWORD_ENV = "LOGGER_ERP_PASSWORD"
_SENSOR_NAME_ENV = "LOGGER_SENSOR_NAME"
_SEND_INTERVAL_ENV = "LOGGER_SEND_INTERVAL"
_RECAP_INTERVAL_ENV = "LOGGER_RECAP_INTERVAL"
_READ_TIMEOUT_ENV = "LOGGER_READ_TIMEOUT"
_USER_AGENT_ENV = "LOGGER_USER_AGENT"
_LINK_INTERFACE_ENV = "LOGGER_LINK_INTERFACE"
_IDLE_SLEEP_ENV = "LOGGER_IDLE_SLEEP"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_ENDPOINT = "http://api-logger-dev2.medionindonesia.com/api/v1/UpdateLoggingRealtime"


@dataclass(frozen=True)
class Settings:
    protocol: str
    endpoint: str
    username: str
    erp_url: str
    erp_username: str
    erp_password: str
    sensor_name: str
    send_interval_seconds: float
    recap_interval_minutes: int
    read_timeout: float
    user_agent: str
    link_interface: Optional[str]
    idle_sleep: float
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_int(name: str, default: int) -> int:
    # Zero and negative values are meaningful here (they disable the recap timer).
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        return int(candidate)
    except ValueError:
        return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        protocol=_read_str_env(_PROTOCOL_ENV, "HTTP"),
        endpoint=_read_str_env(_ENDPOINT_ENV, DEFAULT_ENDPOINT),
        username=_read_str_env(_USERNAME_ENV, "Medion"),
        erp_url=_read_optional_env(_ERP_URL_ENV, None) or "",
        erp_username=_read_str_env(_ERP_USERNAME_ENV, "Medion"),
        erp_password=_read_str_env(_ERP_PASSWORD_ENV, "iot@medion"),
        sensor_name=_read_str_env(_SENSOR_NAME_ENV, "TEST-BLOW-004-TEMP001"),
        send_interval_seconds=_read_positive_float(_SEND_INTERVAL_ENV, 10.0),
        recap_interval_minutes=_read_int(_RECAP_INTERVAL_ENV, 5),
        read_timeout=_read_positive_float(_READ_TIMEOUT_ENV, 5.0),
        user_agent=_read_str_env(_USER_AGENT_ENV, "DataLogger-Agent/0.1"),
        link_interface=_read_optional_env(_LINK_INTERFACE_ENV, None),
        idle_sleep=_read_positive_float(_IDLE_SLEEP_ENV, 0.05),
        log_level=_read_log_level("INFO"),
    )
