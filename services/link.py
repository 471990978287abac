"""Network link status as seen by the agent."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import psutil

logger = logging.getLogger(__name__)


class LinkMonitor(Protocol):
    def is_up(self) -> bool:
        ...


class StaticLink:
    """Fixed link state, used when no interface is configured and in tests."""

    def __init__(self, up: bool = True) -> None:
        self.up = up

    def is_up(self) -> bool:
        return self.up


class InterfaceLink:
    """Reports whether a named network interface is up."""

    def __init__(self, interface: str) -> None:
        self.interface = interface

    def is_up(self) -> bool:
        stats = psutil.net_if_stats().get(self.interface)
        if stats is None:
            logger.warning("Network interface %r not found", self.interface)
            return False
        return bool(stats.isup)


def build_link_monitor(interface: Optional[str]) -> LinkMonitor:
    if interface:
        return InterfaceLink(interface)
    return StaticLink(up=True)


def log_link_diagnostics(link: LinkMonitor) -> bool:
    """Log the boot-time link state and return it."""
    up = link.is_up()
    if up:
        logger.info("Network link is up")
    else:
        logger.warning("Network link is down; cable or interface not connected")
    return up
