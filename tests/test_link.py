from __future__ import annotations

from types import SimpleNamespace

from services.link import InterfaceLink, StaticLink, build_link_monitor, log_link_diagnostics


def test_build_without_interface_assumes_link_up() -> None:
    link = build_link_monitor(None)

    assert isinstance(link, StaticLink)
    assert link.is_up() is True


def test_interface_link_reads_psutil_stats(monkeypatch) -> None:
    stats = {"eth0": SimpleNamespace(isup=True), "eth1": SimpleNamespace(isup=False)}
    monkeypatch.setattr("services.link.psutil.net_if_stats", lambda: stats)

    assert InterfaceLink("eth0").is_up() is True
    assert InterfaceLink("eth1").is_up() is False
    assert InterfaceLink("wlan9").is_up() is False


def test_diagnostics_report_state(caplog) -> None:
    with caplog.at_level("INFO", logger="services.link"):
        assert log_link_diagnostics(StaticLink(up=False)) is False

    assert "link is down" in caplog.text
