"""Tests for badge rendering and network enrichment."""

from __future__ import annotations

import logging
from urllib.error import HTTPError, URLError

import pytest

from elreadme.analyzers.license import LICENSE_CATALOG
from elreadme.config import BadgeConfig
from elreadme.models import LicenseMatch
from elreadme.postproc import badges as badges_module
from elreadme.postproc.badges import BadgeManager, url_exists

MIT = LICENSE_CATALOG[0]
GPL3 = LICENSE_CATALOG[2]


def test_license_badge_only_when_offline() -> None:
    manager = BadgeManager(BadgeConfig(network=False))
    result = manager.collect(LicenseMatch(candidates=(MIT,)), package="widget", repository="jane/widget")
    assert result == [MIT.badge]
    assert manager.render(result) == [
        "[![License MIT](https://img.shields.io/badge/license-MIT-green.svg)]"
        "(http://opensource.org/licenses/MIT)"
    ]


def test_ambiguous_license_has_no_badge() -> None:
    manager = BadgeManager(BadgeConfig(network=False))
    assert manager.collect(LicenseMatch(candidates=(MIT, GPL3))) == []
    assert manager.collect(LicenseMatch()) == []


def test_license_badge_can_be_disabled() -> None:
    manager = BadgeManager(BadgeConfig(license=False, network=False))
    assert manager.collect(LicenseMatch(candidates=(GPL3,))) == []


def test_network_badges_follow_url_checks() -> None:
    checked: list[str] = []

    def answer(url: str, timeout: float) -> bool:
        checked.append(url)
        return "stable" not in url

    manager = BadgeManager(BadgeConfig(timeout=1.0), check_url=answer)
    result = manager.collect(LicenseMatch(candidates=(GPL3,)), package="widget", repository="jane/widget")

    assert checked == [
        "https://melpa.org/packages/widget-badge.svg",
        "https://stable.melpa.org/packages/widget-badge.svg",
        "https://github.com/jane/widget/actions/workflows/test.yml/badge.svg",
    ]
    assert [badge.alt for badge in result] == ["License GPLv3", "MELPA", "Build Status"]
    assert result[1].link == "https://melpa.org/#/widget"
    assert result[2].link == "https://github.com/jane/widget/actions"


def test_network_badges_skip_missing_keys() -> None:
    calls: list[str] = []
    manager = BadgeManager(check_url=lambda url, timeout: calls.append(url) or True)
    assert manager.collect(LicenseMatch()) == []
    assert calls == []


def test_url_exists_reports_failures_as_missing(monkeypatch) -> None:
    def refuse(request, timeout):  # type: ignore[no-untyped-def]
        raise URLError("offline")

    monkeypatch.setattr(badges_module, "urlopen", refuse)
    assert url_exists("https://melpa.org/packages/widget-badge.svg", 0.1) is False

    def not_found(request, timeout):  # type: ignore[no-untyped-def]
        raise HTTPError(request.full_url, 404, "Not Found", None, None)

    monkeypatch.setattr(badges_module, "urlopen", not_found)
    assert url_exists("https://melpa.org/packages/widget-badge.svg", 0.1) is False


def test_url_exists_accepts_ok_response(monkeypatch) -> None:
    class _Response:
        status = 200

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

    monkeypatch.setattr(badges_module, "urlopen", lambda request, timeout: _Response())
    assert url_exists("https://melpa.org/packages/widget-badge.svg", 0.1) is True


def test_unknown_placeholder_in_ci_template_skips_badge(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="elreadme")
    checked: list[str] = []
    config = BadgeConfig(melpa=False, ci_image="https://ci.example/{owner}/{repo}.svg")
    manager = BadgeManager(config, check_url=lambda url, timeout: checked.append(url) or True)

    result = manager.collect(LicenseMatch(), repository="jane/widget")

    assert result == []
    assert checked == []
    assert "Skipping CI badge" in caplog.text


def test_unknown_placeholder_in_ci_link_skips_badge() -> None:
    config = BadgeConfig(melpa=False, ci_link="https://ci.example/{branch}")
    manager = BadgeManager(config, check_url=lambda url, timeout: True)
    assert manager.collect(LicenseMatch(), repository="jane/widget") == []
