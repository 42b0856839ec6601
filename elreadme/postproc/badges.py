"""Badge rendering for generated README files."""

from __future__ import annotations

from typing import Callable, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from jinja2 import Environment

from ..config import BadgeConfig
from ..logging import get_logger
from ..models import Badge, LicenseMatch
from ..templating import create_environment

MELPA_URL = "https://melpa.org"
MELPA_STABLE_URL = "https://stable.melpa.org"

UrlCheck = Callable[[str, float], bool]


def url_exists(url: str, timeout: float) -> bool:
    """Return True when a GET on ``url`` answers with HTTP 200."""
    request = Request(url, method="GET", headers={"User-Agent": "elreadme"})
    try:
        with urlopen(request, timeout=timeout) as response:
            return getattr(response, "status", 200) == 200
    except HTTPError as exc:
        get_logger("badges").debug("Lookup of %s answered %s", url, exc.code)
        return False
    except (URLError, OSError) as exc:
        get_logger("badges").debug("Lookup of %s failed: %s", url, exc)
        return False


class BadgeManager:
    """Builds the badge block shown under the README title."""

    def __init__(
        self,
        config: BadgeConfig | None = None,
        *,
        check_url: UrlCheck | None = None,
        env: Environment | None = None,
    ) -> None:
        self.config = config or BadgeConfig()
        self._check_url = check_url or url_exists
        self._env = env or create_environment()
        self.logger = get_logger("badges")

    def collect(
        self,
        license_match: LicenseMatch,
        *,
        package: Optional[str] = None,
        repository: Optional[str] = None,
    ) -> List[Badge]:
        badges: List[Badge] = []
        if self.config.license and license_match.license is not None:
            badges.append(license_match.license.badge)
        if self.config.network:
            badges.extend(self._network_badges(package, repository))
        return badges

    def render(self, badges: List[Badge]) -> List[str]:
        template = self._env.get_template("badge.md.j2")
        return [template.render(badge=badge) for badge in badges]

    def _network_badges(self, package: Optional[str], repository: Optional[str]) -> List[Badge]:
        badges: List[Badge] = []
        if self.config.melpa:
            if package:
                for label, base in (("MELPA", MELPA_URL), ("MELPA Stable", MELPA_STABLE_URL)):
                    image = f"{base}/packages/{package}-badge.svg"
                    if self._check_url(image, self.config.timeout):
                        badges.append(Badge(alt=label, image=image, link=f"{base}/#/{package}"))
                    else:
                        self.logger.info("%s has no %s badge", package, label)
            else:
                self.logger.info("No package name in the title line; skipping MELPA badges")

        if self.config.ci_image:
            if repository:
                try:
                    image = self.config.ci_image.format(repo=repository)
                    link = (self.config.ci_link or self.config.ci_image).format(repo=repository)
                except (KeyError, IndexError, ValueError) as exc:
                    self.logger.warning("Skipping CI badge; bad ci_image or ci_link template: %r", exc)
                    return badges
                if self._check_url(image, self.config.timeout):
                    badges.append(Badge(alt="Build Status", image=image, link=link))
                else:
                    self.logger.info("No CI status badge found for %s", repository)
            else:
                self.logger.info("No URL or Homepage header with a repository path; skipping CI badge")
        return badges


__all__ = ["BadgeManager", "url_exists"]
