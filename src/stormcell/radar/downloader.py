"""Latest radar product image discovery and download.

The product server publishes one PPI image per ``step_minutes`` and makes
it available about ``delay_minutes`` later. The newest image that should
exist is therefore the current UTC time floored to the product step,
minus the publication delay. URLs follow::

    {url_head}{YYYYMMDD}{url_middle}{YYYYMMDDHHMM}{url_end}
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Union

import requests

if TYPE_CHECKING:
    from stormcell.schemas import InternalConfig

__all__ = ['RadarImageDownloader']

logger = logging.getLogger(__name__)


class RadarImageDownloader:
    """Build latest-image URLs and download radar product images.

    Example usage::

        downloader = RadarImageDownloader(config)
        url = downloader.build_url()
        path = downloader.download(url, output_dirs["images"] / "latest.png")
    """

    def __init__(self, config: "InternalConfig", session=None, clock=None):
        """Initialize downloader.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration; reads ``fetcher``.
        session : requests.Session, optional
            HTTP session. If None, a new session is created. Allows
            injection for testing.
        clock : callable, optional
            Function returning current datetime (for testing). If None, uses
            ``datetime.now(timezone.utc)``.
        """
        self.config = config
        fetcher = config.fetcher
        self.url_head = fetcher.url_head
        self.url_middle = fetcher.url_middle
        self.url_end = fetcher.url_end
        self.step_minutes = fetcher.step_minutes
        self.delay_minutes = fetcher.delay_minutes
        self.timeout = fetcher.timeout_sec
        self.min_file_size = fetcher.min_file_size

        self.session = session or requests.Session()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def latest_product_time(self, now: datetime = None) -> datetime:
        """Scan time of the newest image expected to be published."""
        now = now or self._clock()
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        floored = now.replace(
            minute=(now.minute // self.step_minutes) * self.step_minutes,
            second=0,
            microsecond=0,
        )
        return floored - timedelta(minutes=self.delay_minutes)

    def build_url(self, now: datetime = None) -> str:
        """URL of the newest published image."""
        scan_time = self.latest_product_time(now)
        url = (
            f"{self.url_head}{scan_time:%Y%m%d}"
            f"{self.url_middle}{scan_time:%Y%m%d%H%M}{self.url_end}"
        )
        logger.info("Latest radar image url: %s", url)
        return url

    def download(self, url: str, target: Union[str, Path]) -> Path:
        """Download url to target and return the written path.

        Raises
        ------
        requests.HTTPError
            If the server does not answer 200 OK.
        ValueError
            If the payload is smaller than ``min_file_size`` bytes.
        """
        target = Path(target)
        response = self.session.get(url, timeout=self.timeout)
        if response.status_code != 200:
            raise requests.HTTPError(
                f"Failed to download image: {response.status_code}", response=response
            )

        content = response.content
        if len(content) < self.min_file_size:
            raise ValueError(
                f"Downloaded file too small ({len(content)} bytes < {self.min_file_size}): {url}"
            )

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.info("Image downloaded: %s (%d bytes)", target, len(content))
        return target
