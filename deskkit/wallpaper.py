"""Fetch the daily Bing image, store it by date and hand it to a wallpaper setter."""

from __future__ import annotations

import argparse
import datetime as _dt
import logging
import time
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

log = logging.getLogger(__name__)

ARCHIVE_URL = "http://www.bing.com/HPImageArchive.aspx?format=xml&idx=0&n=1&mkt=zh-CN"
IMAGE_HOST = "https://www.bing.com"
IMAGE_DIR = "BingDesk_QT_img"
INITIAL_NOTIFICATION = "BingDesk_QT initializing..."


@dataclass(frozen=True)
class BingImage:
    """The image location and its sanitized caption."""

    url: str
    caption: str


def _section(text: str, tag: str) -> str:
    parts = text.split(f"<{tag}>")
    if len(parts) < 2:
        return ""
    return parts[1].split(f"</{tag}>")[0]


def sanitize_caption(text: str) -> str:
    """Replace characters unsafe in file names with dashes."""
    for char in "/()":
        text = text.replace(char, "-")
    return text


def parse_archive(xml: str) -> BingImage:
    """Extract the image URL and caption from an image archive XML document."""
    url = IMAGE_HOST + _section(xml, "url")
    caption = sanitize_caption(_section(xml, "copyright"))
    return BingImage(url=url, caption=caption)


def wallpaper_path(base_dir, date: _dt.date, caption: str) -> Path:
    """Where the image for a date is stored under base_dir."""
    return Path(base_dir) / IMAGE_DIR / str(date.year) / f"{date.month}-{date.day}-{caption}.jpg"


def _http_get(url: str) -> bytes:
    with urllib.request.urlopen(url, timeout=30) as response:
        return response.read()


class WallpaperManager:
    """Polls for the daily image until one has been found, then saves and applies it."""

    def __init__(
        self,
        base_dir=None,
        *,
        fetcher: Optional[Callable[[str], bytes]] = None,
        set_wallpaper: Optional[Callable[[Path], None]] = None,
        today: Optional[Callable[[], _dt.date]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_dir = Path.cwd() if base_dir is None else Path(base_dir)
        self._fetch = fetcher or _http_get
        self._set_wallpaper = set_wallpaper
        self._today = today or _dt.date.today
        self._sleep = sleep
        self.status_listeners: list[Callable[[str], None]] = []
        self.succeeded = False
        self.wallpaper: Optional[Path] = None
        self._notification = INITIAL_NOTIFICATION

    @property
    def notification(self) -> str:
        return self._notification

    @notification.setter
    def notification(self, text: str) -> None:
        self._notification = text
        for listener in self.status_listeners:
            listener(text)

    def fetch_wallpaper(self) -> Path:
        """Download today's image, write it to disk and apply it; network errors raise OSError."""
        xml = self._fetch(ARCHIVE_URL).decode("utf-8", errors="replace")
        image = parse_archive(xml)
        self.notification = image.caption
        self.succeeded = True

        data = self._fetch(image.url)
        path = wallpaper_path(self.base_dir, self._today(), image.caption)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        self.wallpaper = path
        if self._set_wallpaper is not None:
            self._set_wallpaper(path)
        return path

    def poll(self) -> bool:
        """One timer tick: try to fetch unless already done. Returns True when done."""
        if self.succeeded:
            return True
        try:
            self.fetch_wallpaper()
        except OSError as exc:
            log.debug("wallpaper fetch failed: %s", exc)
        return self.succeeded

    def run(self, interval: float = 2.0) -> Optional[Path]:
        """Tick every interval seconds until the archive has been read."""
        while True:
            self._sleep(interval)
            if self.poll():
                return self.wallpaper


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Download the daily Bing image.")
    parser.add_argument("--dir", default=None, help="directory to store images under")
    parser.add_argument("--interval", type=float, default=2.0, help="seconds between attempts")
    args = parser.parse_args(argv)

    manager = WallpaperManager(args.dir)
    manager.status_listeners.append(print)
    print(manager.notification)
    path = manager.run(args.interval)
    if path is None:
        return 1
    print(path)
    return 0