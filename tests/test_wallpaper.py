import datetime as dt

from deskkit.wallpaper import (
    ARCHIVE_URL,
    BingImage,
    WallpaperManager,
    parse_archive,
    sanitize_caption,
    wallpaper_path,
)

XML = (
    "<images><image><url>/th?id=OHR.Sample_1920x1080.jpg</url>"
    "<copyright>Hills (Somewhere/Place)</copyright></image></images>"
)


def make_fetcher(responses, calls):
    def fetch(url):
        calls.append(url)
        result = responses[url]
        if isinstance(result, list):
            result = result.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    return fetch


def test_parse_archive():
    image = parse_archive(XML)
    assert image == BingImage(
        url="https://www.bing.com/th?id=OHR.Sample_1920x1080.jpg",
        caption="Hills -Somewhere-Place-",
    )


def test_parse_archive_missing_tags():
    assert parse_archive("<images/>") == BingImage(url="https://www.bing.com", caption="")


def test_sanitize_caption():
    assert sanitize_caption("a/b(c)") == "a-b-c-"
    assert sanitize_caption("plain") == "plain"


def test_wallpaper_path(tmp_path):
    path = wallpaper_path(tmp_path, dt.date(2024, 8, 3), "cap")
    assert path == tmp_path / "BingDesk_QT_img" / "2024" / "8-3-cap.jpg"


def test_fetch_saves_and_applies(tmp_path):
    calls, applied, statuses = [], [], []
    image_url = "https://www.bing.com/th?id=OHR.Sample_1920x1080.jpg"
    fetch = make_fetcher({ARCHIVE_URL: XML.encode(), image_url: b"JPEGDATA"}, calls)
    manager = WallpaperManager(
        tmp_path, fetcher=fetch, set_wallpaper=applied.append, today=lambda: dt.date(2024, 8, 3)
    )
    assert manager.notification == "BingDesk_QT initializing..."
    manager.status_listeners.append(statuses.append)

    path = manager.fetch_wallpaper()

    assert calls == [ARCHIVE_URL, image_url]
    assert path == wallpaper_path(tmp_path, dt.date(2024, 8, 3), "Hills -Somewhere-Place-")
    assert path.read_bytes() == b"JPEGDATA"
    assert applied == [path]
    assert statuses == ["Hills -Somewhere-Place-"]
    assert manager.succeeded


def test_poll_retries_after_network_error(tmp_path):
    calls = []
    image_url = "https://www.bing.com/th?id=OHR.Sample_1920x1080.jpg"
    fetch = make_fetcher(
        {ARCHIVE_URL: [OSError("offline"), XML.encode()], image_url: b"x"}, calls
    )
    manager = WallpaperManager(tmp_path, fetcher=fetch, today=lambda: dt.date(2024, 1, 2))
    assert manager.poll() is False
    assert manager.notification == "BingDesk_QT initializing..."
    assert manager.poll() is True
    assert manager.wallpaper.read_bytes() == b"x"
    assert manager.poll() is True
    assert calls.count(ARCHIVE_URL) == 2


def test_image_failure_does_not_retry(tmp_path):
    calls = []
    image_url = "https://www.bing.com/th?id=OHR.Sample_1920x1080.jpg"
    fetch = make_fetcher({ARCHIVE_URL: XML.encode(), image_url: OSError("broken")}, calls)
    manager = WallpaperManager(tmp_path, fetcher=fetch)
    assert manager.poll() is True
    assert manager.wallpaper is None
    assert manager.poll() is True
    assert len(calls) == 2


def test_run_sleeps_between_attempts(tmp_path):
    calls, sleeps = [], []
    image_url = "https://www.bing.com/th?id=OHR.Sample_1920x1080.jpg"
    fetch = make_fetcher(
        {ARCHIVE_URL: [OSError("a"), OSError("b"), XML.encode()], image_url: b"img"}, calls
    )
    manager = WallpaperManager(
        tmp_path, fetcher=fetch, sleep=sleeps.append, today=lambda: dt.date(2023, 12, 25)
    )
    path = manager.run(0.5)
    assert sleeps == [0.5, 0.5, 0.5]
    assert path.read_bytes() == b"img"
    assert path.parent == tmp_path / "BingDesk_QT_img" / "2023"