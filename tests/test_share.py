"""
Tests for link detection in shared text and the clipboard watcher.
"""
import pytest

from ytmate.services.share import ClipboardWatcher, find_youtube_url


@pytest.mark.parametrize(
    "text, expected",
    [
        ("https://youtu.be/dQw4w9WgXcQ", "https://youtu.be/dQw4w9WgXcQ"),
        ("  https://youtu.be/dQw4w9WgXcQ\n", "https://youtu.be/dQw4w9WgXcQ"),
        ("Check this out https://youtu.be/dQw4w9WgXcQ!", "https://youtu.be/dQw4w9WgXcQ"),
        ("(https://www.youtube.com/watch?v=dQw4w9WgXcQ).", "https://www.youtube.com/watch?v=dQw4w9WgXcQ"),
        ('Look: "https://youtube.com/shorts/dQw4w9WgXcQ"', "https://youtube.com/shorts/dQw4w9WgXcQ"),
        (
            "first https://youtu.be/AAAAAAAAAAA then https://youtu.be/BBBBBBBBBBB",
            "https://youtu.be/AAAAAAAAAAA",
        ),
    ],
)
def test_find_youtube_url(text, expected):
    assert find_youtube_url(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "   ",
        "no links here",
        "https://vimeo.com/12345",
        "https://www.youtube.com/feed/trending and more",
    ],
)
def test_find_youtube_url_none(text):
    assert find_youtube_url(text) is None


def test_find_youtube_url_skips_non_video_links():
    text = "playlist https://www.youtube.com/playlist?list=PL123 video https://youtu.be/dQw4w9WgXcQ"
    assert find_youtube_url(text) == "https://youtu.be/dQw4w9WgXcQ"


def test_watcher_detects_link():
    watcher = ClipboardWatcher()

    assert watcher.check("https://youtu.be/dQw4w9WgXcQ ") == "https://youtu.be/dQw4w9WgXcQ"
    assert watcher.detected_url == "https://youtu.be/dQw4w9WgXcQ"
    assert watcher.show_prompt is True


def test_watcher_skips_repeated_content():
    watcher = ClipboardWatcher()
    content = "https://youtu.be/dQw4w9WgXcQ"

    watcher.check(content)
    watcher.dismiss()

    assert watcher.check(content) is None
    # Unchanged content leaves the dismissed state alone
    assert watcher.show_prompt is False
    assert watcher.detected_url == content


def test_watcher_reset_allows_same_content_again():
    watcher = ClipboardWatcher()
    content = "https://youtu.be/dQw4w9WgXcQ"

    watcher.check(content)
    watcher.dismiss()
    watcher.reset()

    assert watcher.check(content) == content
    assert watcher.show_prompt is True


def test_watcher_clears_on_non_link_content():
    watcher = ClipboardWatcher()
    watcher.check("https://youtu.be/dQw4w9WgXcQ")

    assert watcher.check("shopping list") is None
    assert watcher.detected_url is None
    assert watcher.show_prompt is False


def test_watcher_clears_on_empty_content():
    watcher = ClipboardWatcher()
    watcher.check("https://youtu.be/dQw4w9WgXcQ")

    assert watcher.check("") is None
    assert watcher.detected_url is None
    assert watcher.show_prompt is False


def test_watcher_consume():
    watcher = ClipboardWatcher()
    watcher.check("https://youtu.be/dQw4w9WgXcQ")

    assert watcher.consume() == "https://youtu.be/dQw4w9WgXcQ"
    assert watcher.detected_url is None
    assert watcher.show_prompt is False
    assert watcher.consume() is None
