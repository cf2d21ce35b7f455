"""
Finding YouTube links in shared or pasted text.
"""
import re
from typing import Optional

from ytmate.services import url_parser

_TOKEN_RE = re.compile(r"\S+")
_LEADING_PUNCTUATION = "([{<\"'"
_TRAILING_PUNCTUATION = ".,;:!?)]}>\"'"


def _link_tokens(text: str):
    for match in _TOKEN_RE.finditer(text):
        token = match.group(0).lstrip(_LEADING_PUNCTUATION).rstrip(_TRAILING_PUNCTUATION)
        if token:
            yield token


def find_youtube_url(text: Optional[str]) -> Optional[str]:
    """
    Find the first YouTube video link in a piece of shared text.

    A text that is itself a single link is returned as-is (trimmed).
    Otherwise the text is scanned token by token and the first token that
    yields a video ID is returned, with surrounding punctuation removed.

    Args:
        text: Shared text, e.g. "Watch this https://youtu.be/dQw4w9WgXcQ!".

    Returns:
        The link, or None when the text holds no recognizable video link.
    """
    if not text:
        return None

    trimmed = text.strip()
    if trimmed and not any(ch.isspace() for ch in trimmed) and url_parser.is_valid_youtube_url(trimmed):
        return trimmed

    for token in _link_tokens(trimmed):
        if url_parser.is_valid_youtube_url(token):
            return token

    return None


class ClipboardWatcher:
    """
    Tracks clipboard content and surfaces a YouTube link once per distinct content.

    Attributes:
        detected_url: The pending link, kept until consumed or cleared.
        show_prompt: Whether the suggestion should currently be shown.
    """

    def __init__(self):
        self.detected_url: Optional[str] = None
        self.show_prompt = False
        self._last_processed: Optional[str] = None

    def check(self, content: Optional[str]) -> Optional[str]:
        """
        Inspect new clipboard content.

        Content identical to the last processed content is skipped and leaves
        the state untouched.

        Returns:
            The newly detected link, or None when nothing new was detected.
        """
        if not content:
            self.clear()
            return None

        if content == self._last_processed:
            return None
        self._last_processed = content

        if url_parser.is_valid_youtube_url(content):
            self.detected_url = content.strip()
            self.show_prompt = True
            return self.detected_url

        self.clear()
        return None

    def clear(self) -> None:
        self.detected_url = None
        self.show_prompt = False

    def dismiss(self) -> None:
        """Hide the suggestion but keep the link in case the user changes their mind."""
        self.show_prompt = False

    def consume(self) -> Optional[str]:
        """Return the pending link and clear it."""
        url = self.detected_url
        self.clear()
        return url

    def reset(self) -> None:
        """Forget the last processed content so the same content is inspected again."""
        self._last_processed = None
