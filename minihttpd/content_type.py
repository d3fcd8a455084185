"""Media types a response body can be labelled with."""

from __future__ import annotations

from enum import Enum


class ContentType(str, Enum):
    """A MIME type; the member's value is the header text."""

    PLAIN = "text/plain"
    HTML = "text/html"
    CSS = "text/css"
    CSV = "text/csv"

    JSON = "application/json"
    XML = "application/xml"
    FORM_URL_ENCODED = "application/x-www-form-urlencoded"
    JAVASCRIPT = "application/javascript"
    PDF = "application/pdf"
    ZIP = "application/zip"
    OCTET_STREAM = "application/octet-stream"

    PNG = "image/png"
    JPEG = "image/jpeg"
    GIF = "image/gif"
    WEBP = "image/webp"
    SVG = "image/svg+xml"

    MP3 = "audio/mpeg"
    WAV = "audio/wav"
    OGG_AUDIO = "audio/ogg"

    MP4 = "video/mp4"
    WEBM = "video/webm"
    OGG_VIDEO = "video/ogg"

    MULTIPART_FORM_DATA = "multipart/form-data"
    MULTIPART_MIXED = "multipart/mixed"

    def __str__(self) -> str:
        return self.value