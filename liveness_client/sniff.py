"""
Content type sniffing from leading file bytes.

Follows the WHATWG MIME sniffing table: at most the first 512 bytes are
examined, the file name plays no role, and anything unrecognised is reported
as ``text/plain; charset=utf-8`` or ``application/octet-stream`` depending on
whether it contains binary control bytes.
"""
from typing import Callable, List, NamedTuple, Optional, Union

SNIFF_LEN = 512

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

# Whitespace skipped before HTML and XML markers
_WHITESPACE = b"\t\n\x0c\r "
# Bytes that never occur in plain text
_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)

_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
    b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
    b"<BODY", b"<BR", b"<P", b"<!--",
)


class MaskedSignature(NamedTuple):
    mask: bytes
    pattern: bytes
    mime_type: str

    def match(self, data: bytes) -> Optional[str]:
        if len(data) < len(self.pattern):
            return None
        for i, expected in enumerate(self.pattern):
            if data[i] & self.mask[i] != expected:
                return None
        return self.mime_type


class PrefixSignature(NamedTuple):
    prefix: bytes
    mime_type: str

    def match(self, data: bytes) -> Optional[str]:
        return self.mime_type if data.startswith(self.prefix) else None


class FunctionSignature(NamedTuple):
    """A signature whose test is more than a fixed byte pattern."""
    func: Callable[[bytes], Optional[str]]

    def match(self, data: bytes) -> Optional[str]:
        return self.func(data)


Signature = Union[MaskedSignature, PrefixSignature, FunctionSignature]


def _match_html(data: bytes) -> Optional[str]:
    data = data.lstrip(_WHITESPACE)
    for tag in _HTML_TAGS:
        if len(data) <= len(tag):
            continue
        if data[:len(tag)].upper() != tag:
            continue
        # a tag must be terminated by a space or '>'
        if data[len(tag)] in b" >":
            return "text/html; charset=utf-8"
    return None


def _match_xml(data: bytes) -> Optional[str]:
    if data.lstrip(_WHITESPACE).startswith(b"<?xml"):
        return "text/xml; charset=utf-8"
    return None


def _match_mp4(data: bytes) -> Optional[str]:
    if len(data) < 12:
        return None
    box_size = int.from_bytes(data[:4], "big")
    if box_size % 4 != 0 or len(data) < box_size or data[4:8] != b"ftyp":
        return None
    for start in range(8, box_size, 4):
        if start == 12:
            # skip the minor version field
            continue
        if data[start:start + 3] == b"mp4":
            return "video/mp4"
    return None


SIGNATURES: List[Signature] = [
    FunctionSignature(_match_html),
    FunctionSignature(_match_xml),
    PrefixSignature(b"%PDF-", "application/pdf"),
    PrefixSignature(b"%!PS-Adobe-", "application/postscript"),

    # byte order marks
    PrefixSignature(b"\xfe\xff", "text/plain; charset=utf-16be"),
    PrefixSignature(b"\xff\xfe", "text/plain; charset=utf-16le"),
    PrefixSignature(b"\xef\xbb\xbf", TEXT_PLAIN),

    # images
    PrefixSignature(b"\x00\x00\x01\x00", "image/x-icon"),
    PrefixSignature(b"\x00\x00\x02\x00", "image/x-icon"),
    PrefixSignature(b"BM", "image/bmp"),
    PrefixSignature(b"GIF87a", "image/gif"),
    PrefixSignature(b"GIF89a", "image/gif"),
    MaskedSignature(
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff\xff\xff",
        b"RIFF\x00\x00\x00\x00WEBPVP",
        "image/webp",
    ),
    PrefixSignature(b"\x89PNG\r\n\x1a\n", "image/png"),
    PrefixSignature(b"\xff\xd8\xff", "image/jpeg"),

    # audio and video
    MaskedSignature(b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff",
                    b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    PrefixSignature(b"ID3", "audio/mpeg"),
    PrefixSignature(b"OggS\x00", "application/ogg"),
    PrefixSignature(b"MThd\x00\x00\x00\x06", "audio/midi"),
    MaskedSignature(b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff",
                    b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    MaskedSignature(b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff",
                    b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    FunctionSignature(_match_mp4),
    PrefixSignature(b"\x1a\x45\xdf\xa3", "video/webm"),

    # fonts
    PrefixSignature(b"\x00\x01\x00\x00", "font/ttf"),
    PrefixSignature(b"OTTO", "font/otf"),
    PrefixSignature(b"ttcf", "font/collection"),
    PrefixSignature(b"wOFF", "font/woff"),
    PrefixSignature(b"wOF2", "font/woff2"),

    # archives
    PrefixSignature(b"\x1f\x8b\x08", "application/x-gzip"),
    PrefixSignature(b"PK\x03\x04", "application/zip"),
    PrefixSignature(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    PrefixSignature(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    PrefixSignature(b"\x00asm", "application/wasm"),
]


def detect_content_type(data: bytes) -> str:
    """Return the MIME type of data, judged from its first 512 bytes."""
    head = bytes(data[:SNIFF_LEN])

    for signature in SIGNATURES:
        mime_type = signature.match(head)
        if mime_type:
            return mime_type

    if any(byte in _BINARY_BYTES for byte in head):
        return OCTET_STREAM
    return TEXT_PLAIN
