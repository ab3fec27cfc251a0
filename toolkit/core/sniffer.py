# toolkit/core/sniffer.py
"""Detecção de tipo MIME pelos primeiros bytes do conteúdo.

Segue o algoritmo de "MIME sniffing" do WHATWG: nunca olha o nome do arquivo
nem o Content-Type enviado pelo cliente. Sempre devolve um tipo válido;
``application/octet-stream`` quando nada reconhece o conteúdo.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

SNIFF_LEN = 512

DEFAULT_CONTENT_TYPE = "application/octet-stream"
TEXT_PLAIN_UTF8 = "text/plain; charset=utf-8"

_WHITESPACE = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"


@dataclass(frozen=True)
class _ExactSig:
    sig: bytes
    content_type: str

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        return self.content_type if data.startswith(self.sig) else None


@dataclass(frozen=True)
class _MaskedSig:
    mask: bytes
    pattern: bytes
    content_type: str
    skip_ws: bool = False

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if self.skip_ws:
            data = data[first_non_ws:]
        if len(data) < len(self.pattern):
            return None
        for i, p in enumerate(self.pattern):
            if data[i] & self.mask[i] != p:
                return None
        return self.content_type


@dataclass(frozen=True)
class _HtmlSig:
    tag: bytes

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        data = data[first_non_ws:]
        if len(data) < len(self.tag) + 1:
            return None
        for i, b in enumerate(self.tag):
            db = data[i]
            if ord("A") <= b <= ord("Z"):
                db &= 0xDF
            if b != db:
                return None
        # a tag precisa terminar em espaço ou '>'
        if data[len(self.tag)] not in _TAG_TERMINATORS:
            return None
        return "text/html; charset=utf-8"


@dataclass(frozen=True)
class _FuncSig:
    fn: Callable[[bytes], str | None]

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        return self.fn(data)


def _match_mp4(data: bytes) -> str | None:
    # WHATWG MIME Sniffing, assinatura de MP4
    if len(data) < 12:
        return None
    box_size = int.from_bytes(data[:4], "big")
    if len(data) < box_size or box_size % 4 != 0:
        return None
    if data[4:8] != b"ftyp":
        return None
    for st in range(8, box_size, 4):
        if st == 12:
            # versão menor da marca, não é uma marca
            continue
        if data[st:st + 3] == b"mp4":
            return "video/mp4"
    return None


def _is_binary_byte(b: int) -> bool:
    return b <= 0x08 or b == 0x0B or 0x0E <= b <= 0x1A or 0x1C <= b <= 0x1F


def _match_text(data: bytes, first_non_ws: int) -> str | None:
    for b in data[first_non_ws:]:
        if _is_binary_byte(b):
            return None
    return TEXT_PLAIN_UTF8


def _html(*tags: bytes) -> list[_HtmlSig]:
    return [_HtmlSig(t) for t in tags]


_SIGNATURES = (
    *_html(
        b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
        b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
        b"<BODY", b"<BR", b"<P", b"<!--",
    ),
    _MaskedSig(b"\xFF\xFF\xFF\xFF\xFF", b"<?xml", "text/xml; charset=utf-8", skip_ws=True),
    _ExactSig(b"%PDF-", "application/pdf"),
    _ExactSig(b"%!PS-Adobe-", "application/postscript"),
    # BOMs de UTF-16 e UTF-8
    _MaskedSig(b"\xFF\xFF\x00\x00", b"\xFE\xFF\x00\x00", "text/plain; charset=utf-16be"),
    _MaskedSig(b"\xFF\xFF\x00\x00", b"\xFF\xFE\x00\x00", "text/plain; charset=utf-16le"),
    _MaskedSig(b"\xFF\xFF\xFF\x00", b"\xEF\xBB\xBF\x00", TEXT_PLAIN_UTF8),
    # imagens
    _ExactSig(b"\x00\x00\x01\x00", "image/x-icon"),
    _ExactSig(b"\x00\x00\x02\x00", "image/x-icon"),
    _ExactSig(b"BM", "image/bmp"),
    _ExactSig(b"GIF87a", "image/gif"),
    _ExactSig(b"GIF89a", "image/gif"),
    _MaskedSig(
        b"\xFF\xFF\xFF\xFF\x00\x00\x00\x00\xFF\xFF\xFF\xFF\xFF\xFF",
        b"RIFF\x00\x00\x00\x00WEBPVP",
        "image/webp",
    ),
    _ExactSig(b"\x89PNG\x0D\x0A\x1A\x0A", "image/png"),
    _ExactSig(b"\xFF\xD8\xFF", "image/jpeg"),
    # áudio e vídeo
    _MaskedSig(
        b"\xFF\xFF\xFF\xFF\x00\x00\x00\x00\xFF\xFF\xFF\xFF",
        b"FORM\x00\x00\x00\x00AIFF",
        "audio/aiff",
    ),
    _MaskedSig(b"\xFF\xFF\xFF", b"ID3", "audio/mpeg"),
    _MaskedSig(b"\xFF\xFF\xFF\xFF\xFF", b"OggS\x00", "application/ogg"),
    _MaskedSig(b"\xFF\xFF\xFF\xFF\xFF\xFF\xFF\xFF", b"MThd\x00\x00\x00\x06", "audio/midi"),
    _MaskedSig(
        b"\xFF\xFF\xFF\xFF\x00\x00\x00\x00\xFF\xFF\xFF\xFF",
        b"RIFF\x00\x00\x00\x00AVI ",
        "video/avi",
    ),
    _MaskedSig(
        b"\xFF\xFF\xFF\xFF\x00\x00\x00\x00\xFF\xFF\xFF\xFF",
        b"RIFF\x00\x00\x00\x00WAVE",
        "audio/wave",
    ),
    _FuncSig(_match_mp4),
    _ExactSig(b"\x1A\x45\xDF\xA3", "video/webm"),
    # fontes
    _ExactSig(b"OTTO", "font/otf"),
    _ExactSig(b"ttcf", "font/collection"),
    _ExactSig(b"wOFF", "font/woff"),
    _ExactSig(b"wOF2", "font/woff2"),
    _ExactSig(b"\x00\x01\x00\x00", "font/ttf"),
    # arquivos compactados
    _ExactSig(b"\x1F\x8B\x08", "application/x-gzip"),
    _ExactSig(b"PK\x03\x04", "application/zip"),
    _ExactSig(b"Rar!\x1A\x07\x00", "application/x-rar-compressed"),
    _ExactSig(b"Rar!\x1A\x07\x01\x00", "application/x-rar-compressed"),
    _ExactSig(b"7z\xBC\xAF\x27\x1C", "application/x-7z-compressed"),
    _ExactSig(b"\x00asm\x01\x00\x00\x00", "application/wasm"),
)


def detect_content_type(data: bytes) -> str:
    data = data[:SNIFF_LEN]

    first_non_ws = 0
    while first_non_ws < len(data) and data[first_non_ws] in _WHITESPACE:
        first_non_ws += 1

    for sig in _SIGNATURES:
        ct = sig.match(data, first_non_ws)
        if ct:
            return ct

    return _match_text(data, first_non_ws) or DEFAULT_CONTENT_TYPE


def media_type_essence(content_type: str) -> str:
    """``text/plain; charset=utf-8`` -> ``text/plain``."""
    return content_type.split(";", 1)[0].strip().lower()


def is_allowed_type(content_type: str, allowed: set[str]) -> bool:
    if not allowed:
        return True

    full = content_type.strip().lower()
    essence = media_type_essence(content_type)
    for candidate in allowed:
        c = candidate.strip().lower()
        if c == full or c == essence:
            return True
    return False
