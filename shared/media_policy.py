"""
URL acceptance rules for documentary media (images, videos, PDFs).

Both the API (to reject bad links at creation time) and the client (to decide
when to swap in a placeholder image) go through a ``MediaUrlPolicy``. Rules are
data, so a deployment can add a hosting domain or a file extension without
touching the call sites:

    policy = MediaUrlPolicy()
    policy.extend("image", domains=["cdn.example.org"])
    policy.set_predicate("pdf", lambda url: url.startswith("https://archive.example.org/"))
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional
from urllib.parse import quote, urlsplit

IMAGE = "image"
VIDEO = "video"
PDF = "pdf"

FALLBACK_COLORS = ["1a365d", "2d3748", "744210", "22543d", "702459"]

_YT_RE = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)(?P<id>[^\"&?/\s]{11})"
)
_VIMEO_RE = re.compile(r"vimeo\.com/(?:video/)?(?P<id>\d+)")


@dataclass
class MediaRule:
    extensions: set[str] = field(default_factory=set)
    domains: set[str] = field(default_factory=set)
    prefixes: set[str] = field(default_factory=set)
    predicate: Optional[Callable[[str], bool]] = None

    def matches(self, url: str) -> bool:
        if self.predicate is not None and self.predicate(url):
            return True
        if any(url.startswith(p) for p in self.prefixes):
            return True
        parts = urlsplit(url)
        path = parts.path.lower()
        if any(path.endswith(f".{ext}") for ext in self.extensions):
            return True
        host = (parts.hostname or "").lower()
        return any(host == d or host.endswith(f".{d}") for d in self.domains)


def _default_rules() -> Dict[str, MediaRule]:
    return {
        IMAGE: MediaRule(
            extensions={"jpeg", "jpg", "png", "gif", "bmp", "webp", "svg"},
            domains={
                "unsplash.com", "images.unsplash.com",
                "picsum.photos", "via.placeholder.com",
                "imgbb.com", "i.ibb.co",
                "flickr.com", "staticflickr.com",
                "cloudinary.com", "res.cloudinary.com",
            },
            prefixes={"data:image/", "/uploads/"},
        ),
        VIDEO: MediaRule(
            extensions={"mp4", "webm", "ogg"},
            domains={"youtube.com", "youtu.be", "vimeo.com", "player.vimeo.com"},
            prefixes={"/uploads/"},
        ),
        PDF: MediaRule(
            extensions={"pdf"},
            domains={"drive.google.com", "dropbox.com", "onedrive.live.com", "icloud.com", "docs.google.com"},
            prefixes={"/uploads/"},
        ),
    }


class MediaUrlPolicy:
    def __init__(self, rules: Optional[Dict[str, MediaRule]] = None):
        self.rules = rules if rules is not None else _default_rules()

    def is_valid(self, kind: str, url: Optional[str]) -> bool:
        if not url:
            return False
        rule = self.rules.get(kind)
        if rule is None:
            raise KeyError(f"unknown media kind: {kind}")
        return rule.matches(url.strip())

    def is_valid_image(self, url: Optional[str]) -> bool:
        return self.is_valid(IMAGE, url)

    def is_valid_video(self, url: Optional[str]) -> bool:
        """Video links are optional; an empty value is acceptable."""
        return not url or self.is_valid(VIDEO, url)

    def is_valid_pdf(self, url: Optional[str]) -> bool:
        """PDF links are optional; an empty value is acceptable."""
        return not url or self.is_valid(PDF, url)

    def extend(
        self,
        kind: str,
        *,
        extensions: Iterable[str] = (),
        domains: Iterable[str] = (),
        prefixes: Iterable[str] = (),
    ) -> None:
        rule = self.rules.setdefault(kind, MediaRule())
        rule.extensions.update(e.lower().lstrip(".") for e in extensions)
        rule.domains.update(d.lower() for d in domains)
        rule.prefixes.update(prefixes)

    def set_predicate(self, kind: str, predicate: Optional[Callable[[str], bool]]) -> None:
        self.rules.setdefault(kind, MediaRule()).predicate = predicate


# ---------- Embedding helpers ----------

@dataclass(frozen=True)
class MediaEmbed:
    kind: str   # "youtube" | "vimeo" | "video" | "iframe"
    src: str


def youtube_id(url: str) -> Optional[str]:
    m = _YT_RE.search(url or "")
    return m.group("id") if m else None


def vimeo_id(url: str) -> Optional[str]:
    m = _VIMEO_RE.search(url or "")
    return m.group("id") if m else None


def embed_for(url: Optional[str]) -> Optional[MediaEmbed]:
    if not url:
        return None
    if "youtube.com" in url or "youtu.be" in url:
        vid = youtube_id(url)
        if vid:
            return MediaEmbed("youtube", f"https://www.youtube.com/embed/{vid}?rel=0")
    if "vimeo.com" in url:
        vid = vimeo_id(url)
        if vid:
            return MediaEmbed("vimeo", f"https://player.vimeo.com/video/{vid}")
    if urlsplit(url).path.lower().endswith((".mp4", ".webm", ".ogg")):
        return MediaEmbed("video", url)
    return MediaEmbed("iframe", url)


def fallback_image(doc_id: Optional[int], title: str) -> str:
    color = FALLBACK_COLORS[(doc_id or 0) % len(FALLBACK_COLORS)]
    return f"https://via.placeholder.com/500x300/{color}/ffffff?text={quote(title or '', safe='')}"


def image_for(doc_id: Optional[int], title: str, image_url: Optional[str], policy: MediaUrlPolicy) -> tuple[str, bool]:
    """Returns (url, is_fallback) for a documentary card."""
    if policy.is_valid_image(image_url):
        return image_url, False
    return fallback_image(doc_id, title), True
