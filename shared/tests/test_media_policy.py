import pytest

from shared.media_policy import (
    FALLBACK_COLORS,
    IMAGE,
    PDF,
    MediaUrlPolicy,
    embed_for,
    fallback_image,
    image_for,
)


@pytest.fixture
def policy() -> MediaUrlPolicy:
    return MediaUrlPolicy()


@pytest.mark.parametrize(
    "url",
    [
        "https://example.org/poster.JPG",
        "https://images.unsplash.com/photo-1",
        "https://i.ibb.co/abc/poster",
        "https://live.staticflickr.com/65535/x",
        "data:image/png;base64,iVBORw0KGgo=",
        "/uploads/3f2a.png",
    ],
)
def test_should_accept_supported_image_urls(policy, url):
    assert policy.is_valid_image(url)


@pytest.mark.parametrize("url", [None, "", "https://example.org/page.html", "ftp://unknown.host/file"])
def test_should_reject_unsupported_image_urls(policy, url):
    assert not policy.is_valid_image(url)


def test_should_treat_video_and_pdf_as_optional(policy):
    assert policy.is_valid_video(None)
    assert policy.is_valid_video("")
    assert policy.is_valid_pdf(None)


@pytest.mark.parametrize(
    "url, ok",
    [
        ("https://www.youtube.com/watch?v=7n7bw6luneo", True),
        ("https://youtu.be/7n7bw6luneo", True),
        ("https://player.vimeo.com/video/76979871", True),
        ("https://cdn.example.org/clip.webm", True),
        ("https://cdn.example.org/clip.avi", False),
    ],
)
def test_should_check_video_urls(policy, url, ok):
    assert policy.is_valid_video(url) is ok


@pytest.mark.parametrize(
    "url, ok",
    [
        ("https://example.org/paper.pdf", True),
        ("https://drive.google.com/file/d/abc/view", True),
        ("https://www.dropbox.com/s/abc/notes", True),
        ("https://example.org/paper.docx", False),
    ],
)
def test_should_check_pdf_urls(policy, url, ok):
    assert policy.is_valid_pdf(url) is ok


def test_should_accept_new_host_after_extend(policy):
    # GIVEN
    url = "https://cdn.example.org/posters/42"
    assert not policy.is_valid_image(url)

    # WHEN
    policy.extend(IMAGE, domains=["cdn.example.org"], extensions=[".AVIF"])

    # THEN
    assert policy.is_valid_image(url)
    assert policy.is_valid_image("https://other.example.org/a.avif")


def test_should_consult_predicate_before_rules(policy):
    policy.set_predicate(PDF, lambda url: url.startswith("https://archive.example.org/"))

    assert policy.is_valid_pdf("https://archive.example.org/item/7")
    assert policy.is_valid_pdf("https://example.org/paper.pdf")     # -> built-in rules still apply


def test_should_raise_on_unknown_media_kind(policy):
    with pytest.raises(KeyError):
        policy.is_valid("audio", "https://example.org/a.mp3")


def test_should_keep_default_rules_independent_between_policies():
    first, second = MediaUrlPolicy(), MediaUrlPolicy()
    first.extend(IMAGE, domains=["cdn.example.org"])
    assert not second.is_valid_image("https://cdn.example.org/x")


# ==============================================================================
# Embedding and fallback images
# ==============================================================================

@pytest.mark.parametrize(
    "url, kind, src",
    [
        ("https://www.youtube.com/watch?v=7n7bw6luneo", "youtube", "https://www.youtube.com/embed/7n7bw6luneo?rel=0"),
        ("https://youtu.be/7n7bw6luneo", "youtube", "https://www.youtube.com/embed/7n7bw6luneo?rel=0"),
        ("https://vimeo.com/76979871", "vimeo", "https://player.vimeo.com/video/76979871"),
        ("/uploads/clip.mp4", "video", "/uploads/clip.mp4"),
        ("https://example.org/stream", "iframe", "https://example.org/stream"),
    ],
)
def test_should_pick_embed_for_video_url(url, kind, src):
    embed = embed_for(url)
    assert embed.kind == kind
    assert embed.src == src


def test_should_return_no_embed_for_empty_url():
    assert embed_for(None) is None
    assert embed_for("") is None


def test_should_colour_fallback_image_by_id():
    url = fallback_image(7, "Deep Ocean")
    assert f"/{FALLBACK_COLORS[7 % 5]}/" in url
    assert url.endswith("text=Deep%20Ocean")


def test_should_use_fallback_only_for_invalid_image(policy):
    assert image_for(1, "T", "https://images.unsplash.com/x", policy) == ("https://images.unsplash.com/x", False)

    url, is_fallback = image_for(2, "T", "https://example.org/page.html", policy)
    assert is_fallback
    assert url.startswith("https://via.placeholder.com/500x300/")
