"""Unit tests for derived playback links."""
from echochamber.core.media_links import media_kind_prefix, media_url, project_record
from conftest import make_record


def test_video_prefix():
    assert media_kind_prefix("video/webm") == "v"


def test_non_video_is_audio():
    assert media_kind_prefix("audio/ogg") == "a"
    assert media_kind_prefix("") == "a"


def test_url_strips_trailing_slash():
    r = make_record("abc", mimetype="video/mp4", ext=".mp4")
    assert media_url("http://site/", r) == "http://site/v/abc"


def test_projection_adds_url_and_flag():
    r = make_record("abc", plays=3)
    out = project_record(r, "http://site")
    assert out["url"] == "http://site/a/abc"
    assert out["is_video"] is False
    assert out["plays"] == 3
    assert out["filename"] == "abc.mp3"
