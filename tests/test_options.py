"""Tests for option parsing and target resolution."""

from __future__ import annotations

import pytest

from player_analytics.enums import EnumVideoType
from player_analytics.lib.errors import ConfigurationError
from player_analytics.options import (
    ModelExplicitOptions,
    ModelMediaUrlOptions,
    ModelSequence,
    parse_options,
    resolve_target,
    session_callback_from,
)

VOD_URL = "https://cdn.api.video/vod/abc123/hls/manifest.m3u8"


pytestmark = pytest.mark.unit


class TestParseOptions:
    def test_media_url_mapping(self) -> None:
        options = parse_options({"media_url": VOD_URL})
        assert isinstance(options, ModelMediaUrlOptions)
        assert options.kind == "media_url"

    def test_explicit_mapping(self) -> None:
        options = parse_options(
            {"video_type": "live", "video_id": "li1", "ping_url": "https://c/live"}
        )
        assert isinstance(options, ModelExplicitOptions)
        assert options.video_type == EnumVideoType.LIVE

    def test_camel_case_keys(self) -> None:
        options = parse_options(
            {
                "videoType": "vod",
                "videoId": "vi1",
                "pingUrl": "https://c/vod",
                "userMetadata": [{"plan": "pro"}],
            }
        )
        assert isinstance(options, ModelExplicitOptions)
        assert options.metadata == [{"plan": "pro"}]

    def test_media_url_wins_over_explicit_fields(self) -> None:
        options = parse_options(
            {
                "mediaUrl": VOD_URL,
                "video_type": "live",
                "video_id": "ignored",
                "ping_url": "https://ignored",
            }
        )
        assert isinstance(options, ModelMediaUrlOptions)
        assert resolve_target(options).video_id == "abc123"

    def test_models_pass_through(self) -> None:
        model = ModelMediaUrlOptions(media_url=VOD_URL)
        assert parse_options(model) is model

    def test_explicit_kind_respected(self) -> None:
        options = parse_options({"kind": "media_url", "media_url": VOD_URL})
        assert isinstance(options, ModelMediaUrlOptions)

    @pytest.mark.parametrize(
        "raw",
        [
            {},
            {"media_url": ""},
            {"video_type": "vod", "video_id": "vi1"},
            {"video_type": "vod", "ping_url": "https://c/vod"},
            {"video_type": "clip", "video_id": "vi1", "ping_url": "https://c/vod"},
            {"video_type": "vod", "video_id": "", "ping_url": "https://c/vod"},
        ],
    )
    def test_incomplete_options_raise(self, raw: dict[str, str]) -> None:
        with pytest.raises(ConfigurationError):
            parse_options(raw)

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_options("https://cdn.api.video/vod/abc123/hls/manifest.m3u8")  # type: ignore[arg-type]

    def test_common_options(self) -> None:
        options = parse_options(
            {
                "media_url": VOD_URL,
                "metadata": [{"a": "1"}, {"b": "2"}],
                "sequence": {"start": 5, "end": 30},
                "referrer": "https://blog.example.com/post",
                "navigator": {"user_agent": "pytest", "connection": {"type": "wifi"}},
            }
        )
        assert options.metadata == [{"a": "1"}, {"b": "2"}]
        assert options.sequence == ModelSequence(start=5, end=30)
        assert options.referrer == "https://blog.example.com/post"
        assert options.navigator is not None
        assert options.navigator.user_agent == "pytest"


class TestModelSequence:
    def test_open_ended(self) -> None:
        assert ModelSequence(start=10).end is None

    def test_end_must_follow_start(self) -> None:
        with pytest.raises(Exception):
            ModelSequence(start=10, end=10)

    def test_start_non_negative(self) -> None:
        with pytest.raises(Exception):
            ModelSequence(start=-1)


class TestResolveTarget:
    def test_explicit(self) -> None:
        target = resolve_target(
            ModelExplicitOptions(video_type="vod", video_id="vi1", ping_url="https://c/vod")
        )
        assert (target.video_type, target.video_id, target.ping_url) == (
            EnumVideoType.VOD,
            "vi1",
            "https://c/vod",
        )

    def test_media_url(self) -> None:
        target = resolve_target(ModelMediaUrlOptions(media_url=VOD_URL))
        assert target.video_type == EnumVideoType.VOD
        assert target.video_id == "abc123"
        assert target.ping_url == "https://collector.api.video/vod"

    def test_unparseable_media_url(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_target(ModelMediaUrlOptions(media_url="https://example.com/x.mp4"))


class TestSessionCallbackFrom:
    @pytest.mark.parametrize("key", ["on_session_id_received", "onSessionIdReceived"])
    def test_callback_key_is_read_and_not_validated(self, key: str) -> None:
        received: list[str] = []
        raw = {"mediaUrl": VOD_URL, key: received.append}

        assert session_callback_from(raw) == received.append
        options = parse_options(raw)
        assert isinstance(options, ModelMediaUrlOptions)

    def test_missing_callback(self) -> None:
        assert session_callback_from({"media_url": VOD_URL}) is None
        assert session_callback_from(ModelMediaUrlOptions(media_url=VOD_URL)) is None

    def test_non_callable_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            session_callback_from({"media_url": VOD_URL, "onSessionIdReceived": "cb"})

    def test_callback_key_with_explicit_kind(self) -> None:
        options = parse_options(
            {
                "kind": "explicit",
                "video_type": "vod",
                "video_id": "vi1",
                "ping_url": "https://c/vod",
                "on_session_id_received": print,
            }
        )
        assert isinstance(options, ModelExplicitOptions)
