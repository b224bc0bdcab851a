"""Test channel model, chat state and iframe URL derivation."""

from urllib.parse import parse_qsl, urlsplit

import pytest

from lounge.core.constants import DEFAULT_CHAT_BASE_URL
from lounge.embed import ChatChannel, ChatState, ChatTarget, chat_url_for
from tests.mocks import make_credentials


def api_channel(**overrides):
    data = {
        "id": 7,
        "community_id": "comm-1",
        "name": "General",
        "description": None,
        "irc_channel_name": "general",
        "is_single_mode": False,
        "is_default": True,
        "settings": {},
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }
    data.update(overrides)
    return data


def params(url: str) -> dict[str, str]:
    return dict(parse_qsl(urlsplit(url).query))


class TestChatChannel:
    def test_from_api(self):
        channel = ChatChannel.from_api(api_channel())
        assert channel.id == 7
        assert channel.irc_channel_name == "general"
        assert channel.is_default is True

    def test_nofocus_defaults_true(self):
        assert ChatChannel.from_api(api_channel()).nofocus is True

    def test_nofocus_from_settings(self):
        channel = ChatChannel.from_api(api_channel(settings={"irc": {"nofocus": False}}))
        assert channel.nofocus is False

    def test_settings_not_a_dict(self):
        channel = ChatChannel.from_api(api_channel(settings=None))
        assert channel.settings == {}
        assert channel.nofocus is True

    @pytest.mark.parametrize("single,expected", [(True, "single"), (False, "normal")])
    def test_default_mode(self, single, expected):
        channel = ChatChannel.from_api(api_channel(is_single_mode=single))
        assert channel.default_mode == expected

    def test_missing_required_field(self):
        data = api_channel()
        del data["irc_channel_name"]
        with pytest.raises(KeyError):
            ChatChannel.from_api(data)


class TestChatState:
    def test_initially_closed(self):
        state = ChatState()
        assert state.is_open is False
        assert state.selected_channel_id is None

    def test_open_with_channel(self):
        state = ChatState().open(7)
        assert state.is_open is True
        assert state.selected_channel_id == 7

    def test_close_keeps_selection(self):
        state = ChatState().open(7).close()
        assert state.is_open is False
        assert state.selected_channel_id == 7

    def test_open_returns_new_value(self):
        state = ChatState()
        state.open(1)
        assert state.is_open is False


class TestChatUrlFor:
    def test_defaults(self):
        channel = ChatChannel.from_api(api_channel())
        url = chat_url_for(make_credentials("alice", "pw", "curia"), channel)
        assert url.startswith(DEFAULT_CHAT_BASE_URL + "?")
        assert params(url) == {
            "password": "pw",
            "autoconnect": "true",
            "nick": "alice",
            "username": "alice/curia",
            "realname": "alice",
            "join": "#general",
            "theme": "light",
            "mode": "normal",
            "nofocus": "true",
        }

    def test_single_mode_channel(self):
        channel = ChatChannel.from_api(api_channel(is_single_mode=True))
        assert params(chat_url_for(make_credentials(), channel))["mode"] == "single"

    def test_explicit_mode_overrides_channel(self):
        channel = ChatChannel.from_api(api_channel(is_single_mode=True))
        url = chat_url_for(make_credentials(), channel, mode="normal")
        assert params(url)["mode"] == "normal"

    def test_custom_base_url_and_theme(self):
        channel = ChatChannel.from_api(api_channel())
        url = chat_url_for(
            make_credentials(), channel, chat_base_url="http://localhost:9000", theme="dark"
        )
        assert url.startswith("http://localhost:9000?")
        assert params(url)["theme"] == "dark"

    def test_nofocus_disabled_by_settings(self):
        channel = ChatChannel.from_api(api_channel(settings={"irc": {"nofocus": False}}))
        assert "nofocus" not in params(chat_url_for(make_credentials(), channel))


class TestChatTarget:
    def test_url_for_without_optionals(self):
        target = ChatTarget(base_url="https://chat.x", channel_name="dev")
        assert set(params(target.url_for(make_credentials()))) == {
            "password",
            "autoconnect",
            "nick",
            "username",
            "realname",
            "join",
        }
