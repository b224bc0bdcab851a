"""Property-based tests using hypothesis."""

import re
import string
from urllib.parse import parse_qsl, urlsplit

from hypothesis import given, strategies as st

from lounge.embed.url import build_lounge_url, redact_lounge_url
from lounge.identity.generator import nickname, password, username

NICK_RE = re.compile(r"^[a-z\[\]\\`_^{|}][a-z0-9\[\]\\`_^{|}\-]*$")
FORBIDDEN_NICK_CHARS = " \t!@#$%&*()+=.,;:'\"?/<>~éß漢"
ID_ALPHABET = string.ascii_letters + string.digits + " @\t"


class TestIdentityProperties:
    """Property-based tests for derived IRC names."""

    @given(st.text())
    def test_nickname_always_valid(self, display_name):
        """Property: any display name yields a non-empty, grammatical nickname."""
        nick = nickname(display_name)

        assert 1 <= len(nick) <= 32
        assert NICK_RE.match(nick), nick

    @given(st.text(alphabet=FORBIDDEN_NICK_CHARS))
    def test_nickname_forbidden_only_falls_back(self, display_name):
        assert nickname(display_name) == "user"

    @given(st.text(), st.one_of(st.none(), st.text()))
    def test_username_has_no_forbidden_chars(self, display_name, unique_id):
        """Property: usernames never carry whitespace, '@' or control characters."""
        name = username(display_name, unique_id)

        assert len(name) <= 32
        for ch in name:
            assert not ch.isspace()
            assert ch != "@"
            assert ord(ch) >= 32 and ord(ch) != 127

    @given(
        st.text(alphabet="abcdefghij", min_size=1, max_size=20),
        st.text(alphabet=ID_ALPHABET, min_size=4),
    )
    def test_username_suffix_from_unique_id(self, display_name, unique_id):
        name = username(display_name, unique_id)
        expected_tail = "_" + unique_id[-4:].lower()
        expected_tail = re.sub(r"[\s@\x00-\x1f\x7f]", "_", expected_tail)
        assert name.endswith(expected_tail)

    @given(st.integers(min_value=0, max_value=50))
    def test_password_shape(self, _):
        pw = password()

        assert len(pw) == 20
        assert pw.isascii() and pw.isalnum()


class TestUrlProperties:
    """Property-based tests for the auto-login URL."""

    @given(
        user=st.text(min_size=1),
        pw=st.text(min_size=1),
        network=st.text(min_size=1),
        nick=st.text(min_size=1),
        channel=st.text(),
    )
    def test_values_stay_in_their_slots(self, user, pw, network, nick, channel):
        """Property: no input value can inject or reorder query parameters."""
        url = build_lounge_url("https://chat.example.org", user, pw, network, nick, channel)

        pairs = parse_qsl(urlsplit(url).query, keep_blank_values=True)

        assert pairs == [
            ("password", pw),
            ("autoconnect", "true"),
            ("nick", nick),
            ("username", f"{user}/{network}"),
            ("realname", nick),
            ("join", f"#{channel}"),
        ]

    @given(pw=st.text(min_size=1), channel=st.text())
    def test_redaction_hides_password(self, pw, channel):
        url = build_lounge_url("https://chat.example.org", "alice", pw, "curia", "alice", channel)

        pairs = dict(parse_qsl(urlsplit(redact_lounge_url(url)).query, keep_blank_values=True))

        assert pairs["password"] == "***"
        assert pairs["join"] == f"#{channel}"
