"""Test IRC username/nickname/password generation."""

import string

import pytest

from lounge.identity import Identity, generate_identity, nickname, password, username


class TestUsername:
    def test_lowercases_and_replaces_spaces(self):
        assert username("Alice Smith") == "alice_smith"

    def test_replaces_at_sign(self):
        assert username("bob@example") == "bob_example"

    def test_replaces_control_characters_and_del(self):
        assert username("a\x00b\x1fc\x7fd") == "a_b_c_d"

    def test_replaces_tabs_and_newlines(self):
        assert username("a\tb\nc") == "a_b_c"

    def test_keeps_other_punctuation(self):
        assert username("O'Brien-Jr.") == "o'brien-jr."

    def test_truncates_to_32(self):
        assert username("x" * 50) == "x" * 32

    def test_appends_unique_id_suffix(self):
        assert username("Alice", "user_000123456789") == "alice_6789"

    def test_short_unique_id_used_whole(self):
        assert username("Alice", "ab") == "alice_ab"

    def test_suffix_applied_before_truncation(self):
        result = username("y" * 40, "abcd1234")
        assert result == "y" * 32

    def test_suffix_is_cleaned_too(self):
        assert username("alice", "x@ Z9") == "alice___z9"

    def test_empty_unique_id_ignored(self):
        assert username("Alice", "") == "alice"

    def test_empty_display_name(self):
        assert username("") == ""

    def test_only_forbidden_characters_become_underscores(self):
        assert username("@ @") == "___"

    def test_deterministic(self):
        assert username("Carol Danvers", "id-42") == username("Carol Danvers", "id-42")


class TestNickname:
    def test_trims_and_lowercases(self):
        assert nickname("  Alice  ") == "alice"

    def test_replaces_space_inside(self):
        assert nickname("Alice Smith") == "alice_smith"

    def test_keeps_irc_special_characters(self):
        assert nickname("a[b]c\\d`e_f^g{h|i}") == "a[b]c\\d`e_f^g{h|i}"

    def test_keeps_non_leading_dash(self):
        assert nickname("mary-jane") == "mary-jane"

    def test_leading_digit_prefixed(self):
        assert nickname("42life") == "u_42life"

    def test_leading_dash_prefixed(self):
        assert nickname("-dash") == "u_-dash"

    def test_replaces_non_ascii_letters(self):
        assert nickname("José") == "jos_"

    def test_empty_falls_back_to_user(self):
        assert nickname("") == "user"

    def test_whitespace_falls_back_to_user(self):
        assert nickname("   \t ") == "user"

    @pytest.mark.parametrize("name", ["@@@", "!!", "ñ€", "..."])
    def test_only_forbidden_falls_back_to_user(self, name):
        assert nickname(name) == "user"

    def test_truncates_to_32(self):
        assert nickname("n" * 40) == "n" * 32

    def test_prefix_counts_toward_length(self):
        result = nickname("1" * 40)
        assert len(result) == 32
        assert result.startswith("u_1")

    def test_underscores_are_legal(self):
        assert nickname("___") == "___"


class TestPassword:
    def test_length(self):
        assert len(password()) == 20

    def test_alphabet(self):
        allowed = set(string.ascii_letters + string.digits)
        for _ in range(50):
            assert set(password()) <= allowed

    def test_successive_calls_differ(self):
        assert password() != password()


class TestGenerateIdentity:
    def test_bundles_all_three(self):
        ident = generate_identity("Alice Smith", "user-9876")
        assert isinstance(ident, Identity)
        assert ident.username == "alice_smith_9876"
        assert ident.nickname == "alice_smith"
        assert len(ident.password) == 20

    def test_identity_is_immutable(self):
        ident = generate_identity("Alice")
        with pytest.raises(AttributeError):
            ident.username = "mallory"  # type: ignore[misc]
