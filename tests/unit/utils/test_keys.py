"""Tests for feeddump.utils.keys - fingerprints."""

from __future__ import annotations

import hashlib
import subprocess
import sys

import pytest

from feeddump.utils.keys import designated_field, fingerprint


class TestFingerprint:
    """Tests for fingerprint()."""

    def test_is_md5_hex_of_utf8(self) -> None:
        """Digest is MD5 over UTF-8 bytes, lowercase hex."""
        value = "Mon, 01 Jan 2024 10:00:00 GMT"
        assert fingerprint(value) == hashlib.md5(value.encode("utf-8")).hexdigest()

    def test_empty_string(self) -> None:
        """Empty input has the well-known MD5 digest."""
        assert fingerprint("") == "d41d8cd98f00b204e9800998ecf8427e"

    @pytest.mark.parametrize("value", ["", "hello", "héllo wörld", "日本語", "a" * 10_000])
    def test_repeated_calls_agree(self, value: str) -> None:
        """Same input always gives the same digest."""
        assert fingerprint(value) == fingerprint(value)

    def test_shape(self) -> None:
        """Digest is 32 lowercase hex characters."""
        digest = fingerprint("anything")
        assert len(digest) == 32
        assert digest == digest.lower()
        int(digest, 16)

    def test_distinct_inputs_differ(self) -> None:
        assert fingerprint("a") != fingerprint("b")

    def test_stable_across_processes(self) -> None:
        """Digest does not depend on per-process hash randomization."""
        code = "from feeddump.utils.keys import fingerprint; print(fingerprint('stable'))"
        out = subprocess.run(
            [sys.executable, "-c", code], capture_output=True, text=True, check=True
        )
        assert out.stdout.strip() == fingerprint("stable")


class TestDesignatedField:
    """Tests for the pub-date -> title -> description fallback."""

    def test_prefers_pub_date(self) -> None:
        assert designated_field("date", "title", "desc") == "date"

    def test_falls_back_to_title(self) -> None:
        assert designated_field(None, "title", "desc") == "title"
        assert designated_field("", "title", "desc") == "title"

    def test_falls_back_to_description(self) -> None:
        assert designated_field(None, None, "desc") == "desc"
        assert designated_field("", "", "desc") == "desc"

    def test_all_missing(self) -> None:
        assert designated_field(None, None, None) == ""
