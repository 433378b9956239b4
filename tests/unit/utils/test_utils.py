"""Tests for drive2notion.utils: chunk_blocks and redact."""

from __future__ import annotations

import pytest

from drive2notion.utils import chunk_blocks, redact


class TestChunkBlocks:
    def test_empty(self):
        assert chunk_blocks([]) == []

    def test_exactly_one_batch(self):
        blocks = [{"i": i} for i in range(100)]
        assert chunk_blocks(blocks) == [blocks]

    def test_250_blocks(self):
        blocks = [{"i": i} for i in range(250)]
        batches = chunk_blocks(blocks)
        assert [len(b) for b in batches] == [100, 100, 50]
        assert [b["i"] for batch in batches for b in batch] == list(range(250))

    def test_custom_size(self):
        assert [len(b) for b in chunk_blocks([{}] * 5, size=2)] == [2, 2, 1]

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError, match="size must be >= 1"):
            chunk_blocks([{}], size=size)


class TestRedact:
    def test_authorization_header(self):
        assert redact({"Authorization": "Bearer ntn_abc123"}) == {
            "Authorization": "Bearer <redacted>",
        }

    def test_token_scrubbed_everywhere(self):
        token = "secret_abcdef1234"
        out = redact({"url": f"https://x.test/?t={token}"}, token)
        assert token not in out["url"]
        assert "...1234" in out["url"]

    def test_nested_sensitive_keys(self):
        out = redact({"outer": {"api_key": {"v": 1}, "password": "hunter2"}})
        assert out["outer"]["api_key"] == "<redacted>"
        assert out["outer"]["password"] == "<redacted>"

    def test_data_uri_replaced(self):
        uri = "data:image/png;base64,iVBORw0KGgo="
        out = redact({"blocks": [{"link": uri}]})
        assert out["blocks"][0]["link"] == f"<data_uri:{len(uri)}_chars>"

    def test_original_not_mutated(self):
        payload = {"Authorization": "Bearer abc", "items": [1, 2]}
        redact(payload)
        assert payload == {"Authorization": "Bearer abc", "items": [1, 2]}

    def test_plain_values_untouched(self):
        payload = {"content": "hello", "n": 3, "flag": True}
        assert redact(payload) == payload
