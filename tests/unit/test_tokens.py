"""Unit tests for retrieval token generation"""

import string

from appraisal.domain.submissions.tokens import TOKEN_LENGTH, generate_token, token_hint


class TestTokenGeneration:

    def test_token_is_fixed_length_hex(self):
        token = generate_token()
        assert len(token) == TOKEN_LENGTH == 32
        assert set(token) <= set(string.hexdigits.lower())

    def test_tokens_unique_over_many_generations(self):
        """Test 10,000 tokens contain no duplicates"""
        tokens = {generate_token() for _ in range(10_000)}
        assert len(tokens) == 10_000

    def test_hint_never_reveals_full_token(self):
        token = generate_token()
        hint = token_hint(token)
        assert hint == token[:6] + "..."
        assert token not in hint
