"""Tests for short code generation."""

import string
from collections import Counter

import pytest
from shortlinks.lib.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""

    def test_alphabet(self):
        """Alphabet is exactly A-Z, a-z, 0-9."""
        assert len(ShortCodeGenerator.BASE62_CHARS) == 62
        assert set(ShortCodeGenerator.BASE62_CHARS) == set(
            string.ascii_letters + string.digits
        )

    def test_generate_random(self):
        """Test random code generation."""
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate_random()
        assert len(code) == 6
        assert generator.is_valid_format(code)

    def test_generate_random_custom_length(self):
        """Test random code with custom length."""
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate_random(length=10)
        assert len(code) == 10
        assert generator.is_valid_format(code)

    def test_generate_dispatches_on_strategy(self):
        random_generator = ShortCodeGenerator(strategy="random")
        hash_generator = ShortCodeGenerator(strategy="hash")

        url = "https://example.com/test"
        assert hash_generator.generate(seed=url, attempt=3) == hash_generator.generate_from_url(url, salt="3")
        assert len(random_generator.generate(seed=url)) == 6

    def test_generate_from_url_is_deterministic(self):
        """Same URL and salt give the same code."""
        generator = ShortCodeGenerator(default_length=6)

        url = "https://example.com/test"
        code1 = generator.generate_from_url(url, salt="0")
        code2 = generator.generate_from_url(url, salt="0")

        assert code1 == code2
        assert len(code1) == 6
        assert generator.is_valid_format(code1)

    def test_generate_from_url_varies_with_salt(self):
        """Each attempt gets a different candidate."""
        generator = ShortCodeGenerator(default_length=6, strategy="hash")

        url = "https://example.com/test"
        codes = {generator.generate(seed=url, attempt=i) for i in range(50)}

        assert len(codes) == 50

    def test_generate_from_url_long_code(self):
        """Codes longer than one digest's worth of bytes still fill up."""
        generator = ShortCodeGenerator()

        code = generator.generate_from_url("https://example.com", salt="x", length=40)
        assert len(code) == 40
        assert generator.is_valid_format(code)

    def test_generate_fallback_random(self):
        generator = ShortCodeGenerator(default_length=6, fallback_length=8)

        code = generator.generate_fallback("https://example.com")
        assert len(code) == 8
        assert generator.is_valid_format(code)

    def test_generate_fallback_hash_is_not_reproducible(self):
        """Hash fallback is salted with a fresh UUID."""
        generator = ShortCodeGenerator(strategy="hash")

        codes = {generator.generate_fallback("https://example.com") for _ in range(5)}
        assert len(codes) == 5
        assert all(len(code) == 8 for code in codes)

    @pytest.mark.parametrize("strategy", ["random", "hash"])
    def test_uniform_symbol_distribution(self, strategy):
        """Every symbol appears with roughly equal frequency."""
        generator = ShortCodeGenerator(default_length=6, strategy=strategy)

        counts = Counter()
        for attempt in range(3000):
            counts.update(generator.generate(seed="https://example.com/dist", attempt=attempt))

        expected = 3000 * 6 / 62
        assert set(counts) == set(ShortCodeGenerator.BASE62_CHARS)
        for symbol in ShortCodeGenerator.BASE62_CHARS:
            assert 0.6 * expected < counts[symbol] < 1.4 * expected, symbol

    def test_invalid_strategy(self):
        with pytest.raises(ValueError, match="Unknown short code strategy"):
            ShortCodeGenerator(strategy="sequential")

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            ShortCodeGenerator(default_length=0)

    def test_is_valid_format(self):
        """Test format validation."""
        assert ShortCodeGenerator.is_valid_format("abc123")
        assert ShortCodeGenerator.is_valid_format("ABCxyz")

        # Invalid formats
        assert not ShortCodeGenerator.is_valid_format("")
        assert not ShortCodeGenerator.is_valid_format("abc 123")
        assert not ShortCodeGenerator.is_valid_format("abc_123")
        assert not ShortCodeGenerator.is_valid_format("test-code")
        assert not ShortCodeGenerator.is_valid_format("abc@123")
