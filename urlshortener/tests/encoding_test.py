import pytest

from urlshortener.utils.encoding import ALPHABET, SHORT_CODE_LENGTH, generate_short_code


def test_generate_short_code_default_length():
    assert SHORT_CODE_LENGTH == 8
    assert len(generate_short_code()) == 8


def test_generate_short_code_custom_length():
    assert len(generate_short_code(length=12)) == 12


def test_generate_short_code_is_url_safe():
    for _ in range(100):
        code = generate_short_code()
        assert all(c in ALPHABET for c in code)


def test_generate_short_code_uniqueness():
    codes = {generate_short_code() for _ in range(1000)}
    # 36^8 possibilities, 1000 draws should not collide
    assert len(codes) == 1000


def test_generate_short_code_rejects_non_positive_length():
    with pytest.raises(ValueError):
        generate_short_code(length=0)
