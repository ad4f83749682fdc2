import string

import pytest

from minitalk.chars import (
    is_alnum,
    is_alpha,
    is_ascii,
    is_digit,
    is_print,
    to_lower,
    to_upper,
)

ALL_CODES = range(-5, 300)


@pytest.mark.parametrize("code", ALL_CODES)
def test_is_alpha_matches_ascii_letters(code):
    expected = 0 <= code < 256 and chr(code) in string.ascii_letters
    assert is_alpha(code) is expected


@pytest.mark.parametrize("code", ALL_CODES)
def test_is_digit_matches_ascii_digits(code):
    expected = 0 <= code < 256 and chr(code) in string.digits
    assert is_digit(code) is expected


@pytest.mark.parametrize("code", ALL_CODES)
def test_is_alnum_is_alpha_or_digit(code):
    assert is_alnum(code) == (is_alpha(code) or is_digit(code))


def test_is_ascii_bounds():
    assert is_ascii(0)
    assert is_ascii(127)
    assert not is_ascii(128)
    assert not is_ascii(-1)


def test_is_print_bounds():
    assert not is_print("\n")
    assert is_print(" ")
    assert is_print("~")
    assert not is_print(127)
    assert not is_print(31)


@pytest.mark.parametrize("ch", string.ascii_letters + string.digits + string.punctuation)
def test_string_and_int_forms_agree(ch):
    assert is_alpha(ch) == is_alpha(ord(ch))
    assert is_print(ch) == is_print(ord(ch))
    assert to_upper(ch) == chr(to_upper(ord(ch)))


def test_non_ascii_letter_is_not_alpha():
    assert not is_alpha("é")
    assert not is_ascii("é")


@pytest.mark.parametrize("ch", string.ascii_lowercase)
def test_to_upper_matches_str_upper(ch):
    assert to_upper(ch) == ch.upper()
    assert to_lower(to_upper(ch)) == ch


@pytest.mark.parametrize("ch", string.ascii_uppercase)
def test_to_lower_matches_str_lower(ch):
    assert to_lower(ch) == ch.lower()
    assert to_upper(to_lower(ch)) == ch


@pytest.mark.parametrize("ch", string.digits + string.punctuation + " \té")
def test_case_conversion_leaves_others_alone(ch):
    assert to_upper(ch) == ch
    assert to_lower(ch) == ch


def test_case_conversion_keeps_int_kind():
    assert to_upper(ord("a")) == ord("A")
    assert to_lower(ord("A")) == ord("a")


@pytest.mark.parametrize("bad", ["", "ab"])
def test_multi_character_string_rejected(bad):
    with pytest.raises(ValueError):
        is_alpha(bad)


def test_non_integer_rejected():
    with pytest.raises(TypeError):
        to_upper(1.5)