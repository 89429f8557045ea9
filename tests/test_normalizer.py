import pytest

from services.normalizer import (
    derive_is_headquarter,
    institution_prefix,
    normalize_code,
    normalize_country,
    normalize_text,
)


class TestNormalizeCode:

    @pytest.mark.parametrize("raw,expected", [
        ("aaaabbccxxx", "AAAABBCCXXX"),
        ("  AAAABBCC123 ", "AAAABBCC123"),
        ("\tdeutdeff500\n", "DEUTDEFF500"),
        ("", ""),
    ])
    def test_uppercases_and_trims(self, raw, expected):
        assert normalize_code(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", " MiXeD123xxx ", "short", "toolongforaswiftcode"])
    def test_is_idempotent(self, raw):
        once = normalize_code(raw)
        assert normalize_code(once) == once

    def test_does_not_validate_length(self):
        assert normalize_code("ab") == "AB"


class TestDeriveIsHeadquarter:

    @pytest.mark.parametrize("code", ["AAAABBCCXXX", "XXX", "BANKPLPWXXX"])
    def test_xxx_suffix_is_headquarter(self, code):
        assert derive_is_headquarter(code) is True

    @pytest.mark.parametrize("code", ["AAAABBCC123", "AAAABBCCXX1", "AAAABBCCXXx", "XX", ""])
    def test_other_suffixes_are_branches(self, code):
        assert derive_is_headquarter(code) is False


def test_institution_prefix_is_first_eight_characters():
    assert institution_prefix("AAAABBCCXXX") == "AAAABBCC"
    assert institution_prefix("AAAA") == "AAAA"


def test_normalize_country_uppercases_both():
    assert normalize_country(" pl", "poland ") == ("PL", "POLAND")


@pytest.mark.parametrize("value", [None, float("nan")])
def test_normalize_text_blank_cells(value):
    assert normalize_text(value) == ""


def test_normalize_text_keeps_case():
    assert normalize_text("  Main Street 1 ") == "Main Street 1"
