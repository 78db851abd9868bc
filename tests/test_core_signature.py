"""Tests for the Signature model and cross-locale matching."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from langkit.core import Signature, signatures_match
from tests.strategies import PARAM_NAMES


class TestSignatureConstruction:
    """Signature.of / empty / validation."""

    def test_of_accepts_any_iterable(self) -> None:
        assert Signature.of(["a", "b"]) == Signature.of(("b", "a"))

    def test_fields_are_frozensets(self) -> None:
        sig = Signature(params={"a"}, fns={"a"})  # type: ignore[arg-type]
        assert isinstance(sig.params, frozenset)
        assert isinstance(sig.fns, frozenset)

    def test_formatter_must_be_parameter(self) -> None:
        with pytest.raises(ValueError, match="undeclared"):
            Signature.of(["a"], fns=["b"])

    def test_empty(self) -> None:
        assert Signature.empty().is_empty
        assert not Signature.empty().has_formatters


class TestSignatureQueries:
    """Formatter membership, ordering, description."""

    def test_is_formatter(self) -> None:
        sig = Signature.of(["link", "name"], fns=["link"])
        assert sig.is_formatter("link")
        assert not sig.is_formatter("name")

    def test_sorted_params(self) -> None:
        assert Signature.of(["z", "a", "m"]).sorted_params() == ("a", "m", "z")

    def test_describe(self) -> None:
        assert Signature.of(["link", "name"], fns=["link"]).describe() == "{fn(link), name}"

    def test_describe_empty(self) -> None:
        assert Signature.empty().describe() == "{}"


class TestSignaturesMatch:
    """Set equality on both fields."""

    def test_same_params_match(self) -> None:
        assert signatures_match(Signature.of(["a"]), Signature.of(["a"]))

    def test_empty_does_not_match_params(self) -> None:
        assert not signatures_match(Signature.empty(), Signature.of(["count"]))

    def test_same_params_different_formatters(self) -> None:
        assert not signatures_match(Signature.of(["a"]), Signature.of(["a"], fns=["a"]))

    def test_extra_param_does_not_match(self) -> None:
        assert not signatures_match(Signature.of(["a"]), Signature.of(["a", "b"]))

    @given(st.lists(st.sampled_from(PARAM_NAMES), max_size=5), st.randoms())
    def test_order_never_matters(self, names: list[str], rnd) -> None:
        shuffled = list(names)
        rnd.shuffle(shuffled)
        assert signatures_match(Signature.of(names), Signature.of(shuffled))
