r"""Unit tests for parameter validation utilities."""

from __future__ import annotations

import pytest

from aretriable.utils import check_callable, check_not_none, validate_delay, validate_max_tries

####################################
#     Tests for check_not_none     #
####################################


def test_check_not_none_valid() -> None:
    check_not_none(0, "value")
    check_not_none("", "value")


def test_check_not_none_none() -> None:
    with pytest.raises(TypeError, match=r"value must not be None"):
        check_not_none(None, "value")


####################################
#     Tests for check_callable     #
####################################


def test_check_callable_valid() -> None:
    check_callable(print, "func")
    check_callable(lambda: None, "func")


def test_check_callable_none() -> None:
    with pytest.raises(TypeError, match=r"func must not be None"):
        check_callable(None, "func")


def test_check_callable_not_callable() -> None:
    with pytest.raises(TypeError, match=r"func must be callable, got int"):
        check_callable(42, "func")


########################################
#     Tests for validate_max_tries     #
########################################


@pytest.mark.parametrize("max_tries", [1, 5, 100])
def test_validate_max_tries_valid(max_tries: int) -> None:
    validate_max_tries(max_tries)


@pytest.mark.parametrize("max_tries", [0, -1, -10])
def test_validate_max_tries_invalid(max_tries: int) -> None:
    with pytest.raises(ValueError, match=rf"max_tries must be > 0, got {max_tries}"):
        validate_max_tries(max_tries)


####################################
#     Tests for validate_delay     #
####################################


@pytest.mark.parametrize("seconds", [0, 0.0, 0.5, 30])
def test_validate_delay_valid(seconds: float) -> None:
    validate_delay(seconds)


def test_validate_delay_negative() -> None:
    with pytest.raises(ValueError, match=r"delay must be >= 0, got -0.5"):
        validate_delay(-0.5)


def test_validate_delay_custom_name() -> None:
    with pytest.raises(ValueError, match=r"period must be >= 0"):
        validate_delay(-1, "period")
