"""Tests for environment variable helpers."""
import pytest

from common_utils import env
from common_utils.env import EnvironmentVariableError


def test_string_unset(monkeypatch):
    monkeypatch.delenv("SAMPLE_VALUE", raising=False)
    assert env.get_string_env("SAMPLE_VALUE") is None
    assert env.get_string_env_or_default("SAMPLE_VALUE", "fallback") == "fallback"


def test_string_empty_is_still_set(monkeypatch):
    monkeypatch.setenv("SAMPLE_VALUE", "")
    assert env.get_string_env_or_default("SAMPLE_VALUE", "fallback") == ""


@pytest.mark.parametrize(
    "raw, expected",
    [("6379", 6379), ("1.5", 1.5), ("-2", -2), ("abc", None), ("nan", None)],
)
def test_number_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("SAMPLE_NUMBER", raw)
    assert env.get_number_env("SAMPLE_NUMBER") == expected


def test_number_default(monkeypatch):
    monkeypatch.setenv("SAMPLE_NUMBER", "not-a-number")
    assert env.get_number_env_or_default("SAMPLE_NUMBER", 9000) == 9000


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("TRUE", True), ("false", False), ("False", False), ("yes", None), ("1", None)],
)
def test_boolean_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("SAMPLE_FLAG", raw)
    assert env.get_boolean_env("SAMPLE_FLAG") is expected


def test_boolean_default(monkeypatch):
    monkeypatch.delenv("SAMPLE_FLAG", raising=False)
    assert env.get_boolean_env_or_default("SAMPLE_FLAG", True) is True


def test_require_present(monkeypatch):
    monkeypatch.setenv("SAMPLE_VALUE", "here")
    monkeypatch.setenv("SAMPLE_NUMBER", "42")
    monkeypatch.setenv("SAMPLE_FLAG", "false")

    assert env.require_string_env("SAMPLE_VALUE") == "here"
    assert env.require_number_env("SAMPLE_NUMBER") == 42
    assert env.require_boolean_env("SAMPLE_FLAG") is False


def test_require_missing(monkeypatch):
    monkeypatch.delenv("SAMPLE_VALUE", raising=False)

    with pytest.raises(EnvironmentVariableError) as exc_info:
        env.require_string_env("SAMPLE_VALUE")

    assert exc_info.value.key == "SAMPLE_VALUE"
    assert "SAMPLE_VALUE" in str(exc_info.value)


def test_require_invalid(monkeypatch):
    monkeypatch.setenv("SAMPLE_NUMBER", "ten")
    monkeypatch.setenv("SAMPLE_FLAG", "maybe")

    with pytest.raises(EnvironmentVariableError, match="valid number"):
        env.require_number_env("SAMPLE_NUMBER")
    with pytest.raises(EnvironmentVariableError, match="valid boolean"):
        env.require_boolean_env("SAMPLE_FLAG")
