"""Tests for configuration models (core/models.py).

All models are frozen dataclasses validated on construction — these
tests verify the rejection rules, immutability, and derived values.
"""

from __future__ import annotations

import dataclasses

import pytest

from cmdparser.core.models import (
    Example,
    FirstArgAlternativeForFlag,
    FlagKind,
    FlagOptions,
    Options,
)
from cmdparser.exceptions import ConfigurationError


def _make_flag(**overrides: object) -> FlagOptions:
    defaults: dict[str, object] = {"name": "database", "usage": "Database name"}
    defaults.update(overrides)
    return FlagOptions(**defaults)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# FlagOptions
# ---------------------------------------------------------------------------

class TestFlagOptionsValidation:
    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Must provide name"):
            _make_flag(name="", string="")

    def test_empty_usage_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Must provide usage"):
            _make_flag(usage="", string="")

    @pytest.mark.parametrize(
        "slots",
        [
            {"string": "", "integer": 0},
            {"string": "", "boolean": False},
            {"integer": 1, "boolean": True},
            {"string": "x", "integer": 1, "boolean": True},
        ],
    )
    def test_more_than_one_type_rejected(self, slots: dict[str, object]) -> None:
        with pytest.raises(ConfigurationError, match="Only provide one type"):
            _make_flag(**slots)

    def test_no_type_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Must provide one type"):
            _make_flag()

    def test_multi_letter_shorthand_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="single character"):
            _make_flag(shorthand="db", string="")

    def test_dashed_name_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="must not start with"):
            _make_flag(name="--database", string="")

    def test_bool_is_not_an_int_default(self) -> None:
        with pytest.raises(ConfigurationError, match="must be an int"):
            _make_flag(integer=True)

    def test_wrong_string_default_type_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a str"):
            _make_flag(string=5)


class TestFlagOptionsKinds:
    def test_string(self) -> None:
        flag = _make_flag(string="master")
        assert flag.kind is FlagKind.STRING
        assert flag.default == "master"

    def test_empty_string_still_counts_as_populated(self) -> None:
        assert _make_flag(string="").kind is FlagKind.STRING

    def test_int(self) -> None:
        flag = _make_flag(name="port", integer=1433)
        assert flag.kind is FlagKind.INT
        assert flag.default == 1433

    def test_zero_int_still_counts_as_populated(self) -> None:
        assert _make_flag(integer=0).kind is FlagKind.INT

    def test_bool(self) -> None:
        flag = _make_flag(name="verbose", boolean=False)
        assert flag.kind is FlagKind.BOOL
        assert flag.default is False

    def test_dest_replaces_dashes(self) -> None:
        flag = _make_flag(name="trust-server-certificate", boolean=False)
        assert flag.dest == "trust_server_certificate"

    def test_frozen(self) -> None:
        flag = _make_flag(string="")
        with pytest.raises(dataclasses.FrozenInstanceError):
            flag.name = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

class TestOptions:
    def test_empty_use_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Must implement command definition"):
            Options(use="")

    def test_blank_use_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Options(use="   ")

    def test_name_is_first_word_of_use(self) -> None:
        assert Options(use="use [database]").name == "use"

    def test_sequences_become_tuples(self) -> None:
        options = Options(
            use="tool",
            aliases=["t"],  # type: ignore[arg-type]
            examples=[Example("List", ["tool list"])],  # type: ignore[list-item]
        )
        assert options.aliases == ("t",)
        assert isinstance(options.examples, tuple)
        assert options.examples[0].steps == ("tool list",)

    def test_defaults(self) -> None:
        options = Options(use="tool")
        assert options.short == ""
        assert options.long == ""
        assert options.run is None
        assert options.first_arg_alternative_for_flag is None


# ---------------------------------------------------------------------------
# FirstArgAlternativeForFlag
# ---------------------------------------------------------------------------

class TestFirstArgAlternativeForFlag:
    def test_target_defaults_to_flag(self) -> None:
        alternative = FirstArgAlternativeForFlag("database")
        assert alternative.target == "database"

    def test_explicit_target(self) -> None:
        alternative = FirstArgAlternativeForFlag("database", target="name")
        assert alternative.target == "name"

    def test_empty_flag_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Must provide flag"):
            FirstArgAlternativeForFlag("")

    def test_empty_target_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Must set target"):
            FirstArgAlternativeForFlag("database", target="")
