"""
Tests for the option schema and help rendering.
"""

from __future__ import annotations

import pytest

from remotecode.config.models import Configuration
from remotecode.config.schema import (
    OPTIONS,
    RESTRICTED_OPTIONS,
    OptionSpec,
    ValueKind,
    _options,
    find_option,
    find_short,
    option_descriptions,
)


class TestOptionTable:
    """Test the closed option table."""

    def test_short_aliases_are_unique(self):
        shorts = [spec.short for spec in OPTIONS.values() if spec.short]

        assert len(shorts) == len(set(shorts))

    def test_duplicate_names_are_rejected(self):
        with pytest.raises(ValueError, match="Duplicate option open"):
            _options(OptionSpec("open", ValueKind.FLAG), OptionSpec("open", ValueKind.FLAG))

    def test_duplicate_short_aliases_are_rejected(self):
        with pytest.raises(ValueError, match="Duplicate short alias -o"):
            _options(
                OptionSpec("open", ValueKind.FLAG, short="o"),
                OptionSpec("other", ValueKind.FLAG, short="o"),
            )

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            OPTIONS["bogus"] = OptionSpec("bogus", ValueKind.FLAG)  # type: ignore[index]

    def test_every_option_is_a_configuration_field(self):
        aliases = {field.alias or name for name, field in Configuration.model_fields.items()}

        assert set(OPTIONS) <= aliases

    def test_lookup(self):
        assert find_option("bind-addr").kind is ValueKind.STRING
        assert find_option("bogus") is None
        assert find_short("vvv").name == "verbose"
        assert find_short("z") is None

    def test_restricted_options(self):
        assert dict(RESTRICTED_OPTIONS) == {"password": "PASSWORD", "hashed-password": "HASHED_PASSWORD"}

    def test_value_kinds(self):
        assert OPTIONS["cert"].kind is ValueKind.OPTIONAL_STRING
        assert OPTIONS["link"].kind is ValueKind.OPTIONAL_STRING
        assert OPTIONS["proxy-domain"].kind is ValueKind.STRING_LIST
        assert OPTIONS["port"].kind is ValueKind.NUMBER
        assert OPTIONS["log"].choice_values() == ["trace", "debug", "info", "warn", "error"]


class TestOptionDescriptions:
    """Test help rendering."""

    def test_hidden_options_are_omitted(self):
        text = "\n".join(option_descriptions())

        assert "--host " not in text
        assert "--socket-path" not in text
        assert "--enable " not in text

    def test_short_alias_and_name(self):
        entries = option_descriptions()
        help_entry = next(entry for entry in entries if "--help" in entry)

        assert help_entry.lstrip().startswith("-h --help")
        assert help_entry.endswith("Show this output.")

    def test_descriptions_are_aligned(self):
        entries = [entry.split("\n")[0] for entry in option_descriptions()]
        auth = next(entry for entry in entries if "--auth " in entry)
        verbose = next(entry for entry in entries if "--verbose " in entry)

        assert auth.index("The type") == verbose.index("Enable verbose")

    def test_enum_values_are_listed(self):
        auth = next(entry for entry in option_descriptions() if "--auth " in entry)

        assert auth.endswith("[password, none]")

    def test_beta_marker(self):
        link = next(entry for entry in option_descriptions() if "--link " in entry)

        assert "(beta) Securely bind" in link

    def test_multiline_description_is_indented(self):
        entry = next(entry for entry in option_descriptions() if "--hashed-password " in entry)
        first, second = entry.split("\n")

        assert second.strip() == "Takes precedence over 'password'."
        assert second.index("Takes") == first.index("The password")
