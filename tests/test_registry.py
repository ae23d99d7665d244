"""Tests for format resolution and codec lookup."""

from pathlib import Path

import pytest

from tools.refmt.errors import FormatError, FormatErrorKind
from tools.refmt.formats import Codec, JsonCodec, TomlCodec, YamlCodec
from tools.refmt.registry import (
    Format,
    codec_for,
    format_aliases,
    format_names,
    infer_format,
    resolve_by_extension,
    resolve_by_name,
)


class TestFormat:
    """Test the Format enum."""

    def test_names(self):
        """Test canonical names."""
        assert format_names() == ["json", "toml", "yaml"]

    def test_aliases(self):
        """Test that every alias is a canonical name or an extension."""
        assert format_aliases() == ["json", "toml", "yaml", "yml"]
        for alias in format_aliases():
            assert resolve_by_name(alias).is_extension(alias)

    def test_extensions(self):
        """Test extension aliases."""
        assert Format.JSON.extensions == ("json",)
        assert Format.TOML.extensions == ("toml",)
        assert Format.YAML.extensions == ("yaml", "yml")

    def test_preferred_extension(self):
        """Test that the preferred extension is the canonical name."""
        for fmt in Format:
            assert fmt.preferred_extension == fmt.value


class TestResolveByName:
    """Test name resolution."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("json", Format.JSON),
            ("JsOn", Format.JSON),
            ("toml", Format.TOML),
            ("yaml", Format.YAML),
            ("yml", Format.YAML),
            ("YML", Format.YAML),
        ],
    )
    def test_known_names(self, name, expected):
        """Test that names and aliases resolve case-insensitively."""
        assert resolve_by_name(name) is expected

    def test_alias_resolves_to_same_format(self):
        """Test that YML and yaml are the same format."""
        assert resolve_by_name("YML") is resolve_by_name("yaml")

    @pytest.mark.parametrize("name", ["conf", "", "jsonx", "ya", ".json", "hocon", "json "])
    def test_unknown_names(self, name):
        """Test that anything else is an unknown format."""
        with pytest.raises(FormatError) as exc_info:
            resolve_by_name(name)

        assert exc_info.value.kind == FormatErrorKind.UNKNOWN_FORMAT
        assert exc_info.value.attempted == name


class TestResolveByExtension:
    """Test extension lookup."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("config.json", Format.JSON),
            ("Cargo.toml", Format.TOML),
            ("docker-compose.yml", Format.YAML),
            ("dir.d/CONFIG.YAML", Format.YAML),
            (Path("a/b/c.json"), Format.JSON),
        ],
    )
    def test_known_extensions(self, filename, expected):
        """Test resolving by file extension."""
        assert resolve_by_extension(filename) is expected

    def test_unknown_extension(self):
        """Test an unrecognised extension."""
        with pytest.raises(FormatError) as exc_info:
            resolve_by_extension("settings.conf")

        assert exc_info.value.kind == FormatErrorKind.UNKNOWN_FORMAT
        assert exc_info.value.attempted == "conf"

    def test_no_extension(self):
        """Test a file name without an extension."""
        with pytest.raises(FormatError) as exc_info:
            resolve_by_extension("Makefile")

        assert exc_info.value.kind == FormatErrorKind.AMBIGUOUS_INFERENCE


class TestInferFormat:
    """Test format inference."""

    def test_explicit_name_wins(self):
        """Test that an explicit name beats the file extension."""
        assert infer_format("data.json", "yaml") is Format.YAML

    def test_from_extension(self):
        """Test falling back to the file extension."""
        assert infer_format("data.toml") is Format.TOML

    def test_nothing_given(self):
        """Test that inference fails without a file or name."""
        with pytest.raises(FormatError) as exc_info:
            infer_format()

        assert exc_info.value.kind == FormatErrorKind.AMBIGUOUS_INFERENCE
        assert "cannot infer format" in str(exc_info.value)

    def test_unknown_name(self):
        """Test that a bad explicit name is not ambiguous but unknown."""
        with pytest.raises(FormatError) as exc_info:
            infer_format("data.json", "conf")

        assert exc_info.value.kind == FormatErrorKind.UNKNOWN_FORMAT


class TestCodecFor:
    """Test codec lookup."""

    def test_every_format_has_a_codec(self):
        """Test that codec_for is total over Format."""
        for fmt in Format:
            codec = codec_for(fmt)
            assert isinstance(codec, Codec)
            assert codec.name == fmt.value

    def test_codec_types(self):
        """Test the codec chosen for each format."""
        assert isinstance(codec_for(Format.JSON), JsonCodec)
        assert isinstance(codec_for(Format.TOML), TomlCodec)
        assert isinstance(codec_for(Format.YAML), YamlCodec)

    def test_codecs_are_shared(self):
        """Test that lookups return the same codec instance."""
        assert codec_for(Format.YAML) is codec_for(Format.YAML)

    def test_not_a_format(self):
        """Test that passing a plain string is a programming error."""
        with pytest.raises(TypeError):
            codec_for("json")
