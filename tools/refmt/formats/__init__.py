"""Codecs for the supported text formats."""

from .base import Codec
from .json_format import JsonCodec
from .toml_format import TomlCodec
from .yaml_format import YamlCodec

__all__ = ["Codec", "JsonCodec", "TomlCodec", "YamlCodec"]
