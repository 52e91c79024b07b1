"""
Name resolver for model and API file names.

Maps a logical model name to the file it is rendered into and to the path
other modules use to import it, following the configured file naming
convention.
"""

from __future__ import annotations

from ..config import CodeGeneratorConfig, FileNaming
from ..utils import camelize, capitalize, dashize

DEFAULT_IMPORT_PREFIX = "./"
DEFAULT_MODEL_IMPORT_DIRECTORY_PREFIX = "../"
DEFAULT_API_FILENAME = "default"


class NameResolver:
    """Resolves file names and import paths from logical names."""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the resolver.

        Args:
            config: Validated generator configuration
        """
        self.config = config

    def remove_model_prefix_suffix(self, name: str) -> str:
        """Strip the class suffix, then the model name prefix and suffix."""
        result = name
        model_suffix = self.config.model_suffix
        if model_suffix and result.endswith(model_suffix):
            result = result[: -len(model_suffix)]

        prefix = capitalize(self.config.model_name_prefix)
        suffix = capitalize(self.config.model_name_suffix)
        if prefix and result.startswith(prefix):
            result = result[len(prefix) :]
        if suffix and result.endswith(suffix):
            result = result[: -len(suffix)]
        return result

    def convert_using_file_naming(self, name: str) -> str:
        """Apply the file naming convention to a logical name."""
        name = self.remove_model_prefix_suffix(name)
        if self.config.file_naming == FileNaming.KEBAB_CASE:
            return dashize(name)
        return camelize(name, lowercase_first=True)

    def to_file_base_name(self, name: str) -> str:
        """File name of a model, without directory prefix."""
        return self.convert_using_file_naming(name) + self.config.model_file_suffix

    def to_model_filename(self, name: str) -> str:
        """File name of a model relative to the model package ("./pet")."""
        if name in self.config.import_mapping:
            return self.config.import_mapping[name]
        return DEFAULT_IMPORT_PREFIX + self.to_file_base_name(name)

    def to_model_import(self, name: str) -> str:
        """Import path of a model as seen from the API package ("../model/pet")."""
        if name in self.config.import_mapping:
            return self.config.import_mapping[name]
        return f"{DEFAULT_MODEL_IMPORT_DIRECTORY_PREFIX}{self.config.model_package}/{self.to_file_base_name(name)}"

    def to_api_filename(self, name: str) -> str:
        """File name of an API class; a blank name falls back to "default"."""
        if not name.strip():
            return DEFAULT_API_FILENAME
        return self.convert_using_file_naming(name)
