"""
Configuration for the post processing pass.

Options are fixed once before the pass runs. They can be given with the
snake_case names below or with the camelCase names of the generator's
command line options.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from .errors import ConfigurationError

CLASS_NAME_SUFFIX_PATTERN = re.compile(r"^[a-zA-Z0-9]*$")
FILE_NAME_SUFFIX_PATTERN = re.compile(r"^[a-zA-Z0-9.-]*$")


class FileNaming(str, Enum):
    """Naming convention for the output files."""

    CAMEL_CASE = "camelCase"
    KEBAB_CASE = "kebab-case"


# camelCase option name -> dataclass attribute
_OPTION_ALIASES = {
    "fileNaming": "file_naming",
    "taggedUnions": "tagged_unions",
    "stringEnums": "string_enums",
    "modelSuffix": "model_suffix",
    "modelFileSuffix": "model_file_suffix",
    "modelNamePrefix": "model_name_prefix",
    "modelNameSuffix": "model_name_suffix",
    "importMapping": "import_mapping",
    "modelPackage": "model_package",
    "apiPackage": "api_package",
    "projectName": "project_name",
    "k6Version": "k6_version",
    "useJslib": "use_jslib",
}

# Options read as booleans, whatever form they are given in
_BOOLEAN_OPTIONS = {"tagged_unions", "string_enums", "use_jslib"}


def parse_boolean(value: object) -> bool:
    """Read an option as a boolean; strings are true only when "true" in any case."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


@dataclass
class CodeGeneratorConfig:
    """Configuration options for the post processing pass."""

    # Naming convention for model and API file names
    file_naming: FileNaming = FileNaming.CAMEL_CASE

    # Flatten discriminated children into tagged union variants
    tagged_unions: bool = False

    # Render enums as string literal unions
    string_enums: bool = False

    # Class name suffix of models, stripped from file names
    model_suffix: str = ""

    # Appended to every model file name (e.g. ".model")
    model_file_suffix: str = ""

    # Generic model name prefix/suffix, stripped from file names
    model_name_prefix: str = ""
    model_name_suffix: str = ""

    # Model name -> literal import target
    import_mapping: dict[str, str] = field(default_factory=dict)

    model_package: str = "model"
    api_package: str = "api"

    # Passed through to the renderer
    project_name: str = ""
    k6_version: str = "0.48.0"
    use_jslib: bool = True

    @property
    def class_enum_separator(self) -> str:
        return "" if self.string_enums else "."

    def validate(self) -> None:
        """Check option values, raising ConfigurationError on the first bad one."""
        if isinstance(self.file_naming, str) and not isinstance(self.file_naming, FileNaming):
            try:
                self.file_naming = FileNaming(self.file_naming)
            except ValueError:
                raise ConfigurationError(
                    "File naming only allows 'camelCase' or 'kebab-case'",
                    "fileNaming",
                    self.file_naming,
                ) from None
        if not CLASS_NAME_SUFFIX_PATTERN.fullmatch(self.model_suffix):
            raise ConfigurationError(
                "Model class suffix only allows alphanumeric characters",
                "modelSuffix",
                self.model_suffix,
            )
        if not FILE_NAME_SUFFIX_PATTERN.fullmatch(self.model_file_suffix):
            raise ConfigurationError(
                "Model file suffix only allows '.', '-' and alphanumeric characters",
                "modelFileSuffix",
                self.model_file_suffix,
            )

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            k = _OPTION_ALIASES.get(k, k)
            if k == "file_naming" and isinstance(v, str):
                # Bad values are reported by validate()
                try:
                    v = FileNaming(v)
                except ValueError:
                    pass
            if k in _BOOLEAN_OPTIONS:
                v = parse_boolean(v)
            if hasattr(config, k) and k != "class_enum_separator":
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to the additional properties seen by the renderer."""
        file_naming = self.file_naming.value if isinstance(self.file_naming, FileNaming) else self.file_naming
        return {
            "fileNaming": file_naming,
            "taggedUnions": self.tagged_unions,
            "stringEnums": self.string_enums,
            "classEnumSeparator": self.class_enum_separator,
            "modelSuffix": self.model_suffix,
            "modelFileSuffix": self.model_file_suffix,
            "modelNamePrefix": self.model_name_prefix,
            "modelNameSuffix": self.model_name_suffix,
            "importMapping": dict(self.import_mapping),
            "modelPackage": self.model_package,
            "apiPackage": self.api_package,
            "projectName": self.project_name,
            "k6Version": self.k6_version,
            "useJslib": self.use_jslib,
        }


def supporting_files(config: CodeGeneratorConfig) -> list[dict[str, str]]:
    """Files rendered once per run, next to the per-model and per-API files."""
    return [
        {
            "template": "models.mustache",
            "folder": config.model_package.replace(".", "/"),
            "destination": "index.ts",
        }
    ]
