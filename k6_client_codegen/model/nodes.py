"""
Model graph node definitions.

These nodes represent the graph handed over by the schema parser once every
schema has been turned into a model: entities with their (flattened)
properties, discriminators and the operations of each API. The post
processing pass rewrites them for the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Separator used by the parser when a property is typed as "A | B | C"
UNION_SEPARATOR = " | "


class TypeKind(Enum):
    """Kind of a property or parameter type."""

    PRIMITIVE = "primitive"  # string, number, boolean, Blob, ...
    MODEL = "model"  # Another entity of the graph
    ARRAY = "array"  # Array<T>
    MAP = "map"  # { [key: string]: T; }
    UNION = "union"  # A | B | ...


@dataclass
class TypeRef:
    """A declared type."""

    kind: TypeKind = TypeKind.PRIMITIVE
    name: str = ""

    # Array item, map value or union variants
    type_args: list[TypeRef] = field(default_factory=list)

    def to_type_string(self) -> str:
        """The type as written in TypeScript."""
        if self.kind == TypeKind.ARRAY:
            return f"Array<{self.type_args[0].to_type_string()}>"
        if self.kind == TypeKind.MAP:
            return f"{{ [key: string]: {self.type_args[0].to_type_string()}; }}"
        if self.kind == TypeKind.UNION:
            return UNION_SEPARATOR.join(arg.to_type_string() for arg in self.type_args)
        return self.name

    def referenced_models(self) -> list[str]:
        """Model names this type needs imported, in first-seen order."""
        if self.kind == TypeKind.MODEL:
            return [self.name]
        names: list[str] = []
        for arg in self.type_args:
            for name in arg.referenced_models():
                if name not in names:
                    names.append(name)
        return names


@dataclass
class Property:
    """A property of an entity."""

    name: str = ""  # Base name as written in the schema
    type_ref: TypeRef = field(default_factory=TypeRef)
    required: bool = False
    description: str | None = None

    # Tag literal stamped on the discriminator property of a union variant
    discriminator_value: str | None = None


@dataclass
class MappedModel:
    """One entry of a discriminator mapping."""

    mapping_name: str = ""  # Tag literal
    model_name: str = ""


@dataclass
class Discriminator:
    """Discriminator declared on a parent entity."""

    property_name: str = ""
    mapped_models: list[MappedModel] = field(default_factory=list)

    def lookup(self, model_name: str) -> str | None:
        """Return the tag literal registered for a model, if any."""
        value = None
        for mapped in self.mapped_models:
            if mapped.model_name == model_name:
                value = mapped.mapping_name
        return value


@dataclass
class ImportDescriptor:
    """An import as consumed by the model template."""

    classname: str = ""
    filename: str = ""


@dataclass
class Entity:
    """A model definition."""

    name: str = ""
    description: str | None = None

    # All properties, inherited ones included
    properties: list[Property] = field(default_factory=list)

    # Inheritance
    parent: str | None = None
    discriminator: Discriminator | None = None
    children: list[Entity] = field(default_factory=list)

    # Raw import names; may hold "A | B" union strings
    imports: list[str] = field(default_factory=list)

    # Explicit tag literal (x-discriminator-value), wins over the mapping
    discriminator_value_override: str | None = None

    # Other vendor extensions, passed through to the renderer
    vendor_extensions: dict[str, Any] = field(default_factory=dict)

    # Filled by the post processor
    ts_imports: list[ImportDescriptor] = field(default_factory=list)
    tagged_unions: bool = False

    def add_import(self, name: str) -> None:
        if name not in self.imports:
            self.imports.append(name)

    def remove_import(self, name: str) -> None:
        self.imports = [im for im in self.imports if im != name]

    def find_property(self, name: str) -> Property | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclass
class ModelGraph:
    """All entities of one generation run, in definition order."""

    entities: list[Entity] = field(default_factory=list)

    def get(self, name: str) -> Entity | None:
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None

    def names(self) -> list[str]:
        return [entity.name for entity in self.entities]


class ParameterLocation(str, Enum):
    """Where an operation parameter is sent."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"
    BODY = "body"
    FORM = "form"


@dataclass
class Parameter:
    """An operation parameter."""

    name: str = ""
    location: ParameterLocation = ParameterLocation.QUERY
    type_ref: TypeRef = field(default_factory=TypeRef)
    required: bool = False


@dataclass
class MediaType:
    """A "consumes" entry of an operation."""

    media_type: str = ""
    is_json: bool = False


@dataclass
class Operation:
    """An API operation."""

    name: str = ""  # Operation id
    http_method: str = "GET"
    path: str = ""
    parameters: list[Parameter] = field(default_factory=list)

    has_body_param: bool = False
    has_form_params: bool = False

    # None when the schema said nothing about request content types
    consumes: list[MediaType] | None = None
    has_consumes: bool = False

    # Model names referenced by parameters and responses
    imports: list[str] = field(default_factory=list)

    @property
    def has_body_or_form_params(self) -> bool:
        return self.has_body_param or self.has_form_params


@dataclass
class OperationImport:
    """A model import of an API file."""

    classname: str = ""
    import_path: str | None = None  # Resolved module path of the model
    filename: str | None = None


@dataclass
class OperationsBundle:
    """The operations of one API class, with the imports they need."""

    class_name: str = ""
    operations: list[Operation] = field(default_factory=list)
    imports: list[OperationImport] = field(default_factory=list)

    # Filled by the post processor
    api_filename: str = ""
