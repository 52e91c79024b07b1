"""
JSON exchange format of the model graph.

The schema parser hands the graph over as a JSON document and the renderer
reads the post processed graph back as JSON. ``GraphLoader`` builds nodes
from the former, ``dump_document`` produces the latter.
"""

from __future__ import annotations

import re
from typing import Any

from .config import CodeGeneratorConfig, supporting_files
from .errors import GraphLoadError
from .model.nodes import (
    UNION_SEPARATOR,
    Discriminator,
    Entity,
    MappedModel,
    MediaType,
    ModelGraph,
    Operation,
    OperationImport,
    OperationsBundle,
    Parameter,
    ParameterLocation,
    Property,
    TypeKind,
    TypeRef,
)

DISCRIMINATOR_VALUE_EXTENSION = "x-discriminator-value"

_ARRAY_GENERIC = re.compile(r"^Array<(?P<item>.+)>$")
_ARRAY_SUFFIX = re.compile(r"^(?P<item>.+)\[\]$")
_MAP = re.compile(r"^\{\s*\[key:\s*string\]:\s*(?P<value>.+?);?\s*\}$")


def _split_top_level_union(type_name: str) -> list[str]:
    """Split "A | Array<B | C>" into ["A", "Array<B | C>"]."""
    parts: list[str] = []
    depth = 0
    start = 0
    i = 0
    while i < len(type_name):
        char = type_name[i]
        if char in "<{(":
            depth += 1
        elif char in ">})":
            depth -= 1
        elif depth == 0 and type_name.startswith(UNION_SEPARATOR, i):
            parts.append(type_name[start:i])
            i += len(UNION_SEPARATOR)
            start = i
            continue
        i += 1
    parts.append(type_name[start:])
    return [part.strip() for part in parts if part.strip()]


class GraphLoader:
    """Builds the model graph from the parser's JSON document."""

    # TypeScript types that never need an import
    PRIMITIVE_TYPES = {
        "string",
        "number",
        "boolean",
        "any",
        "object",
        "Date",
        "Blob",
        "null",
        "undefined",
        "unknown",
        "void",
    }

    # Schema types rendered as another TypeScript type
    TYPE_MAPPING = {"file": "Blob", "integer": "number", "date-time": "Date"}

    def load(self, document: dict[str, Any]) -> tuple[ModelGraph, list[OperationsBundle]]:
        """
        Load a parsed graph document.

        Args:
            document: Dictionary with "models" (name -> model) and "apis"

        Returns:
            The model graph and the operations of every API

        Raises:
            GraphLoadError: If the document does not describe a graph
        """
        models = document.get("models") or {}
        if not isinstance(models, dict):
            raise GraphLoadError("'models' must be an object keyed by model name", "#/models")

        graph = ModelGraph()
        for name, raw in models.items():
            graph.entities.append(self._parse_entity(name, raw, f"#/models/{name}"))

        # Children are listed by name; link them once every entity exists
        for name, raw in models.items():
            entity = graph.get(name)
            for child_name in raw.get("children", []):
                child = graph.get(child_name)
                if child is None:
                    raise GraphLoadError(f"Unknown child model '{child_name}'", f"#/models/{name}/children")
                entity.children.append(child)

        bundles = [self._parse_bundle(raw, f"#/apis/{i}") for i, raw in enumerate(document.get("apis") or [])]
        return graph, bundles

    def parse_type(self, type_name: str) -> TypeRef:
        """
        Parse a TypeScript type expression as written by the parser.

        Args:
            type_name: e.g. "string", "Pet", "Array<Pet>", "Cat | Dog"

        Returns:
            The type as a TypeRef
        """
        type_name = type_name.strip()

        parts = _split_top_level_union(type_name)
        if len(parts) > 1:
            variants = [self.parse_type(part) for part in parts]
            return TypeRef(kind=TypeKind.UNION, name=type_name, type_args=variants)

        match = _ARRAY_GENERIC.match(type_name) or _ARRAY_SUFFIX.match(type_name)
        if match:
            return TypeRef(kind=TypeKind.ARRAY, name="Array", type_args=[self.parse_type(match.group("item"))])

        match = _MAP.match(type_name)
        if match:
            return TypeRef(kind=TypeKind.MAP, name="Record", type_args=[self.parse_type(match.group("value"))])

        type_name = self.TYPE_MAPPING.get(type_name, type_name)
        if type_name in self.PRIMITIVE_TYPES:
            return TypeRef(kind=TypeKind.PRIMITIVE, name=type_name)
        return TypeRef(kind=TypeKind.MODEL, name=type_name)

    def _parse_entity(self, name: str, raw: dict[str, Any], path: str) -> Entity:
        if not name:
            raise GraphLoadError("Model without a name", path)
        if not isinstance(raw, dict):
            raise GraphLoadError(f"Model '{name}' must be an object", path)

        extensions = dict(raw.get("vendorExtensions") or {})
        override = extensions.pop(DISCRIMINATOR_VALUE_EXTENSION, None)

        return Entity(
            name=name,
            description=raw.get("description"),
            properties=[self._parse_property(p, f"{path}/properties/{i}") for i, p in enumerate(raw.get("properties", []))],
            parent=raw.get("parent"),
            discriminator=self._parse_discriminator(raw.get("discriminator")),
            imports=list(dict.fromkeys(raw.get("imports", []))),
            discriminator_value_override=None if override is None else str(override),
            vendor_extensions=extensions,
        )

    def _parse_property(self, raw: dict[str, Any], path: str) -> Property:
        if "name" not in raw:
            raise GraphLoadError("Property without a name", path)
        return Property(
            name=raw["name"],
            type_ref=self.parse_type(raw.get("type", "any")),
            required=raw.get("required", False),
            description=raw.get("description"),
            discriminator_value=raw.get("discriminatorValue"),
        )

    @staticmethod
    def _parse_discriminator(raw: dict[str, Any] | None) -> Discriminator | None:
        if not raw:
            return None
        return Discriminator(
            property_name=raw.get("propertyName", ""),
            mapped_models=[MappedModel(mapping_name=k, model_name=v) for k, v in (raw.get("mapping") or {}).items()],
        )

    def _parse_bundle(self, raw: dict[str, Any], path: str) -> OperationsBundle:
        return OperationsBundle(
            class_name=raw.get("className", ""),
            operations=[self._parse_operation(op, f"{path}/operations/{i}") for i, op in enumerate(raw.get("operations", []))],
            imports=[
                OperationImport(classname=im["classname"], import_path=im.get("import"))
                for im in raw.get("imports", [])
            ],
        )

    def _parse_consumes(self, raw: list[dict[str, Any]], path: str) -> list[MediaType]:
        consumes = []
        for i, c in enumerate(raw):
            if "mediaType" not in c:
                raise GraphLoadError("Consumes entry without a mediaType", f"{path}/{i}")
            consumes.append(MediaType(media_type=c["mediaType"], is_json=c.get("isJson", False)))
        return consumes

    def _parse_operation(self, raw: dict[str, Any], path: str) -> Operation:
        parameters = [self._parse_parameter(p, f"{path}/parameters/{i}") for i, p in enumerate(raw.get("parameters", []))]
        consumes = raw.get("consumes")
        return Operation(
            name=raw.get("operationId", ""),
            http_method=raw.get("httpMethod", "GET").upper(),
            path=raw.get("path", ""),
            parameters=parameters,
            has_body_param=raw.get(
                "hasBodyParam", any(p.location == ParameterLocation.BODY for p in parameters)
            ),
            has_form_params=raw.get(
                "hasFormParams", any(p.location == ParameterLocation.FORM for p in parameters)
            ),
            consumes=None if consumes is None else self._parse_consumes(consumes, f"{path}/consumes"),
            has_consumes=bool(consumes),
            imports=list(raw.get("imports", [])),
        )

    def _parse_parameter(self, raw: dict[str, Any], path: str) -> Parameter:
        try:
            location = ParameterLocation(raw.get("in", "query"))
        except ValueError:
            raise GraphLoadError(f"Unknown parameter location '{raw.get('in')}'", path) from None
        return Parameter(
            name=raw.get("name", ""),
            location=location,
            type_ref=self.parse_type(raw.get("type", "any")),
            required=raw.get("required", False),
        )


def _entity_to_dict(entity: Entity) -> dict[str, Any]:
    vendor_extensions = dict(entity.vendor_extensions)
    if entity.discriminator_value_override is not None:
        vendor_extensions[DISCRIMINATOR_VALUE_EXTENSION] = entity.discriminator_value_override
    result: dict[str, Any] = {
        "classname": entity.name,
        "description": entity.description,
        "parent": entity.parent,
        "vars": [
            {
                "baseName": prop.name,
                "dataType": prop.type_ref.to_type_string(),
                "required": prop.required,
                "description": prop.description,
                "discriminatorValue": prop.discriminator_value,
            }
            for prop in entity.properties
        ],
        "children": [child.name for child in entity.children],
        "imports": list(entity.imports),
        "vendorExtensions": vendor_extensions,
    }
    if entity.discriminator is not None:
        result["discriminator"] = {
            "propertyName": entity.discriminator.property_name,
            "mappedModels": [
                {"mappingName": m.mapping_name, "modelName": m.model_name} for m in entity.discriminator.mapped_models
            ],
        }
    return {
        "model": result,
        "tsImports": [{"classname": im.classname, "filename": im.filename} for im in entity.ts_imports],
        "taggedUnions": entity.tagged_unions,
    }


def _operation_to_dict(operation: Operation) -> dict[str, Any]:
    return {
        "operationId": operation.name,
        "httpMethod": operation.http_method,
        "path": operation.path,
        "allParams": [
            {"paramName": p.name, "in": p.location.value, "dataType": p.type_ref.to_type_string(), "required": p.required}
            for p in operation.parameters
        ],
        "hasBodyParam": operation.has_body_param,
        "hasFormParams": operation.has_form_params,
        "consumes": [{"isJson": c.is_json, "mediaType": c.media_type} for c in operation.consumes or []],
        "hasConsumes": operation.has_consumes,
        "imports": list(operation.imports),
    }


def dump_document(
    graph: ModelGraph,
    bundles: list[OperationsBundle],
    config: CodeGeneratorConfig,
    command_line: str | None = None,
) -> dict[str, Any]:
    """Render the post processed graph as the renderer's input document."""
    document: dict[str, Any] = {
        "additionalProperties": config.to_dict(),
        "supportingFiles": supporting_files(config),
        "models": [_entity_to_dict(entity) for entity in graph.entities],
        "apis": [
            {
                "classname": bundle.class_name,
                "filename": bundle.api_filename,
                "operations": [_operation_to_dict(op) for op in bundle.operations],
                "imports": [
                    {"classname": im.classname, "import": im.import_path, "filename": im.filename}
                    for im in bundle.imports
                ],
            }
            for bundle in bundles
        ],
    }
    if command_line:
        document["generatedBy"] = command_line
    return document
