"""
Operation post processor.

Prepares the operations of an API for the API template: request paths become
template literals, request content types are inferred when the schema gave
none, and model imports get the fields the template reads.
"""

from __future__ import annotations

import logging
import re

from ..model.nodes import MediaType, ModelGraph, Operation, OperationsBundle
from .name_resolver import NameResolver

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"

# A "{" not already opened by "$"; rewriting an already templated path is a no-op
_PLACEHOLDER_OPEN = re.compile(r"(?<!\$)\{")


def to_template_path(path: str) -> str:
    """Turn "/pets/{petId}" into the template literal body "/pets/${petId}"."""
    return _PLACEHOLDER_OPEN.sub("${", path)


def infer_consumes(operation: Operation) -> MediaType:
    """The request content type implied by an operation's parameters."""
    return MediaType(
        media_type=FORM_MEDIA_TYPE if operation.has_form_params else JSON_MEDIA_TYPE,
        is_json=operation.has_body_param and not operation.has_form_params,
    )


class OperationPostProcessor:
    """Post processes the operations of an API."""

    def __init__(self, name_resolver: NameResolver):
        self.name_resolver = name_resolver

    def process(self, bundle: OperationsBundle, models: ModelGraph | None = None) -> OperationsBundle:
        """
        Post process the operations of one API.

        Args:
            bundle: Operations and imports of the API, modified in place
            models: The already post processed models; read only, the k6
                templates need nothing from them here

        Returns:
            The same bundle
        """
        for operation in bundle.operations:
            self._process_operation(operation)

        for im in bundle.imports:
            if im.import_path is None:
                im.import_path = self.name_resolver.to_model_import(im.classname)
            # Kept for templates still reading "filename"
            im.filename = im.import_path

        bundle.api_filename = self.name_resolver.to_api_filename(bundle.class_name)
        return bundle

    def _process_operation(self, operation: Operation) -> None:
        operation.path = to_template_path(operation.path)

        if not operation.has_body_or_form_params:
            return
        if operation.consumes is None:
            operation.consumes = []
        if not operation.consumes:
            operation.consumes.append(infer_consumes(operation))
            operation.has_consumes = True
            logger.debug("%s consumes %s (inferred)", operation.name, operation.consumes[0].media_type)
