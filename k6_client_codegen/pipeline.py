"""
Post processing pipeline.

Runs in two phases once the schema has been parsed:

1. Models: tagged union rewriting and per-model import descriptors
2. Operations: path templates, inferred content types and API imports

The second phase relies on the first one having rewritten the models.
"""

from __future__ import annotations

import copy
import logging

from .analyzer import (
    DiscriminatorPropagator,
    ImportSetBuilder,
    NameResolver,
    OperationPostProcessor,
    UnionRewriter,
)
from .config import CodeGeneratorConfig
from .model.nodes import ModelGraph, OperationsBundle

logger = logging.getLogger(__name__)


class PostProcessor:
    """Prepares a parsed model graph for rendering."""

    def __init__(self, config: CodeGeneratorConfig | None = None):
        """
        Initialize the post processor.

        Args:
            config: Generator configuration, validated here before any model
                is touched

        Raises:
            ConfigurationError: If an option holds an invalid value
        """
        self.config = config or CodeGeneratorConfig()
        self.config.validate()

        self.name_resolver = NameResolver(self.config)
        self.import_builder = ImportSetBuilder(self.name_resolver)
        self.union_rewriter = UnionRewriter(self.import_builder, DiscriminatorPropagator())
        self.operation_processor = OperationPostProcessor(self.name_resolver)

    def post_process_all_models(self, graph: ModelGraph) -> ModelGraph:
        """
        Phase 1: rewrite the models.

        Args:
            graph: The parsed model graph, left untouched

        Returns:
            A rewritten copy of the graph
        """
        result = copy.deepcopy(graph)
        self.union_rewriter.rewrite(result, self.config.tagged_unions)

        for entity in result.entities:
            entity.tagged_unions = self.config.tagged_unions
            entity.ts_imports = self.import_builder.build(entity)

        logger.debug("Post processed %d models", len(result.entities))
        return result

    def post_process_operations_with_models(self, bundle: OperationsBundle, models: ModelGraph) -> OperationsBundle:
        """Phase 2: prepare the operations of one API (modified in place)."""
        return self.operation_processor.process(bundle, models)

    def run(self, graph: ModelGraph, bundles: list[OperationsBundle]) -> tuple[ModelGraph, list[OperationsBundle]]:
        """Run both phases, models first."""
        models = self.post_process_all_models(graph)
        processed = [self.post_process_operations_with_models(bundle, models) for bundle in bundles]
        return models, processed
