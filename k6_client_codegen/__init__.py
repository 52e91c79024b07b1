"""k6 client code generator post processor

Prepares the model graph of a parsed API schema for the typescript-k6
templates: file names and imports of models, tagged union variants,
discriminator values, request path templates and request content types.
"""

__version__ = "1.0.0"

from .config import CodeGeneratorConfig, FileNaming
from .errors import ConfigurationError, GraphLoadError
from .loader import GraphLoader, dump_document
from .pipeline import PostProcessor

__all__ = [
    "PostProcessor",
    "CodeGeneratorConfig",
    "FileNaming",
    "ConfigurationError",
    "GraphLoadError",
    "GraphLoader",
    "dump_document",
]
