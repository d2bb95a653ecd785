"""Route definitions: the ``API`` schema builder and its declarative form."""

from .builder import API, DefinitionParent
from .loader import define_apis, definition_options, extract_validation_error
from .models import APIDefinitionModel, APIInfoModel, ExampleModel
from .utils import SUPPORTED_METHODS, compile_path, get_schema_key

__all__ = [
    "API",
    "APIDefinitionModel",
    "APIInfoModel",
    "DefinitionParent",
    "ExampleModel",
    "SUPPORTED_METHODS",
    "compile_path",
    "define_apis",
    "definition_options",
    "extract_validation_error",
    "get_schema_key",
]
