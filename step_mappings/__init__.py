"""Generate a typed sentence-to-function module from annotated BDD steps.

Step functions announce their sentences in docstrings (``@given ("...")``);
:func:`generate` scans the step modules and writes a module exposing one
mapping and one ``typing.Literal`` key type per step kind.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .annotations import extract_sentence, split_doc_comments
from .collector import DefaultNameCounter, collect, find_step_files
from .config import GeneratorConfig, load_config
from .errors import (
    ConfigurationError,
    MalformedAnnotationError,
    StepFileError,
    StepMappingsError,
)
from .exports import discover_exported_functions
from .generator import MappingFileBuilder, generate, render_mapping_file
from .models import ExportedFunctionInfo, StepKind, StepMapping
from .renderer import render

__all__ = [
    "ConfigurationError",
    "DefaultNameCounter",
    "ExportedFunctionInfo",
    "GeneratorConfig",
    "MalformedAnnotationError",
    "MappingFileBuilder",
    "StepFileError",
    "StepKind",
    "StepMapping",
    "StepMappingsError",
    "__version__",
    "collect",
    "discover_exported_functions",
    "extract_sentence",
    "find_step_files",
    "generate",
    "load_config",
    "render",
    "render_mapping_file",
    "split_doc_comments",
]
