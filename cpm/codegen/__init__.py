"""
cpm.codegen: Manifest -> SDK source files.

    Manifest --(TypeMapper)--> ContractTemplate --(renderer)--> files --> OutputSink

- ``mappers``: per (language, mode) type tables and name conventions
- ``builder``: overload resolution and template construction
- ``render``: fixed per-language templates
- ``sink``: filesystem / in-memory output
- ``generate``: the driver tying them together
"""

from .builder import build_template, resolve_method_names
from .generate import GenerateConfig, generate_sdk, render_sdk
from .mappers import MAPPERS, TypeMapper, get_mapper
from .model import Argument, ContractTemplate, EventTemplate, MethodTemplate
from .render import RENDERERS, get_renderer, supported_targets
from .sink import FileSystemSink, MemorySink, OutputSink
from .targets import Language, SdkMode

__all__ = [
    "Language",
    "SdkMode",
    "TypeMapper",
    "MAPPERS",
    "get_mapper",
    "Argument",
    "MethodTemplate",
    "EventTemplate",
    "ContractTemplate",
    "build_template",
    "resolve_method_names",
    "RENDERERS",
    "get_renderer",
    "supported_targets",
    "OutputSink",
    "FileSystemSink",
    "MemorySink",
    "GenerateConfig",
    "generate_sdk",
    "render_sdk",
]
