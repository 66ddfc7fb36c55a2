"""podscratch: a headless, frame-driven interpreter for Scratch-style block scripts."""

from .blocks import Block, BlockContext, BlockKind, BlockRegistry
from .config import Options, load_options
from .diagnostics import Diagnostic, DiagnosticCollector, DiagnosticContext, DiagnosticLevel
from .environment import Environment, register_pod_class
from .errors import (
    AssemblyError,
    BlockArgumentError,
    BlockExecutionError,
    ConfigError,
    ExecutionError,
    PodError,
    ProjectError,
    ScriptStructureError,
)
from .pod import Pod, ScratchPod
from .project_io import build_project, dump_state, load_project, save_state
from .resources import ListVariable, Resource, Sprite, Stage, Variable
from .script import Script, ScriptBuilder

__all__ = [
    "AssemblyError",
    "Block",
    "BlockArgumentError",
    "BlockExecutionError",
    "BlockContext",
    "BlockKind",
    "BlockRegistry",
    "ConfigError",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticContext",
    "DiagnosticLevel",
    "Environment",
    "ExecutionError",
    "ListVariable",
    "Options",
    "Pod",
    "PodError",
    "ProjectError",
    "Resource",
    "ScratchPod",
    "Script",
    "ScriptBuilder",
    "ScriptStructureError",
    "Sprite",
    "Stage",
    "Variable",
    "build_project",
    "dump_state",
    "load_options",
    "load_project",
    "register_pod_class",
    "save_state",
]
