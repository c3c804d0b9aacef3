"""htmx-starter scaffolder -- resolves, copies and bootstraps stack templates.

Quick usage::

    from htmx_starter.scaffolder import StackIdentifier, copy_tree, resolve

    spec = resolve(StackIdentifier.GO)
    outcome = await copy_tree(spec.source(templates_root), Path.cwd())
"""

from htmx_starter.scaffolder.bootstrap import BootstrapRunner, StepResult
from htmx_starter.scaffolder.materializer import CopyOutcome, copy_tree
from htmx_starter.scaffolder.registry import (
    REGISTRY,
    BootstrapStep,
    RunCommand,
    StackIdentifier,
    TemplateSpec,
    WriteFile,
    build_registry,
    resolve,
)
from htmx_starter.scaffolder.selector import parse_selection, select_stack

__all__ = [
    "BootstrapRunner",
    "BootstrapStep",
    "CopyOutcome",
    "REGISTRY",
    "RunCommand",
    "StackIdentifier",
    "StepResult",
    "TemplateSpec",
    "WriteFile",
    "build_registry",
    "copy_tree",
    "parse_selection",
    "resolve",
    "select_stack",
]
