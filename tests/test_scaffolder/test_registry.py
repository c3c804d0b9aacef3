"""Unit tests for the template registry (htmx_starter.scaffolder.registry).

Tests cover:
- StackIdentifier order, labels and colours
- resolve totality over every stack
- Bootstrap recipes for Go and TypeScript
- build_registry totality and duplicate checks
- BootstrapStep models (argv substitution, discriminated parsing, immutability)
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import TypeAdapter, ValidationError

from htmx_starter.scaffolder.registry import (
    REGISTRY,
    TSCONFIG_JSON,
    BootstrapStep,
    RunCommand,
    StackIdentifier,
    TemplateSpec,
    WriteFile,
    build_registry,
    resolve,
)

pytestmark = pytest.mark.unit


class TestStackIdentifier:
    def test_enumeration_order(self):
        assert list(StackIdentifier) == [
            StackIdentifier.RUST,
            StackIdentifier.GO,
            StackIdentifier.TYPESCRIPT,
        ]

    def test_labels(self):
        assert [s.label for s in StackIdentifier] == ["Rust", "Go", "TypeScript"]

    def test_colors_are_rich_rgb_styles(self):
        for stack in StackIdentifier:
            assert stack.color.startswith("rgb(")

    def test_values(self):
        assert StackIdentifier("go") is StackIdentifier.GO


class TestResolve:
    @pytest.mark.parametrize("stack", list(StackIdentifier))
    def test_every_stack_resolves(self, stack: StackIdentifier):
        spec = resolve(stack)
        assert isinstance(spec, TemplateSpec)
        assert spec.stack is stack
        assert spec.template_dir

    def test_registry_is_total(self):
        assert set(REGISTRY) == set(StackIdentifier)

    def test_source_joins_templates_root(self, tmp_path: Path):
        spec = resolve(StackIdentifier.GO)
        assert spec.source(tmp_path) == tmp_path / "go"

    def test_custom_registry(self):
        custom = build_registry([
            TemplateSpec(stack=StackIdentifier.RUST, template_dir="r"),
            TemplateSpec(stack=StackIdentifier.GO, template_dir="g"),
            TemplateSpec(stack=StackIdentifier.TYPESCRIPT, template_dir="t"),
        ])
        assert resolve(StackIdentifier.GO, custom).template_dir == "g"

    def test_bundled_templates_exist(self):
        from htmx_starter.config import BUNDLED_TEMPLATES_DIR

        for stack in StackIdentifier:
            assert resolve(stack).source(BUNDLED_TEMPLATES_DIR).is_dir()


class TestRecipes:
    def test_rust_has_no_bootstrap(self):
        assert resolve(StackIdentifier.RUST).steps == ()

    def test_go_runs_mod_init_with_project_name(self):
        steps = resolve(StackIdentifier.GO).steps
        assert len(steps) == 1
        assert isinstance(steps[0], RunCommand)
        assert steps[0].argv("go_template") == ["go", "mod", "init", "go_template"]

    def test_typescript_order(self):
        steps = resolve(StackIdentifier.TYPESCRIPT).steps
        assert [type(s) for s in steps] == [RunCommand, WriteFile, RunCommand, RunCommand]
        assert steps[0].argv("x") == ["npm", "init", "-y"]
        assert steps[1].path == "tsconfig.json"
        assert steps[2].argv("x")[:3] == ["npm", "install", "--save-dev"]
        assert steps[3].argv("x") == ["npm", "install", "express", "@preact/signals-core"]

    def test_typescript_dev_dependencies(self):
        dev = resolve(StackIdentifier.TYPESCRIPT).steps[2]
        assert set(dev.args[2:]) == {"typescript", "@types/node", "@types/express", "nodemon"}

    def test_tsconfig_literal_is_valid_json(self):
        options = json.loads(TSCONFIG_JSON)["compilerOptions"]
        assert options["target"] == "es6"
        assert options["module"] == "commonjs"
        assert options["strict"] is True


class TestBuildRegistry:
    def test_missing_stack_raises(self):
        with pytest.raises(RuntimeError, match="TypeScript"):
            build_registry([
                TemplateSpec(stack=StackIdentifier.RUST, template_dir="rust"),
                TemplateSpec(stack=StackIdentifier.GO, template_dir="go"),
            ])

    def test_duplicate_stack_raises(self):
        with pytest.raises(RuntimeError, match="Duplicate"):
            build_registry([
                TemplateSpec(stack=StackIdentifier.RUST, template_dir="a"),
                TemplateSpec(stack=StackIdentifier.RUST, template_dir="b"),
            ])

    def test_empty_raises(self):
        with pytest.raises(RuntimeError, match="No template registered"):
            build_registry([])


class TestBootstrapSteps:
    def test_placeholder_only_substituted_in_args(self):
        step = RunCommand(executable="tool", args=("--name={project_name}", "plain"))
        assert step.argv("demo") == ["tool", "--name=demo", "plain"]

    def test_summary_defaults(self):
        assert RunCommand(executable="npm", args=("init", "-y")).summary == "npm init -y"
        assert WriteFile(path="a.txt", content="").summary == "write a.txt"

    def test_summary_prefers_description(self):
        step = RunCommand(executable="go", description="initialise module")
        assert step.summary == "initialise module"

    def test_discriminated_parsing(self):
        adapter = TypeAdapter(BootstrapStep)
        step = adapter.validate_python({"kind": "write", "path": "x", "content": "y"})
        assert isinstance(step, WriteFile)
        step = adapter.validate_python({"kind": "run", "executable": "go"})
        assert isinstance(step, RunCommand)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(BootstrapStep).validate_python({"kind": "delete", "path": "x"})

    def test_steps_are_immutable(self):
        step = RunCommand(executable="go")
        with pytest.raises(ValidationError):
            step.executable = "rm"

    def test_empty_executable_rejected(self):
        with pytest.raises(ValidationError):
            RunCommand(executable="")
