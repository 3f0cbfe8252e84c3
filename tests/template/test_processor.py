"""
Tests for TemplateProcessor and create_template_processor.
"""

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound, StrictUndefined

from rerender.config import EngineConfig
from rerender.template import TemplateProcessingError, TemplateProcessor, TemplateRegistry, create_template_processor
from rerender.template.processor import load_plugin
from rerender.template.render_block import RenderBlockPlugin

from tests.infrastructure.file_utils import write
from tests.infrastructure.plugins import UpperPlugin


class TestTemplateProcessor:

    def test_init(self):
        registry = TemplateRegistry()
        processor = TemplateProcessor(EngineConfig(), registry)

        assert processor.registry is registry
        assert processor.env.template_registry is registry
        assert processor.env.loader is None
        assert len(processor._template_cache) == 0

    def test_environment_options_from_config(self, tmp_path: Path):
        config = EngineConfig(strict_undefined=True, trim_blocks=True, keep_trailing_newline=False)

        processor = TemplateProcessor(config, TemplateRegistry(), tmp_path)

        assert processor.env.undefined is StrictUndefined
        assert processor.env.trim_blocks is True
        assert processor.env.keep_trailing_newline is False
        assert processor.env.loader.searchpath == [str((tmp_path / "templates").resolve())]

    def test_process_template_text_simple_text(self, processor):
        assert processor.process_template_text("Hello, world!") == "Hello, world!"

    def test_process_template_text_with_variables(self, processor):
        assert processor.process_template_text("Hi {{ name }}", {"name": "Ann"}) == "Hi Ann"

    def test_compiled_templates_are_cached(self, processor):
        processor.process_template_text("{{ a }}", {"a": 1}, "t")
        processor.process_template_text("{{ a }}", {"a": 2}, "t")

        assert len(processor._template_cache) == 1

    def test_cache_is_bounded(self):
        processor = create_template_processor(EngineConfig(cache_size=2))

        for i in range(5):
            processor.process_template_text(f"text {i}")

        assert len(processor._template_cache) == 2

    def test_process_template_file(self, tmp_path: Path):
        write(tmp_path / "templates" / "sub" / "page.txt", "{% render %}{{ '{{ x }}' }}{% endrender %}\n")
        processor = create_template_processor(root=tmp_path)

        result = processor.process_template_file("sub/page.txt", {"x": "5"})

        assert result == "5\n"

    def test_process_template_file_missing(self, tmp_path: Path):
        processor = create_template_processor(root=tmp_path)

        with pytest.raises(TemplateNotFound):
            processor.process_template_file("nope.txt")

    def test_process_template_file_without_root(self, processor):
        with pytest.raises(TemplateProcessingError, match="No templates directory"):
            processor.process_template_file("page.txt")

    def test_process_template_file_not_utf8(self, tmp_path: Path):
        (tmp_path / "templates").mkdir()
        (tmp_path / "templates" / "bin.txt").write_bytes(b"\xff\xfe\xfa")
        processor = create_template_processor(root=tmp_path)

        with pytest.raises(TemplateProcessingError) as exc_info:
            processor.process_template_file("bin.txt")

        assert exc_info.value.template_name == "bin.txt"
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)


class TestCreateTemplateProcessor:

    def test_default_plugins(self):
        processor = create_template_processor()

        assert processor.registry.list_plugins() == ["render_block"]

    def test_plugins_initialized(self):
        processor = create_template_processor()

        plugin = processor.registry.plugins[0]
        assert plugin.handlers is processor.handlers

    def test_plugin_by_reference(self):
        config = EngineConfig(plugins=["render_block", "tests.infrastructure.plugins:UpperPlugin"])
        processor = create_template_processor(config)

        result = processor.process_template_text('{% upper %}{% render %}{{ "{{ w }}" }}{% endrender %}{% endupper %}', {"w": "hi"})

        assert result == "HI"

    def test_no_plugins(self):
        processor = create_template_processor(EngineConfig(plugins=[]))

        assert processor.registry.list_tags() == []

    def test_separate_processors_have_separate_registries(self):
        first = create_template_processor()
        second = create_template_processor(EngineConfig(plugins=["tests.infrastructure.plugins:UpperPlugin"]))

        assert first.registry is not second.registry
        assert first.registry.list_tags() == ["render"]
        assert second.registry.list_tags() == ["upper"]


class TestLoadPlugin:

    def test_builtin(self):
        assert isinstance(load_plugin("render_block"), RenderBlockPlugin)

    def test_reference(self):
        assert isinstance(load_plugin("tests.infrastructure.plugins:UpperPlugin"), UpperPlugin)

    def test_unknown_name(self):
        with pytest.raises(TemplateProcessingError, match="Unknown plugin 'nope'"):
            load_plugin("nope")

    def test_missing_module(self):
        with pytest.raises(TemplateProcessingError, match="Cannot import plugin module"):
            load_plugin("no_such_module_xyz:Plugin")

    def test_not_a_plugin_class(self):
        with pytest.raises(TemplateProcessingError, match="is not a TemplatePlugin class"):
            load_plugin("tests.infrastructure.plugins:NotAPlugin")

    def test_missing_class(self):
        with pytest.raises(TemplateProcessingError, match="is not a TemplatePlugin class"):
            load_plugin("tests.infrastructure.plugins:Missing")
