"""
Orchestration of a render run: config, processor, variables, output checks.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List

from .config import load_config
from .errors import RerenderUserError
from .template import TemplateProcessingError, create_template_processor
from .types import RunOptions
from .variables import build_variables

logger = logging.getLogger(__name__)

STDIN_TARGET = "-"


def run_render(root: Path, target: str, options: RunOptions) -> str:
    """
    Renders a template of the project at root.

    Args:
        root: Project root (holds rerender.yaml and the templates directory)
        target: Template name under the templates directory, or "-" for stdin
        options: Run options

    Returns:
        Final rendered text

    Raises:
        RerenderUserError: Config, data, or JSON check failures
        jinja2.TemplateError: Errors of the host engine, unmodified
    """
    config = load_config(root)
    processor = create_template_processor(config, root)
    variables = build_variables(root, config, options)

    if target == STDIN_TARGET:
        try:
            text = sys.stdin.read()
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateProcessingError(f"Failed to read template from stdin: {e}", "<stdin>", e)
        result = processor.process_template_text(text, variables, "<stdin>")
    else:
        result = processor.process_template_file(target, variables)

    logger.debug("Rendered '%s' -> %d chars", target, len(result))

    if options.check_json:
        _check_json(result, target)

    return result


def _check_json(text: str, target: str) -> None:
    try:
        json.loads(text)
    except json.JSONDecodeError as e:
        raise RerenderUserError(f"Rendered output of '{target}' is not valid JSON: {e}")


def list_plugins(root: Path) -> List[str]:
    """Names of the plugins installed for the project at root."""
    processor = create_template_processor(load_config(root), root)
    return processor.registry.list_plugins()


def list_tags(root: Path) -> List[str]:
    """Block tags available to templates of the project at root."""
    processor = create_template_processor(load_config(root), root)
    return processor.registry.list_tags()


__all__ = ["run_render", "list_plugins", "list_tags", "STDIN_TARGET"]
