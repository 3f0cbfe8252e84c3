import textwrap
from pathlib import Path

import pytest

from rerender.template import create_template_processor

from tests.infrastructure.file_utils import write


@pytest.fixture
def processor():
    """Processor with default configuration and no project root."""
    return create_template_processor()


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Minimal project: rerender.yaml, a data file and two templates."""
    root = tmp_path
    write(
        root / "rerender.yaml",
        textwrap.dedent("""
        templates: templates
        data:
          - data/site.yaml
        """).strip() + "\n",
    )
    write(
        root / "data" / "site.yaml",
        textwrap.dedent("""
        site:
          title: Docs
        count: 3
        """).strip() + "\n",
    )
    write(
        root / "templates" / "page.json.j2",
        '{% render %}{"title": "{{ "{{ site.title }}" }}", "count": {{ count }}, '
        '"who": "{{ "{{ who }}" }}"}{% endrender %}',
    )
    write(root / "templates" / "broken.j2", '{% render %}{{ "{{ oops" }}{% endrender %}')
    return root
