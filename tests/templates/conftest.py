"""Pytest fixtures for templates adapter tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import typing as t

if t.TYPE_CHECKING:
    from berlioz_twig.templates import TemplatesAdapter, TwigExtension


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Create temporary template directory."""
    template_dir = tmp_path / "templates"
    template_dir.mkdir()
    return template_dir


@pytest.fixture
def templates(template_dir: Path, extension: TwigExtension) -> TemplatesAdapter:
    """Create templates adapter with the Berlioz helpers installed."""
    from berlioz_twig.templates import TemplatesAdapter

    adapter = TemplatesAdapter(template_dir=template_dir)
    adapter.add_extension(extension)
    return adapter


@pytest.fixture
def page_template(template_dir: Path) -> Path:
    """Template using every helper."""
    template_file = template_dir / "page.html"
    template_file.write_text(
        """<html>
<head>
  <link rel="stylesheet" href="{{ preload(asset('app.css'), as='style') }}">
</head>
<body>
  <a href="{{ path('article', {'id': article.id}) }}">{{ article.title|truncate(8) }}</a>
  <time>{{ article.published|date_format }}</time>
  {{ article.body|nl2p }}
  <span>{{ article.size|human_file_size }}</span>
</body>
</html>"""
    )
    return template_file
