"""Unit tests for template-only content removal (configure_package.templating.cleanup)."""

from __future__ import annotations

from pathlib import Path

import pytest

from configure_package.templating import (
    remove_directory,
    remove_template_readme_text,
    strip_template_block,
)

START = "<!-- ==START TEMPLATE README== -->"
END = "<!-- ==END TEMPLATE README== -->"


class TestStripTemplateBlock:
    @pytest.mark.unit
    def test_removes_block_inclusive(self):
        text = f"# Title\n{START}\ntemplate text\n{END}\nrest\n"
        assert strip_template_block(text, START, END) == "# Title\n\nrest\n"

    @pytest.mark.unit
    def test_first_start_to_last_end(self):
        text = f"a{START}x{END}b{START}y{END}c"
        assert strip_template_block(text, START, END) == "ac"

    @pytest.mark.unit
    def test_missing_end_marker_leaves_text(self):
        text = f"a{START}b"
        assert strip_template_block(text, START, END) == text

    @pytest.mark.unit
    def test_markers_reversed_leaves_text(self):
        text = f"a{END}b{START}c"
        assert strip_template_block(text, START, END) == text


class TestRemoveTemplateReadmeText:
    @pytest.mark.unit
    def test_rewrites_readme(self, tmp_path: Path):
        readme = tmp_path / "README.md"
        readme.write_text(f"# Pkg\n{START}\nremove\n{END}\n", encoding="utf-8")

        assert remove_template_readme_text(readme, START, END) is True
        assert readme.read_text(encoding="utf-8") == "# Pkg\n\n"

    @pytest.mark.unit
    def test_result_empty_skips_write(self, tmp_path: Path):
        readme = tmp_path / "README.md"
        original = f"{START}only template{END}"
        readme.write_text(original, encoding="utf-8")

        assert remove_template_readme_text(readme, START, END) is False
        assert readme.read_text(encoding="utf-8") == original

    @pytest.mark.unit
    def test_missing_readme(self, tmp_path: Path):
        assert remove_template_readme_text(tmp_path / "README.md", START, END) is False


class TestRemoveDirectory:
    @pytest.mark.unit
    def test_removes_nested_tree(self, tmp_path: Path):
        assets = tmp_path / "assets"
        (assets / "img" / "deep").mkdir(parents=True)
        (assets / "img" / "deep" / "a.png").write_bytes(b"\x89PNG")
        (assets / "logo.svg").write_text("<svg/>")

        assert remove_directory(assets) is True
        assert not assets.exists()

    @pytest.mark.unit
    def test_missing_directory_is_noop(self, tmp_path: Path):
        assert remove_directory(tmp_path / "assets") is False
