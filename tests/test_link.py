"""
Tests for pkgscout.link module.

Tests symlink management including:
- Linking man pages, completions and docs into a prefix
- Relative link targets
- Stale link replacement and conflict reporting
- Unlinking and empty directory cleanup
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pkgscout.link import (
    link_completions,
    link_docs,
    link_manpages,
    link_src_dst_dirs,
    unlink_completions,
    unlink_docs,
    unlink_manpages,
    unlink_src_dst_dirs,
)


@pytest.fixture
def package_dir(tmp_test_dir: Path) -> Path:
    """A package directory shipping man pages, completions and docs."""
    pkg = tmp_test_dir / "opt" / "tool"
    (pkg / "manpages").mkdir(parents=True)
    (pkg / "manpages" / "tool.1").write_text(".TH TOOL 1\n")
    for shell, name in (("bash", "tool"), ("zsh", "_tool"), ("fish", "tool.fish")):
        (pkg / "completions" / shell).mkdir(parents=True)
        (pkg / "completions" / shell / name).write_text(f"# {shell}\n")
    (pkg / "docs").mkdir()
    (pkg / "docs" / "README.md").write_text("# tool\n")
    return pkg


@pytest.fixture
def prefix(tmp_test_dir: Path) -> Path:
    p = tmp_test_dir / "prefix"
    p.mkdir()
    return p


class TestLinkSrcDstDirs:
    """Tests for link_src_dst_dirs()."""

    def test_missing_source_is_noop(self, tmp_test_dir):
        result = link_src_dst_dirs(tmp_test_dir / "nope", tmp_test_dir / "dst", "cmd")

        assert result.linked == []
        assert not (tmp_test_dir / "dst").exists()

    def test_links_are_relative(self, tmp_test_dir):
        src = tmp_test_dir / "src"
        (src / "nested").mkdir(parents=True)
        (src / "a").write_text("a")
        (src / "nested" / "b").write_text("b")
        dst = tmp_test_dir / "dst"

        result = link_src_dst_dirs(src, dst, "cmd")

        assert sorted(result.linked) == [dst / "a", dst / "nested" / "b"]
        assert not os.path.isabs(os.readlink(dst / "a"))
        assert (dst / "nested" / "b").read_text() == "b"

    def test_relinking_is_noop(self, tmp_test_dir):
        """Test that links already pointing at the source are kept."""
        src = tmp_test_dir / "src"
        src.mkdir()
        (src / "a").write_text("a")
        dst = tmp_test_dir / "dst"

        link_src_dst_dirs(src, dst, "cmd")
        result = link_src_dst_dirs(src, dst, "cmd")

        assert result.linked == []
        assert result.removed == []
        assert (dst / "a").is_symlink()

    def test_stale_link_replaced(self, tmp_test_dir):
        src = tmp_test_dir / "src"
        src.mkdir()
        (src / "a").write_text("new")
        old = tmp_test_dir / "old"
        old.write_text("old")
        dst = tmp_test_dir / "dst"
        dst.mkdir()
        (dst / "a").symlink_to(old)

        result = link_src_dst_dirs(src, dst, "cmd")

        assert result.removed == [dst / "a"]
        assert result.linked == [dst / "a"]
        assert (dst / "a").read_text() == "new"

    def test_conflict_reported_and_skipped(self, tmp_test_dir, capsys):
        """Test that real files are left in place and reported."""
        src = tmp_test_dir / "src"
        src.mkdir()
        (src / "a").write_text("a")
        (src / "b").write_text("b")
        dst = tmp_test_dir / "dst"
        dst.mkdir()
        (dst / "a").write_text("mine")

        result = link_src_dst_dirs(src, dst, "tool setup")

        assert result.conflicts == [dst / "a"]
        assert result.linked == [dst / "b"]
        assert (dst / "a").read_text() == "mine"

        err = capsys.readouterr().err
        assert "Could not link:" in err
        assert str(dst / "a") in err
        assert "Please delete these paths and run:\n  tool setup" in err


class TestUnlinkSrcDstDirs:
    """Tests for unlink_src_dst_dirs()."""

    def test_removes_own_links_and_empty_dirs(self, tmp_test_dir):
        src = tmp_test_dir / "src"
        (src / "nested").mkdir(parents=True)
        (src / "nested" / "b").write_text("b")
        dst = tmp_test_dir / "dst"
        link_src_dst_dirs(src, dst, "cmd")

        result = unlink_src_dst_dirs(src, dst)

        assert result.removed == [dst / "nested" / "b"]
        assert not (dst / "nested").exists()

    def test_foreign_files_untouched(self, tmp_test_dir):
        src = tmp_test_dir / "src"
        src.mkdir()
        (src / "a").write_text("a")
        other = tmp_test_dir / "other"
        other.write_text("other")
        dst = tmp_test_dir / "dst"
        dst.mkdir()
        (dst / "a").symlink_to(other)

        result = unlink_src_dst_dirs(src, dst)

        assert result.removed == []
        assert (dst / "a").is_symlink()


class TestPackageLinks:
    """Tests for the man page, completion and doc wrappers."""

    def test_manpages(self, package_dir, prefix):
        result = link_manpages(package_dir, prefix, "tool setup")

        assert result.linked == [prefix / "share/man/man1/tool.1"]

        unlink_manpages(package_dir, prefix)
        assert not (prefix / "share/man/man1").exists()

    def test_completions(self, package_dir, prefix):
        result = link_completions(package_dir, prefix, "tool setup")

        assert sorted(result.linked) == sorted(
            [
                prefix / "etc/bash_completion.d/tool",
                prefix / "share/zsh/site-functions/_tool",
                prefix / "share/fish/vendor_completions.d/tool.fish",
            ]
        )

        removed = unlink_completions(package_dir, prefix)
        assert len(removed.removed) == 3

    def test_missing_shell_is_skipped(self, package_dir, prefix):
        (package_dir / "completions" / "fish" / "tool.fish").unlink()
        (package_dir / "completions" / "fish").rmdir()

        result = link_completions(package_dir, prefix, "tool setup")

        assert len(result.linked) == 2

    def test_docs_link_whole_directory(self, package_dir, prefix):
        result = link_docs(package_dir, prefix, "tool setup", name="tool")

        doc_link = prefix / "share/doc/tool"
        assert result.linked == [doc_link]
        assert doc_link.is_symlink()
        assert (doc_link / "README.md").read_text() == "# tool\n"

        unlink_docs(package_dir, prefix, name="tool")
        assert not doc_link.exists()
