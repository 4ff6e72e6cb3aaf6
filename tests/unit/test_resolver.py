"""Unit tests for import path resolution."""

from pathlib import Path

import pytest

from exports_cleanup.core.resolver import is_relative_specifier, resolve_import


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a small project tree."""
    src = tmp_path / "src"
    (src / "lib").mkdir(parents=True)
    (src / "a.ts").write_text("")
    (src / "b.ts").write_text("")
    (src / "lib" / "index.ts").write_text("")
    return tmp_path


class TestResolveImport:
    """Tests for resolve_import()."""

    def test_adds_extension(self, project: Path) -> None:
        """Test that an extensionless specifier finds the .ts file."""
        importer = project / "src" / "b.ts"
        assert resolve_import("./a", importer, project) == project / "src" / "a.ts"

    def test_literal_path_first(self, project: Path) -> None:
        """Test that a specifier naming an existing file is used as-is."""
        importer = project / "src" / "b.ts"
        assert resolve_import("./a.ts", importer, project) == project / "src" / "a.ts"

    def test_directory_index(self, project: Path) -> None:
        """Test that a directory specifier resolves to its index file."""
        importer = project / "src" / "b.ts"
        assert resolve_import("./lib", importer, project) == project / "src" / "lib" / "index.ts"

    def test_suffix_order_prefers_ts(self, project: Path) -> None:
        """Test that .ts wins over .js when both exist."""
        (project / "src" / "c.ts").write_text("")
        (project / "src" / "c.js").write_text("")
        importer = project / "src" / "b.ts"

        assert resolve_import("./c", importer, project) == project / "src" / "c.ts"

    def test_suffix_order_tsx_before_js(self, project: Path) -> None:
        """Test that .tsx wins over .js when both exist."""
        (project / "src" / "view.tsx").write_text("")
        (project / "src" / "view.js").write_text("")
        importer = project / "src" / "b.ts"

        assert resolve_import("./view", importer, project) == project / "src" / "view.tsx"

    def test_parent_directory(self, project: Path) -> None:
        """Test that `..` segments are normalized."""
        importer = project / "src" / "lib" / "index.ts"
        assert resolve_import("../a", importer, project) == project / "src" / "a.ts"

    def test_unresolved_returns_joined_base(self, project: Path) -> None:
        """Test that a missing module yields the joined path, not an error."""
        importer = project / "src" / "b.ts"
        assert resolve_import("./missing", importer, project) == project / "src" / "missing"

    def test_absolute_specifier_unresolved_verbatim(self, project: Path) -> None:
        """Test that a missing absolute specifier comes back as the joined path."""
        importer = project / "src" / "lib" / "index.ts"
        assert resolve_import("/nope/a", importer, project) == Path("/nope/a")

    def test_absolute_specifier_not_rooted_on_project(self, project: Path) -> None:
        """Test that `/src/a` is a filesystem path, not a project-relative one."""
        importer = project / "src" / "lib" / "index.ts"
        assert resolve_import("/src/a", importer, project) != project / "src" / "a.ts"

    def test_name_too_long_is_unresolved(self, project: Path) -> None:
        """Test that a path the filesystem rejects is treated as missing."""
        importer = project / "src" / "b.ts"
        specifier = "./" + "z" * 300

        assert resolve_import(specifier, importer, project) == project / "src" / ("z" * 300)

    def test_absolute_specifier_inside_root(self, project: Path) -> None:
        """Test that an absolute path already inside the root is kept."""
        importer = project / "src" / "b.ts"
        target = project / "src" / "a"
        assert resolve_import(str(target), importer, project) == project / "src" / "a.ts"


class TestIsRelativeSpecifier:
    """Tests for bare-specifier detection."""

    @pytest.mark.parametrize("specifier", ["./a", "../b", "/abs/c", "."])
    def test_relative(self, specifier: str) -> None:
        assert is_relative_specifier(specifier)

    @pytest.mark.parametrize("specifier", ["react", "@scope/pkg", "node:fs", "lodash/get"])
    def test_bare(self, specifier: str) -> None:
        assert not is_relative_specifier(specifier)
