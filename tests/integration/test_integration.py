"""Integration tests for scanning, the CLI, and the MCP handlers."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from exports_cleanup.cli import app
from exports_cleanup.core.analyzer import ExportAnalyzer, analyze
from exports_cleanup.core.config import ScanOptions
from exports_cleanup.core.discovery import find_source_files, should_exclude
from exports_cleanup.core.models import ExportKind

runner = CliRunner()


def write_files(root: Path, files: dict[str, str]) -> None:
    """Write a mapping of relative path -> content under root."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


@pytest.fixture
def root(tmp_path: Path) -> Path:
    return tmp_path.resolve()


@pytest.fixture
def sample_project(root: Path) -> Path:
    """Create a small project with used and unused exports."""
    write_files(
        root,
        {
            "src/utils.ts": """export function helper() {
  return 1;
}

export function unusedHelper() {
  return 2;
}

export const LIMIT = 10;
""",
            "src/app.ts": """import { helper, LIMIT } from './utils';
import render from './view';

export default function main() {
  return render(helper() + LIMIT);
}
""",
            "src/view.tsx": """export default function render(x: number) {
  return x;
}

export const unusedView = 1;
""",
        },
    )
    return root


class TestAnalyze:
    """End-to-end tests for analyze()."""

    def test_named_import_marks_export_used(self, root: Path) -> None:
        """Test that `import { helper }` consumes `export function helper`."""
        write_files(
            root,
            {
                "a.ts": "export function helper() {}\n",
                "b.ts": "import { helper } from './a';\n",
            },
        )
        report = analyze(root)

        record = report.files[0].records[0]
        assert record.export.name == "helper"
        assert not record.is_unused
        assert root / "b.ts" in record.consumer_files

    def test_default_import_ignores_names(self, root: Path) -> None:
        """Test that a default import matches the default export by flag."""
        write_files(
            root,
            {
                "a.ts": "export default function run(){}\n",
                "b.ts": "import go from './a';\n",
            },
        )
        report = analyze(root)

        record = report.files[0].records[0]
        assert record.export.is_default
        assert record.consumer_files == (root / "b.ts",)

    def test_bare_package_imports_ignored(self, root: Path) -> None:
        """Test that package imports never consume local exports."""
        write_files(
            root,
            {
                "react.ts": "export const x = 1;\n",
                "b.ts": "import { x } from 'react';\n",
            },
        )
        report = analyze(root)

        assert report.unused_exports == 1

    def test_three_unused_files(self, root: Path) -> None:
        """Test totals when nothing is imported."""
        write_files(
            root,
            {
                "one.ts": "export const one = 1;\n",
                "two.ts": "export function two() {}\n",
                "three.ts": "export class Three {}\n",
            },
        )
        report = analyze(root)

        assert report.total_exports == 3
        assert report.unused_exports == 3
        assert report.used_exports == 0
        sizes = [r.export.estimated_size_bytes for f in report.files for r in f.records]
        assert report.estimated_savings_bytes == sum(sizes)

    def test_type_exports_filtered_by_default(self, root: Path) -> None:
        """Test that an interface-only file disappears without include_types."""
        write_files(root, {"types.ts": "export interface Foo {}\n"})

        assert analyze(root).files == []
        assert analyze(root, ScanOptions(include_types=True)).total_exports == 1

    def test_imported_type_still_filtered(self, root: Path) -> None:
        """Test that filtered type exports are absent even when imported."""
        write_files(
            root,
            {
                "types.ts": "export type Id = string;\nexport const make = () => 1;\n",
                "use.ts": "import { Id, make } from './types';\n",
            },
        )
        report = analyze(root)

        assert report.total_exports == 1
        assert report.files[0].records[0].export.name == "make"

    def test_sample_project(self, sample_project: Path) -> None:
        """Test a project mixing named and default imports."""
        report = analyze(sample_project)

        unused = {
            (f.file.name, r.export.name) for f in report.files for r in f.unused_records
        }
        assert unused == {
            ("utils.ts", "unusedHelper"),
            ("view.tsx", "unusedView"),
            ("app.ts", "main"),
        }
        assert report.total_exports == 6
        assert report.used_exports == 3

    def test_js_specifier_matches_ts_source(self, root: Path) -> None:
        """Test ESM-style `./a.js` imports of a TypeScript module."""
        write_files(
            root,
            {
                "a.ts": "export function helper() {}\n",
                "b.ts": "import { helper } from './a.js';\n",
            },
        )
        report = analyze(root)

        assert report.unused_exports == 0

    def test_directory_index_import(self, root: Path) -> None:
        """Test imports of a directory resolve to its index file."""
        write_files(
            root,
            {
                "lib/index.ts": "export const api = 1;\n",
                "main.ts": "import { api } from './lib';\n",
            },
        )
        report = analyze(root)

        assert report.unused_exports == 0

    def test_namespace_import_marks_module_used(self, root: Path) -> None:
        """Test that `import * as` keeps every export of the module."""
        write_files(
            root,
            {
                "a.ts": "export const x = 1;\nexport const y = 2;\n",
                "b.ts": "import * as a from './a';\n",
            },
        )
        report = analyze(root)

        assert report.unused_exports == 0

    def test_files_ordered_by_unused_count(self, root: Path) -> None:
        """Test that files with more unused exports come first."""
        write_files(
            root,
            {
                "a.ts": "export const a1 = 1;\n",
                "b.ts": "export const b1 = 1;\nexport const b2 = 2;\n",
                "c.ts": "import { a1 } from './a';\n",
            },
        )
        report = analyze(root)

        assert [f.file.name for f in report.files] == ["b.ts", "a.ts"]

    def test_idempotent(self, sample_project: Path) -> None:
        """Test that two scans of the same tree agree."""
        first = analyze(sample_project)
        second = analyze(sample_project)

        assert (first.total_exports, first.unused_exports, first.estimated_savings_bytes) == (
            second.total_exports,
            second.unused_exports,
            second.estimated_savings_bytes,
        )
        assert [f.file for f in first.files] == [f.file for f in second.files]

    def test_single_worker_matches_parallel(self, sample_project: Path) -> None:
        """Test that worker count does not change results."""
        serial = analyze(sample_project, ScanOptions(max_workers=1))
        parallel = analyze(sample_project, ScanOptions(max_workers=4))

        assert [f.file for f in serial.files] == [f.file for f in parallel.files]
        assert serial.unused_exports == parallel.unused_exports

    def test_progress_callback(self, sample_project: Path) -> None:
        """Test that progress is reported once per file."""
        calls: list[tuple[Path, int, int]] = []

        ExportAnalyzer().analyze(sample_project, on_progress=lambda f, c, t: calls.append((f, c, t)))

        assert len(calls) == 3
        assert [c for _, c, _ in calls] == [1, 2, 3]
        assert all(t == 3 for _, _, t in calls)

    def test_custom_size_estimator(self, root: Path) -> None:
        """Test that the size estimator is pluggable."""
        write_files(root, {"a.ts": "export const a = 1;\n"})

        report = analyze(root, ScanOptions(size_estimator=lambda text: 7))

        assert report.estimated_savings_bytes == 7

    def test_kinds_survive_scan(self, root: Path) -> None:
        """Test that export kinds are carried through to the report."""
        write_files(root, {"a.ts": "export enum Color { Red }\n"})

        report = analyze(root)

        assert report.files[0].records[0].export.kind == ExportKind.ENUM


class TestDiscovery:
    """Tests for source file discovery."""

    def test_default_excludes(self, root: Path) -> None:
        """Test that build output, tests and declarations are skipped."""
        write_files(
            root,
            {
                "src/a.ts": "",
                "src/b.jsx": "",
                "src/c.mjs": "",
                "src/a.test.ts": "",
                "src/a.spec.tsx": "",
                "src/types.d.ts": "",
                "src/__tests__/x.ts": "",
                "node_modules/pkg/index.js": "",
                "dist/out.js": "",
                "build/out.js": "",
                "coverage/x.js": "",
                ".next/x.js": "",
                ".hidden/x.ts": "",
                "src/style.css": "",
            },
        )

        files = find_source_files(root)

        assert [f.relative_to(root).as_posix() for f in files] == [
            "src/a.ts",
            "src/b.jsx",
            "src/c.mjs",
        ]

    def test_extra_excludes(self, root: Path) -> None:
        """Test caller-supplied patterns on components and whole paths."""
        write_files(
            root,
            {
                "src/a.ts": "",
                "src/legacy/old.ts": "",
                "src/gen/api.ts": "",
                "src/a.stories.tsx": "",
            },
        )

        files = find_source_files(root, ["legacy/", "src/gen/*", "*.stories.tsx"])

        assert [f.relative_to(root).as_posix() for f in files] == ["src/a.ts"]

    def test_should_exclude(self) -> None:
        assert should_exclude("node_modules/x/index.js", ["node_modules"])
        assert should_exclude(".git/hooks/x.js", [])
        assert not should_exclude("src/index.ts", ["node_modules"])


class TestCli:
    """Tests for the command line interface."""

    def test_scan_reports_unused(self, sample_project: Path) -> None:
        """Test the human report and the CI exit code."""
        result = runner.invoke(app, ["scan", str(sample_project)])

        assert result.exit_code == 1
        assert "Unused Exports (3 found)" in result.output
        assert "unusedHelper" in result.output
        assert "src/utils.ts" in result.output

    def test_scan_json(self, sample_project: Path) -> None:
        """Test JSON output with root-relative paths."""
        result = runner.invoke(app, ["scan", str(sample_project), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_exports"] == 6
        assert data["unused_exports"] == 3
        assert data["used_exports"] == 3
        files = {f["file"] for f in data["files"]}
        assert files == {"src/utils.ts", "src/app.ts", "src/view.tsx"}
        utils = next(f for f in data["files"] if f["file"] == "src/utils.ts")
        helper = next(e for e in utils["exports"] if e["export"]["name"] == "helper")
        assert helper["used_in"] == ["src/app.ts"]
        assert helper["export"]["kind"] == "function"

    def test_scan_compact(self, sample_project: Path) -> None:
        """Test the compact name-list report."""
        result = runner.invoke(app, ["scan", str(sample_project), "--compact"])

        assert result.exit_code == 1
        assert "Found 3 unused exports" in result.output
        assert "unusedView" in result.output

    def test_scan_clean_project(self, root: Path) -> None:
        """Test the success message and exit code when nothing is unused."""
        write_files(
            root,
            {
                "a.ts": "export const a = 1;\n",
                "b.ts": "import { a } from './a';\n",
            },
        )
        result = runner.invoke(app, ["scan", str(root)])

        assert result.exit_code == 0
        assert "No unused exports found!" in result.output

    def test_scan_ignore_option(self, sample_project: Path) -> None:
        """Test comma-separated ignore patterns."""
        result = runner.invoke(
            app, ["scan", str(sample_project), "--json", "--ignore", "view.tsx, app.ts"]
        )

        data = json.loads(result.stdout)
        assert [f["file"] for f in data["files"]] == ["src/utils.ts"]
        assert data["unused_exports"] == 3

    def test_scan_missing_directory(self, root: Path) -> None:
        """Test that a missing directory is reported as an error."""
        result = runner.invoke(app, ["scan", str(root / "missing")])

        assert result.exit_code == 1
        assert "Directory not found" in result.output

    def test_usage(self, sample_project: Path) -> None:
        """Test looking up the consumers of an export."""
        result = runner.invoke(app, ["usage", "helper", str(sample_project)])

        assert result.exit_code == 0
        assert "src/app.ts" in result.output

    def test_usage_json_not_found(self, sample_project: Path) -> None:
        """Test the JSON error payload for an unknown export."""
        result = runner.invoke(app, ["usage", "nothing", str(sample_project), "--json"])

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["results"] == []
        assert "nothing" in data["error"]


class TestMcpHandlers:
    """Tests for the MCP tool handlers."""

    def test_scan(self, sample_project: Path) -> None:
        from exports_cleanup.mcp.server import _handle_scan

        result = _handle_scan({"path": str(sample_project)})

        assert result["unused_exports"] == 3

    def test_unused(self, sample_project: Path) -> None:
        from exports_cleanup.mcp.server import _handle_unused

        result = _handle_unused({"path": str(sample_project)})

        assert result["unused"]["src/utils.ts"] == ["unusedHelper"]
        assert result["unused_exports"] == 3

    def test_usage(self, sample_project: Path) -> None:
        from exports_cleanup.mcp.server import _handle_usage

        result = _handle_usage("LIMIT", {"path": str(sample_project)})

        assert result["results"][0]["used_in"] == ["src/app.ts"]

    def test_usage_not_found(self, sample_project: Path) -> None:
        from exports_cleanup.mcp.server import _handle_usage

        result = _handle_usage("missing", {"path": str(sample_project)})

        assert result["results"] == []
        assert "missing" in result["error"]
