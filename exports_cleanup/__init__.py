"""
exports-cleanup: Find unused exports in JavaScript and TypeScript codebases.

exports-cleanup scans a source tree, collects every exported declaration and
every relative import, and reports exports that nothing in the tree imports,
together with an estimate of the bundle bytes they occupy.

Usage:
    from exports_cleanup.core.analyzer import analyze

    report = analyze(Path("."))
    for file_report in report.files:
        for record in file_report.unused_records:
            print(record.export.name)
"""

__version__ = "0.1.0"
