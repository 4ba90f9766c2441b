#!/usr/bin/env python3
"""Batch render every document fixture with every layout algorithm to SVG.

Outputs go to /tmp/canvas_layout_renders/.

Usage:
    python scripts/render_gallery.py [--seed N]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from canvas_layout.layout import compute_layout, list_algorithms  # noqa: E402
from canvas_layout.parser import LayoutOptions, read_document  # noqa: E402
from canvas_layout.render import render_svg  # noqa: E402
from canvas_layout.themes import THEMES  # noqa: E402

OUTPUT_DIR = Path("/tmp/canvas_layout_renders")
DOCUMENTS_DIR = project_root / "tests" / "fixtures" / "documents"
EXAMPLES_DIR = project_root / "examples"

DOCUMENT_FILES = sorted(DOCUMENTS_DIR.glob("*.json"))
EXTRA_FILES = [EXAMPLES_DIR / "investigation.json"]


def render_file(
    path: Path, algorithm: str, output_dir: Path, seed: int | None
) -> tuple[str, list[str]]:
    """Load, lay out, and render a document to SVG.

    Returns (name, list_of_issues).
    """
    name = f"{path.stem}_{algorithm}"

    try:
        doc = read_document(path)
    except Exception as e:
        return name, [f"PARSE ERROR: {e}"]

    try:
        result = compute_layout(algorithm, doc.nodes, doc.edges, LayoutOptions(seed=seed))
    except Exception as e:
        return name, [f"LAYOUT ERROR: {e}"]

    issues: list[str] = []
    if len(result) != len({n.id for n in doc.nodes}):
        issues.append(f"{len(result)} positions for {len(doc.nodes)} elements")

    try:
        svg_str = render_svg(result, doc.edges, THEMES["dark"], title=name)
    except Exception as e:
        return name, [f"RENDER ERROR: {e}"]

    (output_dir / f"{name}.svg").write_text(svg_str)
    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render layout fixtures")
    parser.add_argument("--seed", type=int, default=1, help="Random seed (default: 1)")
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    all_files = list(DOCUMENT_FILES) + EXTRA_FILES
    algorithms = [a.value for a in list_algorithms()]
    print(f"Rendering {len(all_files)} files x {len(algorithms)} algorithms to {OUTPUT_DIR}/")
    print()

    max_name_len = max(len(f.stem) for f in all_files) + max(len(a) for a in algorithms) + 1
    any_errors = False

    for path in all_files:
        for algorithm in algorithms:
            name, issues = render_file(path, algorithm, OUTPUT_DIR, args.seed)
            status = "OK" if not issues else "ISSUES"
            if any("ERROR" in i for i in issues):
                status = "FAIL"
                any_errors = True

            print(f"  {name:<{max_name_len}}  [{status}]")
            for issue in issues:
                print(f"    - {issue}")

    print(f"\nOutputs in: {OUTPUT_DIR}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
