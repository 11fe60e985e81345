"""Inspect a .lakebook export: TOC layout and the HTML tags its documents use."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from lakebook2md.archive import load_document_html, read_lakebook
from lakebook2md.hierarchy import PathAssigner
from lakebook2md.html_parser import ElementNode, HtmlNode, RootNode, parse_html


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect .lakebook TOC paths, tags, classes, and attributes.")
    parser.add_argument("file", help="Path to a .lakebook file")
    parser.add_argument("--toc-only", action="store_true", help="Only print the assigned output paths")
    args = parser.parse_args()

    path = Path(args.file)
    if not path.is_file():
        parser.error(f"File not found: {path}")

    archive = read_lakebook(path.read_bytes())
    assigner = PathAssigner()
    tags, classes, attrs = Counter(), Counter(), Counter()

    print(f"Repository: {archive.repo_dir}")
    print("Paths:")
    for entry in archive.toc:
        assigned = assigner.assign(entry)
        indent = "  " * entry.level
        if assigned is None:
            print(f"{indent}[{entry.type or '?'}] {entry.title}")
            continue
        print(f"{indent}{assigned.path}")
        if args.toc_only:
            continue
        html = load_document_html(archive.files, archive.repo_dir, entry.url)
        if html:
            collect_stats(parse_html(html), tags, classes, attrs)

    if args.toc_only:
        return

    print("\nTags:")
    for name, count in tags.most_common():
        print(f"{name}: {count}")

    print("\nClasses:")
    for name, count in classes.most_common():
        print(f"{name}: {count}")

    print("\nAttributes:")
    for name, count in attrs.most_common():
        print(f"{name}: {count}")


def collect_stats(node: HtmlNode, tags: Counter, classes: Counter, attrs: Counter) -> None:
    if isinstance(node, ElementNode):
        tags[node.tag] += 1
        for cls in node.attributes.get("class", "").split():
            classes[cls] += 1
        for attr in node.attributes:
            attrs[attr] += 1
    if isinstance(node, (RootNode, ElementNode)):
        for child in node.children:
            collect_stats(child, tags, classes, attrs)


if __name__ == "__main__":
    main()
