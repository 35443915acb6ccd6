"""Changelog Writer - Insert release sections into a Markdown changelog."""

from pathlib import Path


DEFAULT_HEADING = "# Changelog"
MANUAL_DESCRIPTION = "Manual release - see commit history for details"


def format_entry(version: str, change_type: str, changes) -> str:
    """Render one release section (no trailing newline)."""
    lines = [f"## {version}", "", f"### {change_type}", ""]
    lines.extend(f"- {change}" for change in changes)
    return "\n".join(lines)


def insert_entry(document: str, entry: str) -> str:
    """Place ``entry`` right after the first top-level heading.

    Everything already in the document is kept. A document without a
    ``# `` heading gets a default one.
    """
    lines = document.split("\n")
    heading_idx = next((i for i, line in enumerate(lines) if line.startswith("# ")), None)

    if heading_idx is None:
        rest = document.lstrip("\n")
        parts = [DEFAULT_HEADING, "", entry, ""]
        return "\n".join(parts) + ("\n" + rest if rest else "")

    insert_idx = heading_idx + 1
    while insert_idx < len(lines) and lines[insert_idx].strip() == "":
        insert_idx += 1

    # One blank line on each side of the new section
    return "\n".join(lines[:heading_idx + 1] + ["", entry, ""] + lines[insert_idx:])


def update_changelog(path: str | Path, version: str, change_type: str, changes) -> Path:
    """Prepend a release section to the changelog at ``path``, creating it if needed."""
    path = Path(path)
    document = path.read_text(encoding="utf-8") if path.exists() else f"{DEFAULT_HEADING}\n\n"
    path.write_text(insert_entry(document, format_entry(version, change_type, changes)), encoding="utf-8")
    return path
