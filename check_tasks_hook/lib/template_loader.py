"""Load markdown message templates for the hook.

A template may open with a ``---`` frontmatter block describing it; only the
body after that block is returned.
"""

from pathlib import Path

FRONTMATTER_FENCE = "---"


def load_template(template_path: Path, variables: dict[str, object] | None = None) -> str:
    """Return the template body, formatted with ``variables`` when given.

    Raises:
        FileNotFoundError: If the template file doesn't exist
        KeyError: If the body uses a placeholder missing from variables
    """
    if not template_path.exists():
        raise FileNotFoundError(f"Template not found: {template_path}")

    body = _strip_frontmatter(template_path.read_text(encoding="utf-8"))
    return body.format(**variables) if variables else body


def _strip_frontmatter(content: str) -> str:
    lines = content.splitlines()
    if not lines or lines[0].strip() != FRONTMATTER_FENCE:
        return content.strip()
    for index in range(1, len(lines)):
        if lines[index].strip() == FRONTMATTER_FENCE:
            return "\n".join(lines[index + 1 :]).strip()
    # Unclosed fence: not frontmatter
    return content.strip()
