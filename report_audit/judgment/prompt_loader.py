from pathlib import Path

from report_audit.judgment.exceptions import ServiceError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the audit prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled audit_prompt.txt.

    Returns:
        The raw template string with ``{rules}`` and ``{content}`` placeholders.

    Raises:
        ServiceError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "audit_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ServiceError(f"Failed to load prompt template: {exc}") from exc
