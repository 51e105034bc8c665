import re
from uuid import UUID, uuid4

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def new_id() -> str:
    return str(uuid4())


def is_uuid(term: str) -> bool:
    """True for the canonical 8-4-4-4-12 hex form only (no braces, no urn: prefix)."""
    return bool(term) and bool(_UUID_RE.match(term))


def normalize_uuid(term: str) -> str:
    # stored ids are lowercase; accept callers that send uppercase hex
    return str(UUID(term))


def slugify(text: str) -> str:
    return text.strip().lower().replace(" ", "_").replace("'", "")
