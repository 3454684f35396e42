"""Name rules shared by tenants and collections."""
import re

NAME_PATTERN = re.compile(r"^[a-z0-9-]{1,63}$")
MAX_NAME_LENGTH = 63

_DISALLOWED = re.compile(r"[^a-z0-9-]")


def sanitize_name(name: str) -> str:
    """Lowercase and strip everything outside ``[a-z0-9-]``."""
    return _DISALLOWED.sub("", name.lower())


def is_valid_name(name: str | None) -> bool:
    """True for 1-63 characters of lowercase letters, digits and hyphens."""
    if not name:
        return False
    return NAME_PATTERN.fullmatch(name) is not None
