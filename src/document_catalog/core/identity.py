"""Resolution of the request principal supplied by the gateway."""

from typing import Optional

from ..exceptions import Unauthenticated
from ..models.session import Identity

ANIMAL_AVATARS = [
    "🐺", "🦊", "🐨", "🐸", "🦋", "🐧", "🦁", "🐯", "🐼",
    "🐰", "🦄", "🐙", "🦉", "🐢", "🦆", "🦅", "🦜", "🦩",
]


def display_name_from_email(email: str) -> str:
    """``jane.doe@example.com`` -> ``Jane Doe``."""
    local = email.split("@")[0]
    return " ".join(part[:1].upper() + part[1:] for part in local.split("."))


def avatar_for_email(email: str) -> str:
    """Deterministic avatar pick using a 32-bit string hash of the email."""
    acc = 0
    for char in email:
        acc = ((acc << 5) - acc + ord(char)) & 0xFFFFFFFF
    if acc >= 0x80000000:
        acc -= 0x100000000
    return ANIMAL_AVATARS[abs(acc) % len(ANIMAL_AVATARS)]


def resolve_identity(email: Optional[str], name: Optional[str] = None) -> Identity:
    """Build the identity for a request; anonymous requests are not signed in."""
    if not email or not email.strip():
        return Identity(is_signed_in=False)
    email = email.strip()
    return Identity(
        is_signed_in=True,
        email=email,
        name=(name or "").strip() or display_name_from_email(email),
        avatar=avatar_for_email(email),
    )


def require_identity(identity: Optional[Identity]) -> Identity:
    """Return the identity if signed in, otherwise raise ``Unauthenticated``."""
    if identity is None or not identity.is_signed_in:
        raise Unauthenticated()
    return identity
