"""Email normalization."""


def normalize_email(email: str) -> str:
    """Lowercase and trim - the only form stored or compared."""
    return email.strip().lower()
