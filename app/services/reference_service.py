"""Quotation reference numbers (e.g. SFV-261017-7K2QD)."""
import secrets
import string
from datetime import datetime, timezone

REF_ALPHABET = string.ascii_uppercase + string.digits
REF_TOKEN_LENGTH = 5


def generate_ref_no(prefix: str = 'SFV', today=None) -> str:
    """Generate a human readable reference: PREFIX-YYMMDD-XXXXX."""
    today = today or datetime.now(timezone.utc)
    token = ''.join(secrets.choice(REF_ALPHABET) for _ in range(REF_TOKEN_LENGTH))
    return f"{prefix}-{today.strftime('%y%m%d')}-{token}"
