"""Parsing of the MFA challenge header.

The server signals a second-factor requirement by answering the primary
login with 401 and a header such as ``x-authenticate: smsmfa=ID123``.
"""

from auth.types import MfaChallenge, MfaType

# Checked in order; "smsmfa" wins when both markers appear
_MARKERS = (
    ("smsmfa", MfaType.SMS),
    ("codemfa", MfaType.TOTP),
)


def parse_challenge_header(value: str | None) -> MfaChallenge | None:
    """
    Turn a challenge header value into an active MfaChallenge.

    The id is everything after the first "=". Returns None when the header
    is missing, names no known MFA type, or carries no id.
    """
    if not value:
        return None

    for marker, mfa_type in _MARKERS:
        if marker in value:
            _, sep, mfa_id = value.partition("=")
            if not sep or not mfa_id:
                return None
            return MfaChallenge(mfa_id=mfa_id, mfa_type=mfa_type, active=True)

    return None
