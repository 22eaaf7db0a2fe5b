"""
Central registry of allowed actions per role.
"""
ROLE_SCOPES = {
    "customer": {"view_profile"},
    "merchant": {"view_profile", "toggle_store"},
    "rider":    {"view_profile", "toggle_online"},
    "admin":    {"*"},
}

def role_has_scope(role: str, action: str) -> bool:
    scopes = ROLE_SCOPES.get(role, set())
    return "*" in scopes or action in scopes
