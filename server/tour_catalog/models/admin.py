"""Admin account document definitions."""

ADMIN_COLLECTION = "admin"

# Legacy admin documents stored the password in clear text under this key
LEGACY_PASSWORD_FIELD = "password"
PASSWORD_HASH_FIELD = "password_hash"
