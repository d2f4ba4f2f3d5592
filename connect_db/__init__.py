"""Open psql sessions using connection secrets stored under .vault/secrets."""

__version__ = "0.1.0"
