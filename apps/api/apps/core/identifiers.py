"""
Human-readable identifiers (PAT00000000, RX00000000, CERT00000000).

Keys are PREFIX + 8 random digits drawn from `secrets`, independent of the
wall clock. Uniqueness is enforced by the database; a collision is retried
inside a savepoint so the caller's transaction stays usable.
"""
import secrets

from django.db import IntegrityError, transaction

from apps.core.observability import metrics, get_sanitized_logger

logger = get_sanitized_logger(__name__)

KEY_DIGITS = 8
MAX_ATTEMPTS = 5

PATIENT_PREFIX = 'PAT'
PRESCRIPTION_PREFIX = 'RX'
CERTIFICATE_PREFIX = 'CERT'


class IdentifierExhausted(Exception):
    """Raised when no unique key could be allocated after MAX_ATTEMPTS."""
    pass


def generate_key(prefix: str) -> str:
    """Return PREFIX followed by KEY_DIGITS random digits."""
    return f"{prefix}{secrets.randbelow(10 ** KEY_DIGITS):0{KEY_DIGITS}d}"


def create_with_unique_key(model, key_field: str, prefix: str, **fields):
    """
    Create a `model` row with a freshly generated unique key in `key_field`.

    Each attempt runs in its own savepoint. IntegrityErrors that are not a
    key collision are re-raised untouched.

    Raises:
        IdentifierExhausted: every attempt collided
    """
    for attempt in range(1, MAX_ATTEMPTS + 1):
        key = generate_key(prefix)
        try:
            with transaction.atomic():
                return model.objects.create(**{key_field: key}, **fields)
        except IntegrityError:
            if not model.objects.filter(**{key_field: key}).exists():
                raise
            metrics.identifier_collisions_total.labels(prefix=prefix).inc()
            logger.warning(
                'Identifier collision, retrying',
                extra={
                    'event': 'identifier_collision',
                    'model': model.__name__,
                    'prefix': prefix,
                    'attempt': attempt,
                }
            )

    raise IdentifierExhausted(
        f"Could not allocate a unique {prefix} identifier after {MAX_ATTEMPTS} attempts"
    )
