"""
Random short endpoint generation.
Generates a random alias and checks the store for a collision in its scope.
"""

import logging
import secrets
import string
from typing import Optional

from sqlalchemy.orm import Session

from shortlink_app.config import settings
from shortlink_app.exceptions import AllocationExhausted
from shortlink_app.models.short_url import ShortURL
from shortlink_app.services.scope import Scope, scoped_endpoint

logger = logging.getLogger(__name__)


ALPHABET = string.ascii_letters + string.digits


class EndpointGenerator:
    """
    Random [A-Za-z0-9] endpoint generator with collision checking.

    62^7 possible endpoints at the default length, so re-sampling is rare;
    ``max_retries`` bounds the loop under pathological load.
    """

    def __init__(self, length: int = 7, max_retries: int = 10):
        self.length = length
        self.max_retries = max_retries
        self.characters = ALPHABET

    def generate(self, scope: Scope, db_session: Session) -> str:
        """Return an alias whose scoped endpoint is not in the store"""
        for attempt in range(self.max_retries):
            alias = self.sample(scope, db_session)
            if alias is not None:
                return alias
            logger.debug("Endpoint taken, re-sampling (attempt %d)", attempt + 1)

        logger.error("Endpoint allocation exhausted after %d attempts", self.max_retries)
        raise AllocationExhausted(
            f"Could not generate unique short endpoint after {self.max_retries} attempts"
        )

    def sample(self, scope: Scope, db_session: Session) -> Optional[str]:
        """One attempt: a random alias, or None if its scoped endpoint is taken"""
        alias = self._generate_random_string()
        taken = db_session.query(ShortURL.id).filter(
            ShortURL.short_endpoint == scoped_endpoint(scope, alias)
        ).first()
        if taken:
            return None
        return alias

    def _generate_random_string(self) -> str:
        """Generate a random string of specified length"""
        return ''.join(secrets.choice(self.characters) for _ in range(self.length))


def default_generator() -> EndpointGenerator:
    return EndpointGenerator(
        length=settings.short_url_length,
        max_retries=settings.max_retries,
    )
