"""
Custom alias validation.

Rules:
- allowed characters: ASCII letters, digits, ``-`` and ``_``
- length 1..``alias_max_length``
- aliases are case-sensitive (``Foo`` and ``foo`` are different endpoints)
- reserved words match case-insensitively (``Admin`` is reserved too)
"""

import re
from enum import Enum
from typing import FrozenSet, Optional

from sqlalchemy.orm import Session

from shortlink_app.config import RESERVED_WORDS, settings
from shortlink_app.models.short_url import ShortURL
from shortlink_app.services.scope import Scope, scoped_endpoint


ALIAS_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class AliasStatus(Enum):
    ACCEPTED = "accepted"
    INVALID = "invalid"
    RESERVED = "reserved"
    ALREADY_EXISTS = "already_exists"


class AliasValidator:
    def __init__(
        self,
        reserved_words: FrozenSet[str] = RESERVED_WORDS,
        max_length: Optional[int] = None,
    ):
        self.reserved_words = reserved_words
        self.max_length = max_length or settings.alias_max_length

    def check_format(self, candidate: str) -> AliasStatus:
        """Static checks only (charset, length, denylist); no store access"""
        if not candidate or len(candidate) > self.max_length:
            return AliasStatus.INVALID
        if not ALIAS_PATTERN.match(candidate):
            return AliasStatus.INVALID
        if candidate.lower() in self.reserved_words:
            return AliasStatus.RESERVED
        return AliasStatus.ACCEPTED

    def validate(self, candidate: str, scope: Scope, db_session: Session) -> AliasStatus:
        status = self.check_format(candidate)
        if status is not AliasStatus.ACCEPTED:
            return status

        endpoint = scoped_endpoint(scope, candidate)
        exists = db_session.query(ShortURL.id).filter(
            ShortURL.short_endpoint == endpoint
        ).first()
        if exists:
            return AliasStatus.ALREADY_EXISTS
        return AliasStatus.ACCEPTED
