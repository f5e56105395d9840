"""
Tests for scopes, random endpoint generation and custom alias validation.
"""
import string

import pytest

from shortlink_app.config import RESERVED_WORDS, parse_reserved_words
from shortlink_app.exceptions import AllocationExhausted
from shortlink_app.models import ShortURL
from shortlink_app.services.alias_validator import AliasStatus, AliasValidator
from shortlink_app.services.endpoint_generator import ALPHABET, EndpointGenerator
from shortlink_app.services.scope import (
    ROOT,
    CategoryScope,
    category_name,
    scope_for,
    scoped_endpoint,
)


def add_record(db_session, owner, endpoint, category=None):
    record = ShortURL(
        owner_id=owner.id,
        category=category,
        short_endpoint=endpoint,
        original_url="https://example.com",
    )
    db_session.add(record)
    db_session.commit()
    return record


class TestScope:
    """Test the scoping function"""

    def test_root_endpoint_is_alias(self):
        assert scoped_endpoint(ROOT, "abc") == "abc"

    def test_category_endpoint_is_prefixed(self):
        assert scoped_endpoint(CategoryScope("team"), "abc") == "team/abc"

    def test_scope_for(self):
        assert scope_for(None) == ROOT
        assert scope_for("team") == CategoryScope("team")
        assert category_name(scope_for("team")) == "team"
        assert category_name(ROOT) is None


class TestEndpointGenerator:
    """Test random endpoint generation"""

    def test_generates_configured_length_and_alphabet(self, db_session):
        generator = EndpointGenerator(length=7, max_retries=5)

        for _ in range(50):
            alias = generator.generate(ROOT, db_session)
            assert len(alias) == 7
            assert set(alias) <= set(string.ascii_letters + string.digits)

    def test_alphabet_is_mixed_case_alphanumeric(self):
        assert len(ALPHABET) == 62

    def test_skips_taken_endpoint(self, db_session, user, monkeypatch):
        """A collision with a stored endpoint forces a re-sample"""
        add_record(db_session, user, "AAAAAAA")
        generator = EndpointGenerator(length=7, max_retries=5)
        samples = iter(["AAAAAAA", "BBBBBBB"])
        monkeypatch.setattr(generator, "_generate_random_string", lambda: next(samples))

        assert generator.generate(ROOT, db_session) == "BBBBBBB"

    def test_collision_is_checked_per_scope(self, db_session, user, monkeypatch):
        """A root endpoint doesn't block the same alias inside a category"""
        add_record(db_session, user, "AAAAAAA")
        generator = EndpointGenerator(length=7, max_retries=1)
        monkeypatch.setattr(generator, "_generate_random_string", lambda: "AAAAAAA")

        assert generator.generate(CategoryScope("team"), db_session) == "AAAAAAA"

    def test_exhaustion_raises(self, db_session, user, monkeypatch):
        add_record(db_session, user, "AAAAAAA")
        generator = EndpointGenerator(length=7, max_retries=3)
        monkeypatch.setattr(generator, "_generate_random_string", lambda: "AAAAAAA")

        with pytest.raises(AllocationExhausted):
            generator.generate(ROOT, db_session)


class TestAliasValidator:
    """Test custom alias classification"""

    @pytest.mark.parametrize("word", sorted(RESERVED_WORDS))
    def test_reserved_words_never_accepted(self, db_session, word):
        validator = AliasValidator()
        assert validator.validate(word, ROOT, db_session) is not AliasStatus.ACCEPTED

    def test_admin_is_reserved(self, db_session):
        assert AliasValidator().validate("admin", ROOT, db_session) is AliasStatus.RESERVED

    def test_reserved_match_ignores_case(self, db_session):
        assert AliasValidator().validate("Admin", ROOT, db_session) is AliasStatus.RESERVED

    def test_reserved_in_category_scope(self, db_session):
        validator = AliasValidator()
        assert validator.validate("admin", CategoryScope("team"), db_session) is AliasStatus.RESERVED

    @pytest.mark.parametrize("alias", ["", "has space", "slash/inside", "dot.ted", "a" * 33, "üml"])
    def test_invalid_aliases(self, db_session, alias):
        assert AliasValidator().validate(alias, ROOT, db_session) is AliasStatus.INVALID

    def test_accepts_free_alias(self, db_session):
        assert AliasValidator().validate("my-link_1", ROOT, db_session) is AliasStatus.ACCEPTED

    def test_existing_alias_in_same_scope(self, db_session, user):
        add_record(db_session, user, "foo")
        assert AliasValidator().validate("foo", ROOT, db_session) is AliasStatus.ALREADY_EXISTS

    def test_existing_alias_in_other_scope_is_free(self, db_session, user):
        add_record(db_session, user, "team/foo", category="team")

        validator = AliasValidator()
        assert validator.validate("foo", ROOT, db_session) is AliasStatus.ACCEPTED
        assert validator.validate("foo", CategoryScope("team"), db_session) is AliasStatus.ALREADY_EXISTS
        assert validator.validate("foo", CategoryScope("ops"), db_session) is AliasStatus.ACCEPTED

    def test_aliases_are_case_sensitive(self, db_session, user):
        add_record(db_session, user, "foo")
        assert AliasValidator().validate("Foo", ROOT, db_session) is AliasStatus.ACCEPTED

    def test_custom_reserved_words(self, db_session):
        validator = AliasValidator(reserved_words=parse_reserved_words(" Promo , sale,,"))
        assert validator.validate("promo", ROOT, db_session) is AliasStatus.RESERVED
        assert validator.validate("SALE", ROOT, db_session) is AliasStatus.RESERVED
        assert validator.validate("admin", ROOT, db_session) is AliasStatus.ACCEPTED
