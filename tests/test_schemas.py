from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from privalytics_app.schemas import SiteCreate, SiteResponse, TrackRequest


class TestTrackRequest:
    def test_alias_and_default_path(self):
        beacon = TrackRequest.model_validate({"siteId": "abc"})

        assert beacon.site_id == "abc"
        assert beacon.path == "/"

    def test_null_path_defaults(self):
        assert TrackRequest.model_validate({"siteId": "abc", "path": None}).path == "/"

    def test_numeric_site_id(self):
        assert TrackRequest.model_validate({"siteId": 42}).site_id == "42"

    def test_boolean_site_id(self):
        assert TrackRequest.model_validate({"siteId": True}).site_id == "true"

    def test_numeric_path_stored_as_text(self):
        assert TrackRequest.model_validate({"siteId": "s", "path": 5}).path == "5"

    def test_falsy_path_defaults(self):
        for path in (0, False, ""):
            assert TrackRequest.model_validate({"siteId": "s", "path": path}).path == "/"

    def test_missing_or_empty_site_id(self):
        for payload in ({}, {"siteId": ""}, {"siteId": 0}, {"siteId": False}, {"siteId": None}):
            with pytest.raises(ValidationError):
                TrackRequest.model_validate(payload)


class TestSiteSchemas:
    def test_create_requires_both_fields(self):
        with pytest.raises(ValidationError):
            SiteCreate.model_validate({"name": "Blog"})
        with pytest.raises(ValidationError):
            SiteCreate.model_validate({"name": "Blog", "domain": ""})

    def test_created_at_serialized_as_utc_millis(self):
        site = SiteResponse(
            id="1",
            name="Blog",
            domain="blog.example.com",
            created_at=datetime(2026, 3, 1, 9, 30, 0, 123000),
        )

        assert site.model_dump(mode="json")["created_at"] == "2026-03-01T09:30:00.123Z"

    def test_aware_created_at_converted_to_utc(self):
        aware = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)
        site = SiteResponse(id="1", name="Blog", domain="b.test", created_at=aware)

        assert site.model_dump(mode="json")["created_at"] == "2026-03-01T09:30:00.000Z"
