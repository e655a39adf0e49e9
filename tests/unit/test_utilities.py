"""Unit tests for id generation, file-type inference and identity resolution."""

import pytest

from document_catalog.core.file_types import FILE_TYPES, detect_file_type
from document_catalog.core.identifiers import generate_id, utcnow
from document_catalog.core.identity import (
    ANIMAL_AVATARS,
    avatar_for_email,
    display_name_from_email,
    require_identity,
    resolve_identity,
)
from document_catalog.exceptions import Unauthenticated


@pytest.mark.unit
class TestGenerateId:

    def test_prefix_and_shape(self):
        doc_id = generate_id("doc")
        prefix, timestamp, suffix = doc_id.split("_")
        assert prefix == "DOC"
        assert timestamp.isalnum() and timestamp == timestamp.upper()
        assert len(suffix) == 5
        assert doc_id == doc_id.upper()

    def test_rapid_calls_are_distinct(self):
        ids = {generate_id("FAV") for _ in range(2000)}
        assert len(ids) == 2000

    def test_prefixes_keep_tables_apart(self):
        assert generate_id("CAT").startswith("CAT_")
        assert generate_id("TAG").startswith("TAG_")

    def test_utcnow_is_naive(self):
        assert utcnow().tzinfo is None


@pytest.mark.unit
class TestDetectFileType:

    @pytest.mark.parametrize("url,expected", [
        ("https://docs.google.com/document/d/abc", "Google Doc"),
        ("https://docs.google.com/spreadsheets/d/abc", "Google Sheet"),
        ("https://docs.google.com/presentation/d/abc", "Google Slides"),
        ("https://docs.google.com/forms/d/abc", "Google Form"),
        ("https://drive.google.com/file/d/abc/report.pdf", "PDF"),
        ("https://drive.google.com/file/d/abc/photo.png", "Image"),
        ("https://sites.google.com/view/team", "Google Site"),
        ("https://lookerstudio.google.com/reporting/1", "Looker Studio"),
        ("https://public.tableau.com/views/x", "Tableau"),
        ("https://example.com/handbook", "Website"),
    ])
    def test_patterns(self, url, expected):
        assert detect_file_type(url) == expected

    def test_drive_file_without_known_extension_is_website(self):
        assert detect_file_type("https://drive.google.com/file/d/abc/view") == "Website"

    def test_missing_url_is_other(self):
        assert detect_file_type("") == "Other"
        assert detect_file_type(None) == "Other"

    def test_every_result_is_a_known_type(self):
        assert detect_file_type("https://docs.google.com/forms/x") in FILE_TYPES


@pytest.mark.unit
class TestIdentity:

    def test_name_derived_from_email(self):
        assert display_name_from_email("jane.doe@example.com") == "Jane Doe"
        assert display_name_from_email("ops@example.com") == "Ops"

    def test_avatar_is_stable(self):
        first = avatar_for_email("jane.doe@example.com")
        assert first == avatar_for_email("jane.doe@example.com")
        assert first in ANIMAL_AVATARS

    def test_signed_in_identity(self):
        identity = resolve_identity(" jane.doe@example.com ")
        assert identity.is_signed_in
        assert identity.email == "jane.doe@example.com"
        assert identity.name == "Jane Doe"

    def test_explicit_name_wins(self):
        assert resolve_identity("jd@example.com", "J. Doe").name == "J. Doe"

    def test_anonymous(self):
        identity = resolve_identity("")
        assert not identity.is_signed_in
        with pytest.raises(Unauthenticated):
            require_identity(identity)
        with pytest.raises(Unauthenticated):
            require_identity(None)
