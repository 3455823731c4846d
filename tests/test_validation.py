import base64

from seclens.domain.verdicts import AnalysisKind
from seclens.tools import validation
from seclens.tools.validation import (
    image_file_to_data_url,
    parse_image_data_url,
    validate_address,
    validate_input,
    validate_raw_email,
    validate_screenshot,
    validate_secret_text,
    validate_token,
    validate_url,
)


def test_address_accepts_bare_domain():
    result = validate_address("  Example.COM ")
    assert result.ok
    assert result.value == "example.com"
    assert result.domain == "example.com"
    assert result.local_part is None


def test_address_splits_full_address():
    result = validate_address("User.Name@Example.com")
    assert result.ok
    assert result.value == "user.name@example.com"
    assert result.local_part == "user.name"
    assert result.domain == "example.com"


def test_address_distinguishes_empty_from_malformed():
    assert validate_address("   ").reason == validation.EMPTY_ADDRESS
    assert validate_address("not a domain").reason == validation.INVALID_ADDRESS
    assert validate_address("-bad-.com").reason == validation.INVALID_ADDRESS
    assert validate_address("example.c").reason == validation.INVALID_ADDRESS


def test_address_label_length_limits():
    assert validate_address(f"{'a' * 63}.com").ok
    assert not validate_address(f"{'a' * 64}.com").ok


def test_url_requires_scheme_and_authority():
    assert validate_url("https://example.com/login").ok
    assert validate_url("https://Example.com/login").domain == "example.com"
    assert validate_url("example.com").reason == validation.INVALID_URL
    assert validate_url("").reason == validation.EMPTY_URL


def test_token_rejects_http_urls():
    result = validate_token("https://example.com/callback")
    assert not result.ok
    assert result.reason == validation.TOKEN_IS_URL
    assert "URL Analyzer" in result.reason
    assert not validate_token("http://example.com").ok


def test_token_accepts_other_shapes():
    jwt = "eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiIxIn0.sig"
    assert validate_token(jwt).ok
    assert validate_token("ftp://example.com/file").ok
    assert validate_token("").reason == validation.EMPTY_TOKEN


def test_free_text_tools_only_check_emptiness():
    assert validate_secret_text("password = hunter2").ok
    assert validate_secret_text(" \n ").reason == validation.EMPTY_SECRET_TEXT
    assert validate_raw_email("From: a@b.c\n\nhi").ok
    assert validate_raw_email("").reason == validation.EMPTY_RAW_EMAIL


def test_parse_image_data_url():
    payload = base64.b64encode(b"\x89PNG fake").decode("ascii")
    image = parse_image_data_url(f"data:image/png;base64,{payload}")
    assert image is not None
    assert image.mime_type == "image/png"
    assert image.data == b"\x89PNG fake"


def test_parse_image_data_url_rejects_malformed():
    assert parse_image_data_url("data:image/png;base64,@@@") is None
    assert parse_image_data_url("data:text/plain;base64,aGVsbG8=") is None
    assert parse_image_data_url("image/png;base64,aGVsbG8=") is None


def test_validate_screenshot_messages():
    assert validate_screenshot("").reason == validation.EMPTY_IMAGE
    assert validate_screenshot("garbage").reason == validation.INVALID_IMAGE
    good = validate_screenshot("data:image/jpeg;base64,aGVsbG8=")
    assert good.ok
    assert good.image.mime_type == "image/jpeg"


def test_image_file_to_data_url(tmp_path):
    path = tmp_path / "shot.png"
    path.write_bytes(b"pixels")
    data_url = image_file_to_data_url(path)
    assert data_url.startswith("data:image/png;base64,")
    assert parse_image_data_url(data_url).data == b"pixels"


def test_validate_input_dispatches_by_kind():
    assert validate_input(AnalysisKind.TOKEN, "https://example.com").reason == validation.TOKEN_IS_URL
    assert validate_input("url", "https://example.com").ok


def test_screenshot_rejects_non_image_files(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    result = validate_screenshot(image_file_to_data_url(path))
    assert result.reason == validation.INVALID_IMAGE_TYPE

    unknown = tmp_path / "blob"
    unknown.write_bytes(b"\x00\x01")
    assert validate_screenshot(image_file_to_data_url(unknown)).reason == validation.INVALID_IMAGE_TYPE
