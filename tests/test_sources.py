from seclens.agents.contracts import RawCitation
from seclens.orchestrator.sources import map_citations, source_domain
from seclens.tools.validation import validate_address, validate_url


def test_source_domain_prefers_validated_domain():
    assert source_domain(validate_address("user@example.com")) == "example.com"
    assert source_domain(validate_url("https://login.example.org/x")) == "login.example.org"
    assert source_domain(None) == "the analyzed domain"


def test_map_citations_drops_blank_uris():
    citations = [RawCitation(uri="  ", title="x"), RawCitation(title="y"), RawCitation(uri="https://ok.example")]
    sources = map_citations(citations, "example.com")
    assert [(s.uri, s.title) for s in sources] == [("https://ok.example", "Source from example.com")]


def test_map_citations_accepts_raw_mappings():
    citations = [
        {"web": {"uri": "https://a.example", "title": "  A  "}},
        {"uri": "https://b.example", "title": ""},
        {"web": None},
        "not a citation",
        None,
    ]
    sources = map_citations(citations, "example.com")
    assert [(s.uri, s.title) for s in sources] == [
        ("https://a.example", "A"),
        ("https://b.example", "Source from example.com"),
    ]


def test_map_citations_handles_none():
    assert map_citations(None, "example.com") == []
