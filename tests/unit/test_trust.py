"""Tests for trust signal analysis."""

from engine.document import PageDocument
from engine.extraction.trust import analyze_trust_signals
from tests.fixtures import blank_page, page, website_page


class TestSecuritySignals:
    """Tests for the security flags."""

    def test_https_privacy_and_badge(self) -> None:
        """All three security flags are set."""
        html = page('<a href="/privacy">Privacy</a><div class="security-badge">Secure checkout</div>')
        result = analyze_trust_signals(PageDocument(html), "https://shop.example.com")

        assert result.security.has_ssl is True
        assert result.security.has_privacy_policy is True
        assert result.security.has_security_badge is True

    def test_http_has_no_ssl(self) -> None:
        """The HTTP variant of the same page has no SSL."""
        html = page('<a href="/privacy">Privacy</a><div class="security-badge">Secure checkout</div>')
        result = analyze_trust_signals(PageDocument(html), "http://shop.example.com")

        assert result.security.has_ssl is False
        assert result.security.has_privacy_policy is True
        assert result.security.has_security_badge is True

    def test_url_falls_back_to_document_url(self) -> None:
        result = analyze_trust_signals(PageDocument(blank_page(), "https://example.com"))

        assert result.security.has_ssl is True


class TestEEAT:
    """Tests for E-E-A-T scoring."""

    def test_empty_page(self) -> None:
        """An empty HTTP page has no E-E-A-T signals."""
        result = analyze_trust_signals(PageDocument(blank_page()), "http://example.com")

        assert result.eeat.experience == 0
        assert result.eeat.expertise == 0
        assert result.eeat.authoritativeness == 0
        assert result.eeat.trustworthiness == 0
        assert result.eeat.overall == 0

    def test_scores_capped_and_averaged(self) -> None:
        """Each dimension stays within 0-100 and overall is their mean."""
        result = analyze_trust_signals(PageDocument(website_page()), "https://acme.example.com")
        eeat = result.eeat

        for value in (eeat.experience, eeat.expertise, eeat.authoritativeness, eeat.trustworthiness):
            assert 0 <= value <= 100
        expected = round(
            (eeat.experience + eeat.expertise + eeat.authoritativeness + eeat.trustworthiness) / 4
        )
        assert eeat.overall == expected
        assert eeat.trustworthiness >= 30

    def test_authoritative_links(self) -> None:
        """Links to .edu/.gov domains add authority."""
        plain = analyze_trust_signals(PageDocument(page("<p>x</p>")), "https://a.com")
        linked = analyze_trust_signals(
            PageDocument(page('<a href="https://data.census.gov/table">x</a>')), "https://a.com"
        )

        assert linked.eeat.authoritativeness == plain.eeat.authoritativeness + 20


class TestBusinessSignals:
    """Tests for business legitimacy flags."""

    def test_company_page(self) -> None:
        result = analyze_trust_signals(PageDocument(website_page()), "https://acme.example.com")

        assert result.business.company_info is True
        assert result.business.contact_info is True
        assert result.business.legal_pages is True

    def test_to_dict(self) -> None:
        payload = analyze_trust_signals(PageDocument(blank_page()), "").to_dict()

        assert set(payload) == {"eeat", "business", "security"}
        assert payload["security"]["hasSSL"] is False
        assert "companyInfo" in payload["business"]
