"""Trust signal analysis (E-E-A-T, business legitimacy, security).

Each E-E-A-T dimension is an additive keyword/markup checklist capped at
100; the overall score is their mean. Business and security signals are
plain presence flags reported for insights, never scored.
"""

import re
from dataclasses import dataclass, field

import structlog

from engine.document import PageDocument

logger = structlog.get_logger(__name__)


def _rx(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


# Experience
EXPERIENCE_RX = _rx(r"경험|체험|실제|사례|experience|actual|case|trial")
USAGE_RX = _rx(r"사용|활용|적용|운영|\buse|utiliz|apply|operat")
TESTING_RX = _rx(r"테스트|시험|검증|실험|test|trial|verif|experiment")
RESULT_RX = _rx(r"결과|성과|효과|성공|result|outcome|effect|success")

# Expertise
CREDENTIAL_RX = _rx(r"자격|전문가|박사|인증|credential|expert|ph\.?d|certif")
EDUCATION_RX = _rx(r"학위|교육|경력|이력|degree|education|career|experience")
RESEARCH_RX = _rx(r"연구|논문|저널|학술|research|paper|journal|academic")

# Authoritativeness
CITATION_RX = _rx(r"인용|출처|참고|근거|citation|source|reference|evidence")
AWARD_RX = _rx(r"수상|인정|인증|상\b|award|recognition|certification|prize")
MEDIA_RX = _rx(r"언론|보도|기사|인터뷰|media|press|article|interview")

# Trustworthiness
POLICY_RX = _rx(r"개인정보|이용약관|정책|privacy policy|terms|policy")
TRANSPARENCY_RX = _rx(r"투명|공개|명확|공정|transparen|open|clear|fair")
GUARANTEE_RX = _rx(r"보장|환불|교환|a/s|보증|guarantee|refund|exchange|after service")

# Business
COMPANY_RX = _rx(r"회사|기업|법인|회사소개|company|corporation|about us")
CONTACT_RX = _rx(r"연락처|전화|이메일|주소|문의|contact|phone|email|address|inquiry")
LEGAL_RX = _rx(r"이용약관|개인정보|정책|법적|terms|privacy|policy|legal")
CERTIFICATION_RX = _rx(r"인증|ISO|수상|인정|certification|award|recognition")
REVIEW_RX = _rx(r"리뷰|후기|평가|추천|review|rating|testimonial|recommend")

PRIVACY_RX = _rx(r"개인정보|privacy")

AUTHORITATIVE_DOMAINS = (".edu", ".gov", ".ac.kr")
LEGAL_LINK_FRAGMENTS = ("terms", "privacy", "policy")


@dataclass
class EEATScores:
    experience: int = 0
    expertise: int = 0
    authoritativeness: int = 0
    trustworthiness: int = 0
    overall: int = 0

    def to_dict(self) -> dict:
        return {
            "experience": self.experience,
            "expertise": self.expertise,
            "authoritativeness": self.authoritativeness,
            "trustworthiness": self.trustworthiness,
            "overall": self.overall,
        }


@dataclass
class BusinessSignals:
    company_info: bool = False
    contact_info: bool = False
    legal_pages: bool = False
    certifications: bool = False
    reviews: bool = False

    def to_dict(self) -> dict:
        return {
            "companyInfo": self.company_info,
            "contactInfo": self.contact_info,
            "legalPages": self.legal_pages,
            "certifications": self.certifications,
            "reviews": self.reviews,
        }


@dataclass
class SecuritySignals:
    has_ssl: bool = False
    has_security_badge: bool = False
    has_privacy_policy: bool = False

    def to_dict(self) -> dict:
        return {
            "hasSSL": self.has_ssl,
            "hasSecurityBadge": self.has_security_badge,
            "hasPrivacyPolicy": self.has_privacy_policy,
        }


@dataclass
class TrustSignalsAnalysis:
    """Complete trust analysis of a page."""

    eeat: EEATScores = field(default_factory=EEATScores)
    business: BusinessSignals = field(default_factory=BusinessSignals)
    security: SecuritySignals = field(default_factory=SecuritySignals)

    def to_dict(self) -> dict:
        return {
            "eeat": self.eeat.to_dict(),
            "business": self.business.to_dict(),
            "security": self.security.to_dict(),
        }


def _points(*items: tuple[bool, int]) -> int:
    return min(100, sum(weight for passed, weight in items if passed))


class TrustSignalAnalyzer:
    """Scores E-E-A-T and detects business/security signals."""

    def analyze(self, document: PageDocument, url: str = "") -> TrustSignalsAnalysis:
        text = document.text
        is_https = _is_https(url or document.url)

        eeat = EEATScores(
            experience=self._experience(document, text),
            expertise=self._expertise(document, text),
            authoritativeness=self._authoritativeness(document, text),
            trustworthiness=self._trustworthiness(document, text, is_https),
        )
        eeat.overall = round(
            (eeat.experience + eeat.expertise + eeat.authoritativeness + eeat.trustworthiness) / 4
        )

        has_legal_link = any(
            fragment in href.lower() for href in document.links for fragment in LEGAL_LINK_FRAGMENTS
        )
        business = BusinessSignals(
            company_info=bool(COMPANY_RX.search(text)),
            contact_info=bool(CONTACT_RX.search(text)),
            legal_pages=bool(LEGAL_RX.search(text)) or has_legal_link,
            certifications=bool(CERTIFICATION_RX.search(text)),
            reviews=bool(REVIEW_RX.search(text)),
        )

        security = SecuritySignals(
            has_ssl=is_https,
            has_security_badge=document.has(
                '[class*="security"], [class*="ssl"], [class*="trust"], [class*="verified"]'
            ),
            has_privacy_policy=bool(PRIVACY_RX.search(text))
            or any("privacy" in href.lower() for href in document.links),
        )

        logger.debug("trust_signals_analyzed", eeat_overall=eeat.overall, https=is_https)

        return TrustSignalsAnalysis(eeat=eeat, business=business, security=security)

    def _experience(self, document: PageDocument, text: str) -> int:
        return _points(
            (bool(EXPERIENCE_RX.search(text)), 30),
            (bool(USAGE_RX.search(text)), 20),
            (bool(TESTING_RX.search(text)), 20),
            (bool(RESULT_RX.search(text)), 20),
            (
                document.has(
                    '[class*="testimonial"], [class*="review"], [class*="case-study"]'
                ),
                10,
            ),
        )

    def _expertise(self, document: PageDocument, text: str) -> int:
        has_author = document.json_ld_mentions("author") or document.has(
            '[rel~="author"], [class*="author"], [id*="author"]'
        )
        return _points(
            (has_author, 30),
            (bool(CREDENTIAL_RX.search(text)), 25),
            (bool(EDUCATION_RX.search(text)), 20),
            (bool(RESEARCH_RX.search(text)), 15),
            (
                document.has('[class*="expert"], [class*="specialist"], [class*="professional"]'),
                10,
            ),
        )

    def _authoritativeness(self, document: PageDocument, text: str) -> int:
        authoritative_link = any(
            domain in href.lower() for href in document.external_links for domain in AUTHORITATIVE_DOMAINS
        )
        return _points(
            (bool(CITATION_RX.search(text)), 25),
            (bool(AWARD_RX.search(text)), 20),
            (bool(MEDIA_RX.search(text)), 15),
            (
                document.has(
                    '[class*="award"], [class*="certification"], [class*="recognition"]'
                ),
                20,
            ),
            (authoritative_link, 20),
        )

    def _trustworthiness(self, document: PageDocument, text: str, is_https: bool) -> int:
        return _points(
            (is_https, 30),
            (bool(POLICY_RX.search(text)), 25),
            (bool(TRANSPARENCY_RX.search(text)), 15),
            (document.has('[class*="trust"], [class*="security"], [class*="verified"]'), 15),
            (document.has("time, [datetime]"), 15),
            (bool(GUARANTEE_RX.search(text)), 5),
        )


def _is_https(url: str) -> bool:
    return url.lower().startswith("https://")


def analyze_trust_signals(document: PageDocument, url: str = "") -> TrustSignalsAnalysis:
    """Convenience function to analyze trust signals."""
    return TrustSignalAnalyzer().analyze(document, url)
