"""Named page signals shared by the scorers and the citation estimator.

Text predicates take plain text so the revision estimator can run them
against rewritten copy that has no markup. Document predicates take a
PageDocument.
"""

import re

from engine.document import PageDocument


def _rx(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


QUESTION_RX = _rx(r"[?？]|\b(?:what|how|why|when|where|who)\b|무엇|어떻게|왜|언제|어디|누가")
FAQ_TEXT_RX = re.compile(r"FAQ|자주 묻는 질문")
RECENT_RX = _rx(r"202[4-9]|최근|recent|updated|latest")
STATISTICS_RX = _rx(r"\d+(?:\.\d+)?\s?%|statistic|study|studies|survey|통계|연구|조사")
QUOTATION_RX = _rx(r"[\"“”「」]|quotation|citation|출처|인용")
STEP_RX = _rx(r"\bstep\b|단계|순서|절차|first,|then,|finally")
COMPARISON_RX = _rx(r"비교|\bvs\.?\b|versus|compare|comparison|대비|차이|difference|pros and cons|장단점")
CASE_STUDY_RX = _rx(r"case study|사례|실제 사례|success story|성공 사례|고객 사례")
DEFINITION_RX = _rx(r"\bis defined as\b|\brefers to\b|\bmeans\b|이란|정의")
LANGUAGE_RX = _rx(r"\b(?:english|korean|japanese|chinese|spanish|french|german)\b|한국어|영어|일본어|중국어")
CADENCE_RX = _rx(r"regular|schedule|update|refresh|정기|주기|갱신|업데이트")
PERIOD_RX = _rx(r"week|month|day|daily|매주|매월|매일|주간|월간")
REFERENCE_RX = _rx(r"reference|bibliography|sources|참고\s?문헌|참고\s?자료|출처")
METHODOLOGY_RX = _rx(r"methodology|method|sample size|data set|dataset|방법론|연구 방법|표본")
CERTIFICATION_RX = _rx(r"certif|accredit|licensed|ISO\s?\d+|인증|자격")
PRIMARY_SOURCE_RX = _rx(r"pubmed|arxiv|doi\.org|ncbi\.nlm|scholar\.google")

DATE_SELECTOR = 'time, [datetime], [class*="date"], [class*="updated"]'
VIDEO_SELECTOR = (
    'video, iframe[src*="youtube"], iframe[src*="vimeo"], iframe[src*="dailymotion"]'
)
CHART_SELECTOR = 'canvas, svg, [class*="chart"], [id*="chart"]'
AUTHOR_SELECTOR = '[rel~="author"], [class*="author"], [id*="author"], meta[name="author"]'


# Text predicates


def has_question_text(text: str) -> bool:
    return bool(QUESTION_RX.search(text))


def mentions_faq(text: str) -> bool:
    return bool(FAQ_TEXT_RX.search(text))


def mentions_recency(text: str) -> bool:
    return bool(RECENT_RX.search(text))


def mentions_statistics(text: str) -> bool:
    return bool(STATISTICS_RX.search(text))


def has_quotations(text: str) -> bool:
    return bool(QUOTATION_RX.search(text))


def mentions_steps(text: str) -> bool:
    return bool(STEP_RX.search(text))


def mentions_comparison(text: str) -> bool:
    return bool(COMPARISON_RX.search(text))


def mentions_case_study(text: str) -> bool:
    return bool(CASE_STUDY_RX.search(text))


def mentions_languages(text: str) -> bool:
    return bool(LANGUAGE_RX.search(text))


def mentions_update_cadence(text: str) -> bool:
    return bool(CADENCE_RX.search(text)) and bool(PERIOD_RX.search(text))


# Document predicates


def has_date_element(document: PageDocument) -> bool:
    return document.has(DATE_SELECTOR)


def has_video(document: PageDocument) -> bool:
    return document.has(VIDEO_SELECTOR)


def has_chart(document: PageDocument) -> bool:
    return document.has(CHART_SELECTOR)


def has_list(document: PageDocument) -> bool:
    return document.has("ul, ol")


def has_author(document: PageDocument) -> bool:
    return document.json_ld_mentions("author") or document.has(AUTHOR_SELECTOR)


def has_faq(document: PageDocument) -> bool:
    return (
        mentions_faq(document.full_text)
        or document.has_class_or_id("faq")
        or document.json_ld_mentions("FAQPage")
    )


def image_count(document: PageDocument) -> int:
    return document.count("img")
