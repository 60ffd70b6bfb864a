"""Turn raw job-application emails into status updates."""

from jobtrack.matching.company import extract_company_name
from jobtrack.matching.status import detect_status
from jobtrack.matching.types import EmailMessage, EmailStatusUpdate, ParsedEmail

# Applicant-tracking and job-board senders the email classifier should search.
JOB_PLATFORM_DOMAINS: list[str] = [
    "greenhouse.io",
    "lever.co",
    "workday.com",
    "myworkdayjobs.com",
    "ashbyhq.com",
    "icims.com",
    "jobvite.com",
    "smartrecruiters.com",
    "taleo.net",
    "brassring.com",
    "ultipro.com",
    "successfactors.com",
    "linkedin.com",
    "indeed.com",
]


def build_gmail_search_query(days_back: int = 14) -> str:
    """Gmail search query covering job-platform senders and status-like subjects."""
    senders = " OR ".join(f"from:{domain}" for domain in JOB_PLATFORM_DOMAINS)
    return f"({senders} OR subject:(application OR interview OR offer)) newer_than:{days_back}d"


def parse_email(email: EmailMessage) -> ParsedEmail:
    """Classify an email's status and guess the company that sent it."""
    detection = detect_status(email.subject, email.snippet, email.body)
    return ParsedEmail(
        email=email,
        status=detection.status,
        company=extract_company_name(email.sender, email.subject),
        confidence=detection.confidence,
    )


def email_to_update(parsed: ParsedEmail, min_confidence: float = 0.0) -> EmailStatusUpdate | None:
    """Return an update only when both a status and a company were found."""
    if parsed.status is None or not parsed.company:
        return None
    if parsed.confidence < min_confidence:
        return None
    return EmailStatusUpdate(company=parsed.company, status=parsed.status)
