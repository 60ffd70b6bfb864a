"""Job-board detection from a posting URL."""

# Checked in order; the first fragment found in the URL names the source.
_SOURCE_RULES: list[tuple[tuple[str, ...], str]] = [
    (("linkedin.com",), "LinkedIn"),
    (("indeed.com",), "Indeed"),
    (("glassdoor.com",), "Glassdoor"),
    (("wellfound.com", "angel.co"), "Wellfound"),
    (("lever.co",), "Lever"),
    (("greenhouse.io", "boards.greenhouse"), "Greenhouse"),
    (("workday.com", "myworkdayjobs.com"), "Workday"),
    (("jobright.ai",), "Jobright"),
    (("handshake",), "Handshake"),
    (("ziprecruiter.com",), "ZipRecruiter"),
    (("dice.com",), "Dice"),
    (("simplyhired.com",), "SimplyHired"),
    (("monster.com",), "Monster"),
    (("jobs.", "careers."), "Company Site"),
]

OTHER_SOURCE = "Other"

#: Sources offered by the intake form, job boards first.
SOURCE_CHOICES: list[str] = [
    "LinkedIn",
    "Indeed",
    "Glassdoor",
    "Wellfound",
    "Greenhouse",
    "Lever",
    "Workday",
    "Jobright",
    "Handshake",
    "ZipRecruiter",
    "Company Site",
    "Referral",
    "Dice",
    "Monster",
    "SimplyHired",
    OTHER_SOURCE,
]


def detect_source(url: str) -> str:
    for fragments, source in _SOURCE_RULES:
        if any(fragment in url for fragment in fragments):
            return source
    return OTHER_SOURCE
