"""Shared pytest fixtures."""

import pytest


@pytest.fixture
def parse_job_clipboard() -> str:
    """A typical "Parse Job" shortcut answer as it lands on the clipboard."""
    return (
        "Role: Senior Platform Engineer\n"
        "Company: Initech\n"
        "Location: Austin, TX\n"
        "Timezone: CST\n"
        "Job Posting URL: https://boards.greenhouse.io/initech/jobs/42\n"
    )
