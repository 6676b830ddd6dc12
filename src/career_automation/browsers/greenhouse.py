"""
Greenhouse Job Application Automation

Greenhouse renders the application form directly on the job posting, with
markup that is very consistent across companies.
"""

from .base import JobApplicator
from .confirmation import ConfirmationRule
from .selectors import chain


class GreenhouseApplicator(JobApplicator):
    """Greenhouse applicant-tracking system."""

    platform = "greenhouse"
    display_name = "Greenhouse"
    aliases = ('greenhouse.io', 'boards.greenhouse.io', 'job-boards.greenhouse.io', 'grnh.se')
    domains = ('greenhouse.io', 'grnh.se')

    page_marker = chain(
        "application form",
        '#application_form',
        '#application-form',
        '.application-form',
        '[data-provides="application-form"]',
    )

    first_name = chain(
        "first name",
        '#first_name',
        'input[name="first_name"]',
        'input[id*="first_name"]',
        'input[placeholder*="First name" i]',
        '#application_first_name',
    )
    last_name = chain(
        "last name",
        '#last_name',
        'input[name="last_name"]',
        'input[id*="last_name"]',
        'input[placeholder*="Last name" i]',
        '#application_last_name',
    )
    email = chain(
        "email",
        '#email',
        'input[name="email"]',
        'input[type="email"]',
        '#application_email',
    )
    phone = chain(
        "phone",
        '#phone',
        'input[name="phone"]',
        'input[type="tel"]',
        '#application_phone',
    )
    resume = chain(
        "resume upload",
        '#resume',
        'input[type="file"][name="resume"]',
        'input[type="file"][id*="resume"]',
        '#application_resume',
        'input[type="file"][accept*="pdf" i]',
        'input[type="file"]',
        require_visible=False,
    )
    cover_letter = chain(
        "cover letter",
        '#cover_letter',
        'textarea[name="cover_letter"]',
        '#application_cover_letter',
        'textarea[placeholder*="cover letter" i]',
        'textarea[id*="cover"]',
    )
    linkedin_profile = chain(
        "LinkedIn profile",
        '#linkedin',
        'input[name="linkedin"]',
        'input[placeholder*="linkedin" i]',
        'input[aria-label*="linkedin" i]',
        '#application_linkedin',
    )
    portfolio = chain(
        "portfolio",
        '#website',
        'input[name="website"]',
        'input[name="portfolio"]',
        'input[placeholder*="website" i]',
        'input[placeholder*="portfolio" i]',
    )

    submit = chain(
        "submit",
        '#submit_application',
        'input[type="submit"]',
        'button[type="submit"]',
        'input[value*="Submit" i]',
        'button:has-text("Submit")',
        '.btn-submit',
        '#application_submit',
        require_enabled=True,
    )

    confirmation = ConfirmationRule(
        region=chain(
            "confirmation region",
            '#application_confirmation',
            '.application-confirmation',
            '.confirmation',
            '.success-message',
            '.application-submitted',
            '#confirmation',
        ),
        confirmation_id=chain(
            "confirmation id",
            '.confirmation-number',
            '.application-id',
            '.reference-number',
            '#confirmation_id',
        ),
        url_markers=('confirmation', 'submitted', 'thank'),
        text_phrases=(
            'thank you for applying',
            'application submitted',
            'successfully submitted',
            'application received',
        ),
    )
