"""
Lever Job Application Automation

Lever postings link to an /apply page. Most forms use a single full-name
input; older ones split first and last name.
"""

from .base import JobApplicator
from .confirmation import ConfirmationRule
from .selectors import chain


class LeverApplicator(JobApplicator):
    """Lever applicant-tracking system."""

    platform = "lever"
    display_name = "Lever"
    aliases = ('lever.co', 'jobs.lever.co')
    domains = ('lever.co',)

    page_marker = chain(
        "posting page",
        '.posting-page',
        '.application-page',
        '.posting-header',
        'form[action*="apply"]',
    )
    apply_button = chain(
        "apply for this job",
        'a.postings-btn[href$="/apply"]',
        'a[data-qa="show-page-apply"]',
        'a:has-text("Apply for this job")',
    )
    form_marker = chain(
        "application form",
        '#application-form',
        '.application-form',
        'form[action*="apply"]',
        'input[name="name"]',
    )

    full_name = chain(
        "full name",
        'input[name="name"]',
        'input[placeholder*="Full name" i]',
        'input[data-qa="name-input"]',
    )
    first_name = chain(
        "first name",
        'input[placeholder*="First name" i]',
        'input[id*="first"]',
    )
    last_name = chain(
        "last name",
        'input[placeholder*="Last name" i]',
        'input[id*="last"]',
    )
    email = chain(
        "email",
        'input[name="email"]',
        'input[type="email"]',
    )
    phone = chain(
        "phone",
        'input[name="phone"]',
        'input[type="tel"]',
    )
    resume = chain(
        "resume upload",
        '#resume-upload-input',
        'input[type="file"][name="resume"]',
        '[data-qa="resume-upload"] input[type="file"]',
        'input[type="file"][accept*="pdf"]',
        'input[type="file"]',
        require_visible=False,
    )
    cover_letter = chain(
        "additional information",
        'textarea[name="comments"]',
        'textarea[name*="comments"]',
        'textarea[placeholder*="cover" i]',
        'textarea[name="additional_information"]',
    )
    linkedin_profile = chain(
        "LinkedIn profile",
        'input[name="urls[LinkedIn]"]',
        'input[name*="linkedin" i]',
        'input[placeholder*="linkedin" i]',
    )
    portfolio = chain(
        "portfolio",
        'input[name="urls[Portfolio]"]',
        'input[name="urls[Other website]"]',
        'input[placeholder*="portfolio" i]',
        'input[placeholder*="website" i]',
    )

    submit = chain(
        "submit",
        'button[data-qa="btn-submit"]',
        '#btn-submit',
        '[data-qa="submit-application"]',
        'button[type="submit"]',
        'button:has-text("Submit application")',
        require_enabled=True,
    )

    confirmation = ConfirmationRule(
        region=chain(
            "confirmation region",
            '[data-qa="msg-submit-success"]',
            '.application-confirmation',
            '.thanks',
        ),
        url_markers=('/thanks', 'thank', 'confirmation'),
        text_phrases=(
            'application sent',
            'thank you for your application',
            'successfully submitted',
            'application received',
            'we have received your application',
        ),
    )
