"""
Indeed Job Application Automation

Specialized strategy for Indeed Apply: an Apply button opens a multi-page
form; some postings instead send the applicant to the company site.
"""

from .base import JobApplicator
from .confirmation import ConfirmationRule
from .selectors import chain


class IndeedApplicator(JobApplicator):
    """Indeed-specific job applicator."""

    platform = "indeed"
    display_name = "Indeed"
    aliases = ('indeed.com', 'www.indeed.com')
    domains = ('indeed.com', 'indeed.co')

    page_marker = chain(
        "job page",
        'button[data-jk]',
        '.jobsearch-IndeedApplyButton-newDesign',
        '[data-testid="apply-button"]',
        '[data-testid="indeedApplyButton"]',
        '#indeedApplyButton',
    )
    auth_url_markers = ('/account/login', '/auth', '/login')

    apply_button = chain(
        "apply",
        'button[data-jk]',
        '.jobsearch-IndeedApplyButton-newDesign',
        '[data-testid="apply-button"]',
        '[data-testid="indeedApplyButton"]',
        '#indeedApplyButton',
        'button:has-text("Apply now")',
        '.ia-JobActions-apply',
    )
    apply_required = True
    form_marker = chain(
        "application form",
        '#input-applicant\\.name',
        'input[name="applicant.name"]',
        '[data-testid="contact-info"]',
        '.ia-BasePage',
    )

    full_name = chain(
        "full name",
        '#input-applicant\\.name',
        'input[name="applicant.name"]',
        'input[data-testid="contact-info-name"]',
        'input[placeholder*="name" i]',
    )
    email = chain(
        "email",
        '#input-applicant\\.email',
        'input[name="applicant.email"]',
        'input[data-testid="contact-info-email"]',
        'input[type="email"]',
        'input[placeholder*="email" i]',
    )
    phone = chain(
        "phone",
        '#input-applicant\\.phoneNumber',
        'input[name="applicant.phoneNumber"]',
        'input[data-testid="contact-info-phone"]',
        'input[type="tel"]',
        'input[placeholder*="phone" i]',
    )
    resume = chain(
        "resume upload",
        'input[data-testid="resume-upload"]',
        'input[type="file"][name="resume"]',
        'input[type="file"][accept*="pdf" i]',
        'input[type="file"]',
        require_visible=False,
    )
    cover_letter = chain(
        "cover letter",
        'textarea[name="coverLetter"]',
        'textarea[data-testid="cover-letter"]',
        'textarea[placeholder*="cover letter" i]',
        '#coverLetter',
    )
    linkedin_profile = chain(
        "LinkedIn profile",
        'input[name="linkedinProfile"]',
        'input[placeholder*="linkedin" i]',
        'input[name="socialProfile"]',
    )

    submit = chain(
        "submit",
        'button[data-testid="submit-application-button"]',
        'button:has-text("Submit your application")',
        '.ia-ApplyForm-submitButton',
        'button[type="submit"]:has-text("Submit")',
        require_enabled=True,
    )
    advance = chain(
        "continue",
        'button[data-testid*="continue"]',
        'button:has-text("Continue")',
        'button:has-text("Next")',
        require_enabled=True,
    )
    max_form_steps = 15

    confirmation = ConfirmationRule(
        region=chain(
            "confirmation region",
            '.ia-ConfirmationPage',
            '[data-testid="application-success"]',
            '.ia-ApplicationSuccess',
            '[data-testid="confirmation"]',
            '.confirmation',
        ),
        confirmation_id=chain(
            "confirmation id",
            '.confirmation-id',
            '.application-id',
            '[data-testid="confirmation-id"]',
        ),
        url_markers=('post-apply', 'confirmation', 'submitted'),
        text_phrases=(
            'your application has been submitted',
            'application submitted',
        ),
    )
