"""
LinkedIn Job Application Automation

Specialized strategy for LinkedIn Easy Apply. Easy Apply only works for a
signed-in member, so a guest session is detected as an authentication wall
and redirected to manual application.
"""

from playwright.async_api import Page

from .base import JobApplicator
from .confirmation import ConfirmationRule
from .selectors import chain


class LinkedInApplicator(JobApplicator):
    """LinkedIn-specific job applicator with Easy Apply support."""

    platform = "linkedin"
    display_name = "LinkedIn"
    aliases = ('linkedin.com', 'www.linkedin.com')
    domains = ('linkedin.com',)

    page_marker = chain(
        "job page",
        '.job-details-jobs-unified-top-card__job-title',
        '.jobs-unified-top-card',
        '.jobs-apply-button',
    )
    auth_url_markers = ('/authwall', '/login', '/checkpoint', '/uas/login', '/signup')
    auth_wall = chain(
        "auth wall",
        '.authwall-join-form',
        '.authwall-sign-in-form',
        'form[action*="/uas/login-submit"]',
        '.contextual-sign-in-modal',
    )
    signed_in = chain(
        "member navigation",
        '.global-nav__me-photo',
        '.nav-item__profile-member-photo',
        '.global-nav__me',
        require_visible=False,
    )

    apply_button = chain(
        "easy apply",
        'button.jobs-apply-button',
        'button:has-text("Easy Apply")',
        '[data-control-name="jobdetails_topcard_inapply"]',
        '.jobs-apply-button--top-card',
    )
    apply_required = True
    form_marker = chain(
        "easy apply modal",
        '.jobs-easy-apply-content',
        '.jobs-easy-apply-modal',
    )

    email = chain(
        "email",
        'input[id*="email"]',
        'input[name*="email"]',
    )
    phone = chain(
        "phone",
        'input[id*="phoneNumber"]',
        'input[id*="phone"]',
        'input[name*="phone"]',
    )
    resume = chain(
        "resume upload",
        'input[type="file"][name*="resume"]',
        'input[type="file"][aria-label*="resume" i]',
        '.jobs-document-upload__upload-button input[type="file"]',
        'input[type="file"]',
        require_visible=False,
    )
    cover_letter = chain(
        "cover letter",
        'textarea[id*="cover"]',
        'textarea[name*="cover"]',
    )

    submit = chain(
        "submit",
        'button[aria-label*="Submit application"]',
        'button:has-text("Submit application")',
        require_enabled=True,
    )
    advance = chain(
        "next",
        'button[aria-label*="Continue"]',
        'button[aria-label*="Review"]',
        'button:has-text("Next")',
        'button:has-text("Review")',
        require_enabled=True,
    )
    max_form_steps = 10

    confirmation = ConfirmationRule(
        region=chain(
            "confirmation region",
            '.jobs-apply-success',
            '.artdeco-inline-feedback--success',
        ),
        url_markers=('post-apply',),
        text_phrases=(
            'application submitted',
            'your application was sent',
        ),
    )

    async def detect_auth_wall(self, page: Page) -> bool:
        """A guest session is as good as an auth wall for Easy Apply."""
        if await super().detect_auth_wall(page):
            return True
        return await self.signed_in.resolve(page) is None
