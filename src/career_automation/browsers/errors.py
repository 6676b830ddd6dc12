"""
Automation Errors

Exceptions raised inside an application attempt. The orchestrator converts
every one of them into an ApplicationResult; none reaches the caller.
"""


class AutomationError(Exception):
    """An attempt was made and could not complete."""
    pass


class NavigationTimeout(AutomationError):
    """The job page never showed its platform load marker."""
    pass


class InitiatingControlNotFound(AutomationError):
    """A required Apply control was not found on the job page."""
    pass


class ApplicationFormNotFound(AutomationError):
    """The application form did not appear after opening it."""
    pass


class SubmitControlNotFound(AutomationError):
    """No enabled submit control was found."""
    pass


class RedirectRequired(AutomationError):
    """The user has to finish this application manually."""
    pass


class UnsupportedPlatform(RedirectRequired):
    """No strategy is registered for the platform."""

    def __init__(self, platform: str):
        super().__init__("Platform not supported for automation")
        self.platform = platform


class AuthenticationRequired(RedirectRequired):
    """The platform put an authentication wall in front of the form."""
    pass


class ExternalApplicationRequired(RedirectRequired):
    """The platform handed the application off to an external site."""
    pass

