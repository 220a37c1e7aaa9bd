"""Authorization Commands."""

from apps.sso.application.authorization.commands.issue_code import (
    IssueAuthorizationCodeInteractor,
)

__all__ = ["IssueAuthorizationCodeInteractor"]
