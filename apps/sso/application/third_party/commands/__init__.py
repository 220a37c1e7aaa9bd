"""Third-party Commands."""

from apps.sso.application.third_party.commands.authorize import ThirdPartyAuthorizeInteractor
from apps.sso.application.third_party.commands.bind import (
    BindAccountInteractor,
    CreateAccountInteractor,
)
from apps.sso.application.third_party.commands.callback import ThirdPartyCallbackInteractor

__all__ = [
    "BindAccountInteractor",
    "CreateAccountInteractor",
    "ThirdPartyAuthorizeInteractor",
    "ThirdPartyCallbackInteractor",
]
