"""Third-party DTOs."""

from apps.sso.application.third_party.dto.third_party import (
    BindCode,
    BindCredentials,
    CallbackOutcome,
    ExternalProfile,
    LinkedUser,
    NewAccountDetails,
    ThirdPartyAuthorizeResponse,
    ThirdPartyCallbackRequest,
    ThirdPartyCallbackResponse,
    UnlinkedIdentity,
)

__all__ = [
    "BindCode",
    "BindCredentials",
    "CallbackOutcome",
    "ExternalProfile",
    "LinkedUser",
    "NewAccountDetails",
    "ThirdPartyAuthorizeResponse",
    "ThirdPartyCallbackRequest",
    "ThirdPartyCallbackResponse",
    "UnlinkedIdentity",
]
