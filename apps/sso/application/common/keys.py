"""Ephemeral store key prefixes."""

STATE_KEY_PREFIX = "oauth2:state:"
PKCE_STATE_KEY_PREFIX = "pkce:state:"
AUTHORIZATION_CODE_KEY_PREFIX = "oauth2:code:auth:"
BIND_CODE_KEY_PREFIX = "oauth2:code:bind:"
TOKEN_HANDOFF_KEY_PREFIX = "oauth2:token:"

# 외부 플랫폼 authorize 요청용 state
THIRD_PARTY_STATE_KEY_PREFIX = "{platform}:oauth2:state:"


def third_party_state_prefix(platform: str) -> str:
    """플랫폼별 state prefix (예: github:oauth2:state:)."""
    return THIRD_PARTY_STATE_KEY_PREFIX.format(platform=platform)
