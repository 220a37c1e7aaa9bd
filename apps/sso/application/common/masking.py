"""Secret masking for logs."""

MASK_VISIBLE_CHARS = 8
MASK_MIN_LENGTH = 16
MASK_PLACEHOLDER = "***"


def mask(value: str | None) -> str:
    """민감한 값의 앞부분만 남기고 가립니다.

    16자 미만은 전부 가리고, 그 이상은 길이의 1/4 (최대 8자)까지만 노출합니다.
    """
    if not value:
        return "<empty>"
    if len(value) < MASK_MIN_LENGTH:
        return MASK_PLACEHOLDER
    return f"{value[:min(MASK_VISIBLE_CHARS, len(value) // 4)]}..."
