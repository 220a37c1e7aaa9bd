"""Application Error Base."""


class ApplicationError(Exception):
    """애플리케이션 계층 예외의 기반 클래스."""

    def __init__(self, message: str = "Application error") -> None:
        self.message = message
        super().__init__(message)
