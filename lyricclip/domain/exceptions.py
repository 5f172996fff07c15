# lyricclip/domain/exceptions.py


class SearchProviderError(RuntimeError):
    """Raised when an upstream search API cannot be reached or answers badly."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
