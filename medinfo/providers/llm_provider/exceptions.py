from medinfo.providers.exceptions import LLMProviderError


class LLMProviderInitializationError(LLMProviderError):
    """
    Raised when provider initialization fails

    Examples: Missing API keys, invalid configuration
    """

    pass


class LLMProviderExecutionError(LLMProviderError):
    """
    Raised when LLM execution fails

    Examples: Non-success status, network failure, timeout
    """

    pass


class LLMProviderAuthenticationError(LLMProviderExecutionError):
    """
    Raised when authentication fails

    Examples: Invalid API key, expired credentials
    """

    pass


class LLMProviderRateLimitError(LLMProviderExecutionError):
    """
    Raised when rate limits or quotas are hit
    """

    pass


class LLMProviderEmptyResponseError(LLMProviderError):
    """
    Raised when the provider answers successfully but generates no text
    """

    pass
