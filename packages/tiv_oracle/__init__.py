from packages.tiv_core.config import TIVConfig
from .base import IOracleProvider
from .mock import MockOracleProvider
from .client import OracleClient


def get_oracle_provider(config: TIVConfig) -> IOracleProvider:
    """
    Factory to get the Oracle Provider instance.

    Gemini is used when an API key is configured and the provider
    is not forced to 'mock'; otherwise the deterministic mock.
    """
    if config.ORACLE_PROVIDER == "mock" or not config.GEMINI_API_KEY:
        return MockOracleProvider(latency_ms=config.MOCK_LATENCY_MS)

    if config.ORACLE_PROVIDER == "gemini":
        from .gemini_impl import GeminiOracleProvider
        return GeminiOracleProvider(config)

    raise ValueError(f"Unknown oracle provider: {config.ORACLE_PROVIDER}")


__all__ = [
    "IOracleProvider",
    "MockOracleProvider",
    "OracleClient",
    "get_oracle_provider",
]
