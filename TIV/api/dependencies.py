from functools import lru_cache

from packages.tiv_core.config import TIVConfig
from packages.tiv_oracle import OracleClient, get_oracle_provider
from packages.tiv_profile.base import IDocumentExtractor
from packages.tiv_profile.local_provider import LocalDocumentExtractor
from packages.tiv_session.infrastructure.memory_repo import MemorySessionRepository
from packages.tiv_session.policy import SessionPolicy, RegenerationMode, get_policy
from packages.tiv_session.repository import SessionStateRepository
from packages.tiv_service.admin_query import AdminQueryService
from packages.tiv_service.concurrency import ConcurrencyManager
from packages.tiv_service.session_service import SessionService


@lru_cache
def get_config() -> TIVConfig:
    return TIVConfig.load()

# --- Providers (External Adapters) ---

@lru_cache
def get_oracle_client() -> OracleClient:
    """
    Singleton Oracle Client (Gemini when configured, Mock otherwise).
    """
    config = get_config()
    return OracleClient(get_oracle_provider(config), timeout_sec=config.ORACLE_TIMEOUT_SEC)

@lru_cache
def get_document_extractor() -> IDocumentExtractor:
    return LocalDocumentExtractor()

# --- Repositories (Persistence) ---

@lru_cache
def get_session_state_repository() -> SessionStateRepository:
    """
    Singleton Session State Repository (Memory).
    Must be shared across requests to maintain state.
    """
    return MemorySessionRepository()

@lru_cache
def get_concurrency_manager() -> ConcurrencyManager:
    """
    Singleton so every request sees the same per-candidate locks.
    """
    return ConcurrencyManager()

@lru_cache
def get_session_policy() -> SessionPolicy:
    config = get_config()
    mode = RegenerationMode.OVERWRITE if config.ALLOW_QUESTION_REGENERATION else RegenerationMode.REJECT
    return get_policy(
        mode,
        enforce_deadlines=config.ENFORCE_ANSWER_DEADLINES,
        deadline_grace_sec=config.DEADLINE_GRACE_SEC,
    )

# --- Domain Services (Application Logic) ---

def get_session_service() -> SessionService:
    """
    Transient Session Service.
    Injected with Singleton Repositories and Providers.
    """
    return SessionService(
        state_repo=get_session_state_repository(),
        oracle=get_oracle_client(),
        policy=get_session_policy(),
        concurrency_manager=get_concurrency_manager(),
        default_role=get_config().DEFAULT_ROLE,
    )

def get_admin_query_service() -> AdminQueryService:
    """
    Transient Admin Query Service (Read-Only).
    """
    return AdminQueryService(repository=get_session_state_repository())
