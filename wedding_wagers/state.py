"""
Global application state
Shared resources accessible across all modules
"""
from wedding_wagers.identity import IdentityProvider
from wedding_wagers.models import AppConfig
from wedding_wagers.store import DocumentStore

# Deployment configuration, replaced at startup from config/settings.yaml
CONFIG: AppConfig = AppConfig()

# Document store holding bets, answers, keys and homepageWinners
STORE: DocumentStore = DocumentStore()

# Users, verification tokens and live sessions
IDENTITY: IdentityProvider = IdentityProvider()


def reset() -> None:
    """Fresh empty state (startup and tests)"""
    global CONFIG, STORE, IDENTITY
    CONFIG = AppConfig()
    STORE = DocumentStore()
    IDENTITY = IdentityProvider()
