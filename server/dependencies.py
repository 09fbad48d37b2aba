"""FastAPI dependencies for orchestrator access."""


def get_orchestrator():
    """Dependency to get orchestrator instance (singleton pattern)."""
    from orchestrator.lookup_orchestrator import LookupOrchestrator

    if not hasattr(get_orchestrator, "_instance"):
        get_orchestrator._instance = LookupOrchestrator()
    return get_orchestrator._instance
