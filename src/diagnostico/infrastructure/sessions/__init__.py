from .memory_store import InMemoryWizardStore

__all__ = ["InMemoryWizardStore"]
