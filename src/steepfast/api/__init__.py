from steepfast.api.export import Export

__all__ = ["Export"]
