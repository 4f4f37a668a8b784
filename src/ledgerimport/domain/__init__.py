"""Domain layer for ledgerimport application."""

# Services depend on the database layer, which imports entities from here;
# load them lazily to avoid circular imports.
_SERVICES = {
    "StatementImportService": "ledgerimport.domain.statement_import",
    "AssociationSyncService": "ledgerimport.domain.association_sync",
}


def __getattr__(name):
    if name in _SERVICES:
        import importlib
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "StatementImportService",
    "AssociationSyncService",
]
