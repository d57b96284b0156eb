class DocumentNotFoundError(Exception):
    """Raised when a document id or name is not in the registry."""
