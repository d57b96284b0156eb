class RuleImportValidationError(Exception):
    """Raised when a rule file is malformed; the whole import is rejected."""
