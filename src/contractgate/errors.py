"""Fatal error types for contractgate.

Policy failures are never exceptions; they are reported through a Verdict.
These errors mean the run could not be evaluated at all.
"""


class ContractGateError(Exception):
    """Base class for fatal contractgate errors."""
    pass


class SchemaLoadError(ContractGateError):
    """A current (new-revision) schema file is unreadable or malformed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot load schema '{path}': {reason}")


class ContractConfigError(ContractGateError):
    """The contract package or repository is not usable (manifest, git)."""
    pass
