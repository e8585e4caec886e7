"""contractgate: contract schema compatibility classifier + version-bump gate."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("contractgate")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from contractgate.api import check_contracts, classify_files, run_check
from contractgate.contracts import ChangeRecord, CheckResult
from contractgate.codes import ChangeCode, ExitCode
from contractgate.errors import ContractConfigError, ContractGateError, SchemaLoadError

__all__ = [
    "__version__",
    "check_contracts",
    "classify_files",
    "run_check",
    "ChangeRecord",
    "CheckResult",
    "ChangeCode",
    "ExitCode",
    "ContractGateError",
    "ContractConfigError",
    "SchemaLoadError",
]
