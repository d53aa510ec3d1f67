"""
builtin-mock: Mock built-in and module-level functions in tests.

This library replaces a function inside one module namespace with a stand-in,
records every call made to it, and restores the original behaviour when the
mock is disabled. Code under test is not modified: the mock installs a hook
into the module namespace, and the hook asks a process-wide registry on every
call whether a mock is enabled for it.

Example:
    >>> from builtin_mock import MockBuilder
    >>> mock = (
    ...     MockBuilder()
    ...     .set_namespace("myapp.clock")
    ...     .set_name("time")
    ...     .set_function(lambda: 1417011228.0)
    ...     .build()
    ... )
    >>> mock.enable()
    >>> # calls to time() inside myapp.clock now return 1417011228.0
    >>> mock.disable()

Only unqualified calls resolved through the mocked namespace are affected.
``len(x)`` inside ``myapp.util`` is mocked by ``Mock("myapp.util", "len",
...)``; ``builtins.len(x)`` is not. Mocking a module's own attribute, such as
``Mock("time", "sleep", ...)``, also affects ``time.sleep(...)`` callers.

If the code under test binds the function before the mock is enabled (e.g.
``from myapp.clock import time`` at import time), call ``define()`` on the
mock beforehand so that the bound name is already the hook.
"""

__version__ = "1.0.0"

# Core data models
from builtin_mock.models import (
    FunctionIdentity,
    RecordedCall,
    Invocation,
    Installation,
    canonical_function_name,
    BuiltinMockError,
    MockEnabledError,
    MockRegistryError,
    MockNamespaceError,
    MockBuilderError,
)

# Interception engine
from builtin_mock.recorder import Recorder
from builtin_mock.registry import MockRegistry
from builtin_mock.mock import Mock, Spy

# Convenience layer
from builtin_mock.builder import MockBuilder, FunctionProvider
from builtin_mock.functions import (
    Incrementable,
    FixedValueFunction,
    FixedTimeFunction,
    SleepFunction,
)
from builtin_mock.environment import (
    Deactivatable,
    MockEnvironment,
    SleepEnvironmentBuilder,
)

# Public API (controls what's exported with "from builtin_mock import *")
__all__ = [
    # Version
    "__version__",
    # Models
    "FunctionIdentity",
    "RecordedCall",
    "Invocation",
    "Installation",
    "canonical_function_name",
    # Exceptions
    "BuiltinMockError",
    "MockEnabledError",
    "MockRegistryError",
    "MockNamespaceError",
    "MockBuilderError",
    # Engine
    "Recorder",
    "MockRegistry",
    "Mock",
    "Spy",
    # Builder
    "MockBuilder",
    "FunctionProvider",
    # Functions
    "Incrementable",
    "FixedValueFunction",
    "FixedTimeFunction",
    "SleepFunction",
    # Environments
    "Deactivatable",
    "MockEnvironment",
    "SleepEnvironmentBuilder",
]
