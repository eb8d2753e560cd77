"""Per-resource provider operations.

Each module provides async functions that build and submit exactly one
provider call for one resource kind.  Managers accept a ``Gateway`` as the
first parameter and raise domain exceptions (``RemoteOperationError``),
never exit the process -- that translation is the CLI's responsibility.
Ordering multi-step sequences is the reconciler's job.
"""
