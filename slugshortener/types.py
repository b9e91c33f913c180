from typing import Any
from collections.abc import Callable


# Type aliases for Python dictionaries
type ServiceConfiguration = dict[str, Any]
type KeyspaceInfo = dict[str, Any]

# Zero-argument callable producing a fresh candidate slug
type SlugFactory = Callable[[], str]
