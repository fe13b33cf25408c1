from __future__ import annotations

__all__ = ["PACKAGE_NAME", "__version__"]

PACKAGE_NAME = "bedrock-workspace"
__version__ = "1.0.0"
