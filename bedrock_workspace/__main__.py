from __future__ import annotations

from bedrock_workspace.cli import main

main()
