"""Result objects returned by bill generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class GenerateResult:
    manifest_path: Path
    count: int
    added: int
    closure_size: int
    complete: bool = True
    failures: Dict[str, str] = field(default_factory=dict)
    # rendered bill, only set for dry runs
    content: Optional[str] = None

    @property
    def exit_code(self) -> int:
        # the bill is written either way; failed or unexpanded coordinates still fail the run
        return 1 if self.failures or not self.complete else 0

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "manifestPath": str(self.manifest_path),
            "count": self.count,
            "added": self.added,
            "closureSize": self.closure_size,
            "complete": self.complete,
            "failures": dict(sorted(self.failures.items())),
            "exitCode": self.exit_code,
        }
        if self.content is not None:
            payload["content"] = self.content
        return payload
