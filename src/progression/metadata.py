"""Mod identity read by the host mod loader"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ModMetadata:
    mod_guid: str = "com.sp-tarkov.valens.progression"
    name: str = "Valens Progression"
    author: str = "Valens"
    version: str = "1.0.0"
    spt_version: str = "4.0.0"
    license: str = "CC-BY-NC-ND"
    contributors: Optional[List[str]] = None
    load_before: Optional[List[str]] = None
    load_after: Optional[List[str]] = None
    incompatibilities: Optional[List[str]] = None
    mod_dependencies: Dict[str, str] = field(default_factory=dict)
    url: Optional[str] = None
    is_bundle_mod: bool = False

    def describe(self) -> str:
        return f"{self.name} {self.version} by {self.author} (server {self.spt_version})"


METADATA = ModMetadata()
