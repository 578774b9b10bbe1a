"""
Value types shared by the bundler stages.
"""
from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict


class ModuleRef(BaseModel):
    """A require target as written in source, plus the file that wrote it."""
    model_config = ConfigDict(frozen=True)

    target: str
    requiring_file: str
    line: int = 0


class DynamicRequireWarning(BaseModel):
    """A require call whose argument is not a string literal."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["dynamic-require"] = "dynamic-require"
    file: str
    line: int
    expression: str

    def __str__(self):
        return f"{self.file}:{self.line}: cannot bundle dynamic require({self.expression})"


class AliasConflictWarning(BaseModel):
    """One require string resolved to two different files."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["alias-conflict"] = "alias-conflict"
    alias: str
    kept: str
    ignored: str
    requiring_file: str

    def __str__(self):
        return (f"{self.requiring_file}: '{self.alias}' resolves to {self.ignored}, "
                f"but the bundle already maps it to {self.kept}")


BundleWarning = Union[DynamicRequireWarning, AliasConflictWarning]


class BundleResult(BaseModel):
    """Output of a successful bundle() call."""
    source: str
    warnings: List[BundleWarning] = []
    modules: List[str] = []
