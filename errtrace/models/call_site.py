"""Call-site and trace-hop data models."""

from pydantic import BaseModel, ConfigDict


class CallSite(BaseModel):
    """Source location reported by the stack capture."""

    model_config = ConfigDict(frozen=True)

    file: str = ""
    operation: str = ""
    line: int = 0


class TraceEntry(CallSite):
    """One propagation hop recorded on an error record."""

    def __str__(self) -> str:
        return f"File: {self.file}; Operation: {self.operation}; Line: {self.line};"

    @classmethod
    def from_site(cls, site: CallSite) -> "TraceEntry":
        return cls(file=site.file, operation=site.operation, line=site.line)
