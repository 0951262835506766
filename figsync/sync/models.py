from pydantic import BaseModel, Field


class SyncedFrame(BaseModel):
    document: str
    file_id: str
    node_id: str
    screenshot: str


class UnresolvedFrame(BaseModel):
    document: str
    file_id: str
    node_id: str


class SyncError(BaseModel):
    file: str
    error: str
    frame: str | None = None


class SyncReport(BaseModel):
    documents_scanned: int = 0
    documents_updated: int = 0
    frames: list[SyncedFrame] = Field(default_factory=list)
    unresolved: list[UnresolvedFrame] = Field(default_factory=list)
    errors: list[SyncError] = Field(default_factory=list)
    duration: float = 0.0

    @property
    def changes_detected(self) -> bool:
        return bool(self.frames)
