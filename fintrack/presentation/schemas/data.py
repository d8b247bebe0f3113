"""Import/export Pydantic schemas."""

from pydantic import BaseModel, Field

from fintrack.application.dto import ImportMode, ImportResult


class ImportResultSchema(BaseModel):
    """Schema for the outcome of POST /v1/data/import."""

    message: str = Field(..., examples=["Merged 3 new transactions! 📤"])
    mode: ImportMode
    received: int = Field(..., ge=0)
    imported: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    @classmethod
    def from_result(cls, result: ImportResult) -> "ImportResultSchema":
        if result.mode == ImportMode.MERGE:
            message = f"Merged {result.imported} new transactions! 📤"
        else:
            message = f"Imported {result.imported} transactions! 📤"
        return cls(
            message=message,
            mode=result.mode,
            received=result.received,
            imported=result.imported,
            skipped=result.skipped,
            total=result.total,
        )
