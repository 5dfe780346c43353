from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import StreamingResponse

from app.core.deps import get_export_service
from app.core.exceptions import ValidationError
from app.services.export_service import ExportService
from app.utils.months import MONTH_KEY_PATTERN

router = APIRouter()


@router.get("/csv/{month}")
async def export_month_csv(
    month: str = Path(..., pattern=MONTH_KEY_PATTERN),
    service: ExportService = Depends(get_export_service)
):
    """Download the month's expenses as CSV"""
    try:
        content = service.export_month_to_csv(month)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename=expenses-{month}.csv"
        }
    )
