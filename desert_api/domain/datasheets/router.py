"""Datasheet router - product datasheet PDFs"""

import logging

from fastapi import APIRouter, Depends, Response

from ...exceptions import DesertSolutionsError
from ...security import require_api_key
from .schemas import DatasheetRequest
from .service import DatasheetService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Datasheets"], dependencies=[Depends(require_api_key)])


def get_datasheet_service() -> DatasheetService:
    """Dependency injection for DatasheetService"""
    return DatasheetService()


@router.post("/datasheet")
async def generate_datasheet(
    data: DatasheetRequest,
    service: DatasheetService = Depends(get_datasheet_service),
):
    """Generate a datasheet PDF or send it via email"""
    try:
        datasheet, document_hash, rendered = await service.render(data)

        if data.returnPdf:
            return Response(
                content=rendered[0].pdf,
                media_type="application/pdf",
                headers={
                    "Content-Disposition": f'attachment; filename="datasheet-{datasheet.sku}.pdf"'
                },
            )

        return await service.send(data, datasheet, document_hash, rendered)
    except DesertSolutionsError:
        raise
    except Exception as e:
        logger.error(f"Error generating datasheet for {data.productId}: {e}")
        raise DesertSolutionsError("Failed to generate datasheet", str(e), status_code=500)
