"""
Admin Order Endpoints

    GET /get-all-orders  every order in the system
    GET /export          the same orders as an .xlsx download
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from foodorder.auth.deps import get_app_settings, require_admin
from foodorder.core.config import Settings
from foodorder.core.errors import AppError
from foodorder.database import get_db
from foodorder.models import User
from foodorder.schemas import ErrorResponse, OrderResponse
from foodorder.services.excel_manager import ExcelManager
from foodorder.services.orders import OrderStore

router = APIRouter(
    tags=["Admin"],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_excel_manager(settings: Settings = Depends(get_app_settings)) -> ExcelManager:
    return ExcelManager(
        settings.data_directory,
        filename=settings.export_filename,
        lock_timeout=settings.export_lock_timeout,
    )


@router.get(
    "/get-all-orders",
    response_model=List[OrderResponse],
    summary="List All Orders",
)
async def get_all_orders(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> List[OrderResponse]:
    orders = await OrderStore(db).list_all()
    return [OrderResponse.model_validate(o) for o in orders]


@router.get(
    "/export",
    response_class=Response,
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}}},
    summary="Export Orders (Excel)",
)
async def export_orders(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    manager: ExcelManager = Depends(get_excel_manager),
) -> Response:
    """Write every order to the export workbook and download it."""
    orders = await OrderStore(db).list_all()

    # pandas/openpyxl and the file lock block
    result = await run_in_threadpool(manager.export_orders, orders)
    if not result["success"]:
        raise AppError("Export failed", detail=result["message"])

    # content was read while the export lock was held
    return Response(
        content=result["content"],
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{manager.orders_file.name}"'},
    )
