from __future__ import annotations

import io
from datetime import datetime, timezone

import pandas as pd
from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_current_active_user
from src.db.models.security import User
from src.db.session import get_async_session
from src.services.designs import DesignService
from src.services.inventory import InventoryService
from src.services.orders import OrderService

# PUBLIC_INTERFACE
router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
)

_FORMAT_QUERY = Query("csv", description="Export format: csv | xlsx | pdf")


def _export_dataframe(
    df: pd.DataFrame,
    filename_base: str,
    export_format: str,
) -> StreamingResponse:
    """
    Convert DataFrame to the requested format and return a StreamingResponse.

    Supported formats:
      - csv: text/csv
      - xlsx: application/vnd.openxmlformats-officedocument.spreadsheetml.sheet
      - pdf: application/pdf (simple tabular rendering)

    Unknown formats fall back to CSV.
    """
    export_format = (export_format or "csv").lower()

    if export_format in ("xlsx", "excel"):
        # Excel cannot store timezone-aware datetimes
        df = df.copy()
        for col in df.select_dtypes(include=["datetimetz"]).columns:
            df[col] = df[col].dt.tz_localize(None)
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Report")
        buffer.seek(0)
        headers = {
            "Content-Disposition": f'attachment; filename="{filename_base}.xlsx"'
        }
        return StreamingResponse(
            buffer,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers=headers,
        )

    if export_format == "pdf":
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.lib.styles import getSampleStyleSheet
        from reportlab.platypus import Paragraph, SimpleDocTemplate, Table, TableStyle

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=landscape(letter), leftMargin=18, rightMargin=18, topMargin=18, bottomMargin=18
        )
        styles = getSampleStyleSheet()
        stamp = datetime.now(tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
        elements: list = [Paragraph(f"{filename_base.replace('_', ' ').title()} ({stamp})", styles["Title"])]

        data = [list(df.columns)] + df.astype(str).values.tolist()
        table = Table(data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                    ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                    ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ]
            )
        )
        elements.append(table)
        doc.build(elements)
        buffer.seek(0)
        headers = {
            "Content-Disposition": f'attachment; filename="{filename_base}.pdf"'
        }
        return StreamingResponse(buffer, media_type="application/pdf", headers=headers)

    text = io.StringIO()
    df.to_csv(text, index=False)
    text.seek(0)
    headers = {
        "Content-Disposition": f'attachment; filename="{filename_base}.csv"'
    }
    return StreamingResponse(text, media_type="text/csv", headers=headers)


# PUBLIC_INTERFACE
@router.get(
    "/inventory",
    summary="Inventory report",
    description="Exports every balloon stock line with its quantity, threshold and status.",
    response_description="File stream (CSV/XLSX/PDF)",
    dependencies=[Depends(get_current_active_user)],
)
async def inventory_report(
    session: AsyncSession = Depends(get_async_session),
    format: str = _FORMAT_QUERY,
):
    items = await InventoryService(session).list_items()
    df = pd.DataFrame(
        [
            {
                "color": i.color.value,
                "size": i.size.value,
                "quantity": i.quantity,
                "threshold": i.threshold,
                "status": i.status.value,
                "updated_at": i.updated_at,
            }
            for i in items
        ],
        columns=["color", "size", "quantity", "threshold", "status", "updated_at"],
    )
    return _export_dataframe(df, "inventory_report", format)


# PUBLIC_INTERFACE
@router.get(
    "/orders",
    summary="Orders report",
    description="Exports the current user's supplier orders with totals (cost in dollars).",
    response_description="File stream (CSV/XLSX/PDF)",
)
async def orders_report(
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
    format: str = _FORMAT_QUERY,
):
    orders = await OrderService(session).list_orders(user)
    df = pd.DataFrame(
        [
            {
                "order_id": o.id,
                "design_id": o.design_id,
                "status": o.status.value,
                "supplier_name": o.supplier_name,
                "priority": o.priority,
                "total_quantity": o.total_quantity,
                "total_cost": o.total_cost / 100.0,
                "expected_delivery_date": o.expected_delivery_date,
                "created_at": o.created_at,
            }
            for o in orders
        ],
        columns=[
            "order_id",
            "design_id",
            "status",
            "supplier_name",
            "priority",
            "total_quantity",
            "total_cost",
            "expected_delivery_date",
            "created_at",
        ],
    )
    return _export_dataframe(df, "orders_report", format)


# PUBLIC_INTERFACE
@router.get(
    "/designs/{design_id}/materials",
    summary="Design materials report",
    description="Exports the balloon bill of materials of one design, one row per color.",
    response_description="File stream (CSV/XLSX/PDF)",
)
async def design_materials_report(
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
    format: str = _FORMAT_QUERY,
):
    summary = await DesignService(session).materials(design_id, user)
    rows = [
        {"color": color, "small_11in": c.small, "large_16in": c.large, "total": c.total}
        for color, c in sorted(summary.requirements.items())
    ]
    df = pd.DataFrame(rows, columns=["color", "small_11in", "large_16in", "total"])
    return _export_dataframe(df, f"design_{design_id}_materials", format)
