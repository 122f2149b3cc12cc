"""
Order export
CSV and Excel downloads of the order list
"""
import csv
import io
from io import BytesIO
from datetime import datetime
from typing import List, Dict, Any

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from tulipa.models.order import YES_NO_LABELS

ORDER_COLUMNS = [
    {'field': 'order_number', 'header': 'No.', 'width': 8},
    {'field': 'customer', 'header': 'Customer', 'width': 24},
    {'field': 'price', 'header': 'Price', 'width': 10},
    {'field': 'sort', 'header': 'Variety', 'width': 16},
    {'field': 'flower_quantity', 'header': 'Flowers', 'width': 10},
    {'field': 'packaging', 'header': 'Packaging', 'width': 10},
    {'field': 'delivery', 'header': 'Delivery', 'width': 10},
    {'field': 'delivery_address', 'header': 'Delivery address', 'width': 30},
    {'field': 'delivery_time', 'header': 'Delivery time', 'width': 18},
    {'field': 'status', 'header': 'Status', 'width': 12},
    {'field': 'created_by', 'header': 'Created by', 'width': 12},
]


def _cell_value(value):
    if isinstance(value, datetime):
        return value.strftime('%Y-%m-%d %H:%M')
    if value is None:
        return ''
    return value


class ExportService:

    @staticmethod
    def order_rows(orders) -> List[Dict[str, Any]]:
        """Flatten orders into export rows with human-readable labels"""
        return [{
            'order_number': o.order_number,
            'customer': o.customer,
            'price': float(o.price or 0),
            'sort': o.sort,
            'flower_quantity': o.flower_quantity,
            'packaging': YES_NO_LABELS.get(o.packaging, o.packaging),
            'delivery': YES_NO_LABELS.get(o.delivery, o.delivery),
            'delivery_address': o.delivery_address,
            'delivery_time': o.delivery_time,
            'status': o.status_label,
            'created_by': o.created_by_label,
        } for o in orders]

    @staticmethod
    def export_to_excel(
        data: List[Dict[str, Any]],
        columns: List[Dict[str, Any]],
        sheet_name: str = "Orders",
    ) -> BytesIO:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = sheet_name

        header_font = Font(size=11, bold=True, color='FFFFFF')
        header_fill = PatternFill(start_color='D6336C', end_color='D6336C', fill_type='solid')

        for col_idx, col_def in enumerate(columns, start=1):
            cell = ws.cell(row=1, column=col_idx, value=col_def['header'])
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal='center', vertical='center')
            ws.column_dimensions[get_column_letter(col_idx)].width = col_def.get('width', 15)

        for row_idx, row_data in enumerate(data, start=2):
            for col_idx, col_def in enumerate(columns, start=1):
                value = _cell_value(row_data.get(col_def['field']))
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                # numbers right, text left
                horizontal = 'right' if isinstance(value, (int, float)) else 'left'
                cell.alignment = Alignment(horizontal=horizontal)

        ws.freeze_panes = 'A2'

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output

    @staticmethod
    def export_to_csv(
        data: List[Dict[str, Any]],
        columns: List[Dict[str, Any]]
    ) -> BytesIO:
        text_output = io.StringIO()
        writer = csv.DictWriter(
            text_output,
            fieldnames=[col['field'] for col in columns],
            extrasaction='ignore'
        )
        writer.writerow({col['field']: col['header'] for col in columns})
        for row in data:
            writer.writerow({col['field']: _cell_value(row.get(col['field'])) for col in columns})

        # UTF-8 with BOM so spreadsheet apps pick the right encoding
        output = BytesIO()
        output.write('\ufeff'.encode('utf-8'))
        output.write(text_output.getvalue().encode('utf-8'))
        output.seek(0)
        return output


export_service = ExportService()
