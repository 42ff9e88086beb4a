"""
Excel export service for the Academic Records Portal
Handles Excel export for TYL reports
"""

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from io import BytesIO
from datetime import date
from services.tyl_cohort import scope_label

# (header, passed_counts key) in the order the TYL analysis sheet is laid out
TYL_COUNT_COLUMNS = [
    ('A1', 'a1'), ('A2', 'a2'), ('A3', 'a3'), ('A4', 'a4'),
    ('L1', 'l1'), ('L2', 'l2'), ('L3', 'l3'), ('L4', 'l4'),
    ('S1', 's1'), ('S2', 's2'), ('S3', 's3'), ('S4', 's4'),
    ('C2 ODD', 'c2-odd'), ('C2 FULL', 'c2-full'),
    ('C3 ODD', 'c3-odd'), ('C3 FULL', 'c3-full'),
    ('C4 ODD', 'c4-odd'), ('C4 FULL', 'c4-full'),
    ('C5 FULL', 'c5-full'),
    ('P1-C', 'p1'), ('P2 Python', 'p2'),
    ('P3 Python', 'p3-python'), ('P3 Java', 'p3-java'),
    ('P4 MAD/FSD', 'p4-mad/fsd'), ('P4 DS', 'p4-ds'),
]

TYL_LEVEL_COLUMNS = [('UG LX', 'lx'), ('UG SX', 'sx'), ('UG AX', 'ax'), ('UG PX', 'px')]

RAW_MARKS_COLUMNS = [
    ('USN', 'usn'), ('Student Name', 'student_name'), ('Subject Code', 'subject_code'),
    ('Subject Name', 'subject_name'), ('Semester', 'semester'), ('IA 1', 'ia1_50'),
    ('IA 2', 'ia2_50'), ('Total', 'total'), ('Passing Marks', 'passing_marks'),
]


def tyl_analysis_headers(scope_title):
    return [scope_title, 'Date', 'Total no. of Students'] + \
        [header for header, _ in TYL_COUNT_COLUMNS] + \
        [header for header, _ in TYL_LEVEL_COLUMNS]


def tyl_analysis_row(summary, report_date=None):
    """Flatten one cohort summary into the analysis sheet row"""
    report_date = report_date or date.today()
    passed_counts = summary.get('passed_counts') or {}
    levels = summary.get('levels_reached') or {}
    return [scope_label(summary), report_date.strftime('%d/%m/%Y'), summary.get('total_students', 0)] + \
        [passed_counts.get(key, 0) for _, key in TYL_COUNT_COLUMNS] + \
        [levels.get(key, 0) for _, key in TYL_LEVEL_COLUMNS]


class ExcelExportService:
    """Service for exporting reports to Excel"""

    @staticmethod
    def create_workbook():
        """Create a new workbook with default styling"""
        return openpyxl.Workbook()

    @staticmethod
    def style_header_row(ws, row_num, columns):
        """Apply styling to header row"""
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="000000", end_color="000000", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")

        for col_num, header in enumerate(columns, 1):
            cell = ws.cell(row=row_num, column=col_num, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment

    @staticmethod
    def auto_adjust_columns(ws):
        """Auto-adjust column widths"""
        for column in ws.columns:
            max_length = 0
            column_letter = get_column_letter(column[0].column)

            for cell in column:
                if cell.value is not None:
                    max_length = max(max_length, len(str(cell.value)))

            ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

    @staticmethod
    def format_number(value):
        """Format number: whole numbers without decimals, fractional numbers with 2 decimal places."""
        if value is None:
            return None
        try:
            num = float(value)
        except (ValueError, TypeError):
            return value
        if num == int(num):
            return int(num)  # 32.0 -> 32
        return round(num, 2)

    @staticmethod
    def export_tyl_analysis(summaries, scope_title='Department', report_date=None):
        """Export cohort summaries as the TYL analysis sheet"""
        wb = ExcelExportService.create_workbook()
        ws = wb.active
        ws.title = "TYL Analysis"

        ExcelExportService.style_header_row(ws, 1, tyl_analysis_headers(scope_title))

        for row_num, summary in enumerate(summaries, 2):
            for col_num, value in enumerate(tyl_analysis_row(summary, report_date), 1):
                cell = ws.cell(row=row_num, column=col_num, value=value)
                cell.alignment = Alignment(horizontal="center", vertical="center")

        # Highlight the level-reached block
        level_fill = PatternFill(start_color="FFF9C4", end_color="FFF9C4", fill_type="solid")
        first_level_col = 3 + len(TYL_COUNT_COLUMNS) + 1
        for row in ws.iter_rows(min_row=2, min_col=first_level_col, max_col=first_level_col + len(TYL_LEVEL_COLUMNS) - 1):
            for cell in row:
                cell.fill = level_fill

        ExcelExportService.auto_adjust_columns(ws)
        return ExcelExportService.workbook_to_bytes(wb)

    @staticmethod
    def export_raw_tyl_marks(rows):
        """Export the raw TYL marks listing"""
        wb = ExcelExportService.create_workbook()
        ws = wb.active
        ws.title = "TYL Marks"

        ExcelExportService.style_header_row(ws, 1, [header for header, _ in RAW_MARKS_COLUMNS] + ['Status'])

        for row_num, row in enumerate(rows, 2):
            for col_num, (_, key) in enumerate(RAW_MARKS_COLUMNS, 1):
                value = row.get(key)
                if key in ('ia1_50', 'ia2_50') and value is None:
                    value = 'N/A'
                ws.cell(row=row_num, column=col_num, value=ExcelExportService.format_number(value))
            status_cell = ws.cell(row=row_num, column=len(RAW_MARKS_COLUMNS) + 1, value='Pass' if row.get('passed') else 'Fail')
            status_cell.font = Font(bold=True, color="2E7D32" if row.get('passed') else "C62828")

        ExcelExportService.auto_adjust_columns(ws)
        return ExcelExportService.workbook_to_bytes(wb)

    @staticmethod
    def workbook_to_bytes(workbook):
        """Convert workbook to bytes for download"""
        output = BytesIO()
        workbook.save(output)
        output.seek(0)
        return output.getvalue()
