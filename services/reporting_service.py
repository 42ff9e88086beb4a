"""
Reporting service for the Academic Records Portal
PDF rendering of TYL analysis and student TYL reports
"""

from io import BytesIO
from datetime import date
from xml.sax.saxutils import escape as xml_escape
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from services.excel_export_service import tyl_analysis_headers, tyl_analysis_row

class ReportingService:
    """Service for generating PDF reports"""

    @staticmethod
    def _get_paragraph_style(header=False):
        """Compact cell style so ReportLab wraps text within the cell width"""
        styles = getSampleStyleSheet()
        return ParagraphStyle(
            'HeaderCell' if header else 'Cell',
            parent=styles['Normal'],
            fontSize=7,
            leading=9,
            textColor=colors.white if header else colors.black,
            spaceAfter=0,
            spaceBefore=0,
        )

    @staticmethod
    def _to_paragraph(value, header=False):
        """Convert any value to a Paragraph"""
        text = '' if value is None else xml_escape(str(value))
        return Paragraph(text, ReportingService._get_paragraph_style(header))

    @staticmethod
    def _table_style():
        return TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.black),
            ('GRID', (0, 0), (-1, -1), 0.25, colors.grey),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
        ])

    @staticmethod
    def _build(story, pagesize):
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=pagesize,
            leftMargin=10 * mm,
            rightMargin=10 * mm,
            topMargin=12 * mm,
            bottomMargin=12 * mm
        )
        doc.build(story)
        buffer.seek(0)
        return buffer.getvalue()

    @staticmethod
    def generate_tyl_analysis_pdf(summaries, scope_title='Department', report_date=None):
        """Render cohort summaries as a landscape TYL analysis table"""
        styles = getSampleStyleSheet()
        report_date = report_date or date.today()

        story = [
            Paragraph(f"TYL Analysis ({xml_escape(scope_title)}-wise)", styles['Title']),
            Paragraph(f"Generated on {report_date.strftime('%d/%m/%Y')}", styles['Normal']),
            Spacer(1, 6 * mm),
        ]

        data = [[ReportingService._to_paragraph(h, header=True) for h in tyl_analysis_headers(scope_title)]]
        for summary in summaries:
            data.append([ReportingService._to_paragraph(v) for v in tyl_analysis_row(summary, report_date)])

        table = Table(data, repeatRows=1)
        table.setStyle(ReportingService._table_style())
        story.append(table)

        return ReportingService._build(story, landscape(A4))

    @staticmethod
    def generate_student_tyl_report_pdf(report):
        """Render one student's TYL results and levels reached"""
        styles = getSampleStyleSheet()
        profile = report['profile']

        story = [
            Paragraph("TYL Progress Report", styles['Title']),
            Paragraph(
                f"{xml_escape(profile['full_name'])} ({xml_escape(profile['admission_id'])}) - "
                f"{xml_escape(profile['department'])}, Semester {profile['current_semester']}, "
                f"Section {xml_escape(profile['section'])}",
                styles['Normal']
            ),
            Spacer(1, 6 * mm),
        ]

        headers = ['Subject', 'Semester', 'IA 1', 'IA 2', 'Total', 'Passing Marks', 'Status']
        data = [[ReportingService._to_paragraph(h, header=True) for h in headers]]
        for row in report['subjects']:
            status = 'Pass' if row['passed'] else ('Fail' if row['attempted'] else 'Not attempted')
            data.append([ReportingService._to_paragraph(v) for v in (
                row['subject_code'].upper(),
                row['semester'],
                'N/A' if row['ia1_50'] is None else row['ia1_50'],
                'N/A' if row['ia2_50'] is None else row['ia2_50'],
                row['total'],
                row['passing_marks'],
                status,
            )])

        table = Table(data, repeatRows=1)
        table.setStyle(ReportingService._table_style())
        story.append(table)
        story.append(Spacer(1, 6 * mm))

        levels = report['levels']
        level_data = [
            [ReportingService._to_paragraph(h, header=True) for h in ('LX', 'SX', 'AX', 'PX', 'CX')],
            [ReportingService._to_paragraph(levels.get(k, 0)) for k in ('lx', 'sx', 'ax', 'px', 'cx')],
        ]
        level_table = Table(level_data)
        level_table.setStyle(ReportingService._table_style())
        story.append(Paragraph("Levels Reached", styles['Heading3']))
        story.append(level_table)

        return ReportingService._build(story, A4)
