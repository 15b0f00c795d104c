# reports/utils.py

"""
Report exports.

- build_monthly_summary_pdf: the director's monthly summary as a PDF
  document (reportlab platypus)
- build_reports_workbook: the period's report rows as an Excel workbook
  (openpyxl)
"""

from io import BytesIO
from xml.sax.saxutils import escape
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib.enums import TA_CENTER
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from core.utils import format_money, get_app_setting, get_today

logger = logging.getLogger(__name__)


PRIMARY_COLOR = '#2563EB'
MUTED_COLOR = '#6B7280'
BORDER_COLOR = '#E5E7EB'
HIGHLIGHT_COLOR = '#059669'


# =============================================================================
# FILE NAMES
# =============================================================================

def get_summary_pdf_filename(month_name, year):
    """Reporte_Mensual_<MonthName>_<Year>.pdf"""
    return f"Reporte_Mensual_{month_name}_{year}.pdf"


def get_reports_excel_filename(month_name, year):
    """Reportes_<MonthName>_<Year>.xlsx"""
    return f"Reportes_{month_name}_{year}.xlsx"


# =============================================================================
# PDF SUMMARY
# =============================================================================

def _key_value_table(rows, col_widths, value_color=None):
    table = Table(rows, colWidths=col_widths)
    style = [
        ('FONTNAME', (0, 0), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
        ('FONTNAME', (1, 0), (1, -1), 'Helvetica-Bold'),
        ('LINEBELOW', (0, 0), (-1, -2), 0.5, colors.HexColor(BORDER_COLOR)),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
    ]
    if value_color:
        style.append(('TEXTCOLOR', (1, 0), (1, -1), colors.HexColor(value_color)))
    table.setStyle(TableStyle(style))
    return table


def build_monthly_summary_pdf(summary, month_name, year, country, director_name):
    """
    Render a monthly summary as a one-page PDF.

    Sections: header (title, organisation, director, country, period),
    general summary cards, group types and demographics side by side,
    savings by type, and a footer with the generation date.

    Args:
        summary: dict from reports.stats.get_monthly_summary
        month_name: Display month ('Marzo')
        year: Display year
        country: Country name
        director_name: Name printed in the header

    Returns:
        bytes: The PDF document
    """
    organization = get_app_setting('ORGANIZATION_NAME')
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=40,
        leftMargin=40,
        topMargin=40,
        bottomMargin=30,
        title=f"Reporte Mensual {month_name} {year}",
        author=organization,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'SummaryTitle',
        parent=styles['Heading1'],
        fontSize=24,
        textColor=colors.HexColor(PRIMARY_COLOR),
        spaceAfter=4,
        alignment=TA_CENTER,
    )
    subtitle_style = ParagraphStyle(
        'SummarySubtitle',
        parent=styles['Normal'],
        fontSize=14,
        textColor=colors.HexColor(MUTED_COLOR),
        spaceAfter=12,
        alignment=TA_CENTER,
    )
    meta_style = ParagraphStyle(
        'SummaryMeta',
        parent=styles['Normal'],
        fontSize=12,
        alignment=TA_CENTER,
    )
    section_style = ParagraphStyle(
        'SummarySection',
        parent=styles['Heading2'],
        fontSize=14,
        spaceBefore=12,
        spaceAfter=8,
    )
    footer_style = ParagraphStyle(
        'SummaryFooter',
        parent=styles['Normal'],
        fontSize=8,
        textColor=colors.HexColor(MUTED_COLOR),
        alignment=TA_CENTER,
    )

    elements = []

    # Header
    elements.append(Paragraph("Reporte Mensual", title_style))
    # Paragraph text is markup
    elements.append(Paragraph(escape(organization), subtitle_style))
    elements.append(Paragraph(escape(director_name or ''), meta_style))
    elements.append(Paragraph(escape(str(country or '')), meta_style))
    elements.append(Paragraph(f"{month_name} {year}", meta_style))
    elements.append(Spacer(1, 0.2 * inch))

    # General summary cards
    elements.append(Paragraph("Resumen General", section_style))
    cards = Table(
        [
            ['Reportes', 'Grupos', 'Total Miembros', 'Promedio Asistencia'],
            [
                str(summary['report_count']),
                str(summary['group_count']),
                str(summary['total_members']),
                str(summary['total_attendance']),
            ],
        ],
        colWidths=[1.3 * inch] * 4,
    )
    cards.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTSIZE', (0, 0), (-1, 0), 9),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.HexColor(MUTED_COLOR)),
        ('FONTNAME', (0, 1), (-1, 1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 1), (-1, 1), 16),
        ('BOX', (0, 0), (-1, -1), 0.5, colors.HexColor(BORDER_COLOR)),
        ('INNERGRID', (0, 0), (-1, -1), 0.5, colors.HexColor(BORDER_COLOR)),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
        ('TOPPADDING', (0, 0), (-1, -1), 8),
    ]))
    elements.append(cards)
    elements.append(Spacer(1, 0.15 * inch))

    total_saved = Table(
        [['Total Ahorrado'], [format_money(summary['total_savings'])]],
        colWidths=[5.2 * inch],
    )
    total_saved.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTSIZE', (0, 0), (-1, 0), 9),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.HexColor(MUTED_COLOR)),
        ('FONTNAME', (0, 1), (-1, 1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 1), (-1, 1), 24),
        ('TEXTCOLOR', (0, 1), (-1, 1), colors.HexColor(HIGHLIGHT_COLOR)),
        ('BOX', (0, 0), (-1, -1), 0.5, colors.HexColor(BORDER_COLOR)),
        ('BOTTOMPADDING', (0, 1), (-1, 1), 12),
    ]))
    elements.append(total_saved)

    # Group types | Demographics
    types_table = _key_value_table(
        [
            ['ASCA', str(summary['asca_count'])],
            ['ROSCA', str(summary['rosca_count'])],
            ['Simple', str(summary['simple_count'])],
            ['Juveniles', str(summary['youth_count'])],
        ],
        col_widths=[1.6 * inch, 0.9 * inch],
    )
    demographics_table = _key_value_table(
        [
            ['Hombres', str(summary['total_men'])],
            ['Mujeres', str(summary['total_women'])],
            ['Niños/as', str(summary['total_children'])],
        ],
        col_widths=[1.6 * inch, 0.9 * inch],
    )
    two_columns = Table(
        [
            [Paragraph("Tipos de Grupo", section_style), Paragraph("Demografía", section_style)],
            [types_table, demographics_table],
        ],
        colWidths=[2.7 * inch, 2.7 * inch],
    )
    two_columns.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('LEFTPADDING', (0, 0), (-1, -1), 0),
    ]))
    elements.append(two_columns)

    # Savings by type
    savings_by_type = summary['savings_by_type']
    elements.append(Paragraph("Ahorro por Tipo", section_style))
    savings_table = _key_value_table(
        [
            ['Grupos ASCA', format_money(savings_by_type['Asca'])],
            ['Grupos ROSCA', format_money(savings_by_type['Rosca'])],
            ['Grupos Simple', format_money(savings_by_type['Simple'])],
            ['Grupos Juveniles', format_money(savings_by_type['youth'])],
        ],
        col_widths=[3.2 * inch, 2.0 * inch],
        value_color=HIGHLIGHT_COLOR,
    )
    elements.append(savings_table)
    elements.append(Spacer(1, 0.4 * inch))

    # Footer
    generated_on = get_today().strftime('%d/%m/%Y')
    elements.append(Paragraph(f"Generado el {generated_on} - {escape(organization)}", footer_style))

    doc.build(elements)
    pdf = buffer.getvalue()
    buffer.close()

    logger.info(f"Built monthly summary PDF for {month_name} {year} ({len(pdf)} bytes)")
    return pdf


# =============================================================================
# EXCEL EXPORT
# =============================================================================

def build_reports_workbook(reports, month_name, year):
    """
    Excel workbook with one row per report of the period.

    Args:
        reports: Iterable of MonthlyReport (select_related group, facilitator)
        month_name, year: Period shown in the sheet title

    Returns:
        openpyxl.Workbook
    """
    wb = Workbook()
    ws = wb.active
    ws.title = f"{month_name} {year}"[:31]

    header_fill = PatternFill(start_color="2563EB", end_color="2563EB", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF", size=12)

    headers = [
        '#', 'Grupo', 'Tipo', 'Juvenil', 'Facilitador', 'Año', 'Mes',
        'Reuniones', 'Promedio asistencia', 'Cantidad ahorrada', 'Comentarios',
    ]
    ws.append(headers)

    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center')

    for idx, report in enumerate(reports, start=1):
        ws.append([
            idx,
            report.group.name,
            report.group.savings_type,
            'Sí' if report.group.is_youth_group else 'No',
            report.facilitator.get_full_name() or report.facilitator.email,
            report.year,
            report.month_name,
            report.meetings_count,
            float(report.average_attendance) if report.average_attendance is not None else None,
            float(report.amount_saved or 0),
            report.comments or '',
        ])

    for row in ws.iter_rows(min_row=2, min_col=10, max_col=10):
        for cell in row:
            cell.number_format = '#,##0.00'

    column_widths = [6, 30, 10, 9, 28, 8, 12, 11, 20, 20, 40]
    for index, width in enumerate(column_widths, start=1):
        ws.column_dimensions[ws.cell(row=1, column=index).column_letter].width = width

    return wb
