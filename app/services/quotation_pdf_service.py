"""Quotation PDF rendering (ReportLab)."""

from io import BytesIO
from typing import Dict, Any, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib import colors
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_CENTER
from xml.sax.saxutils import escape

from app.services.quotation_service import get_quotation
from app.utils.formatters import money, quantity, amount_in_words

CLOSING_STATEMENT = (
    "We appreciate your interest in our services. For further clarifications, "
    "modifications or negotiations regarding this quotation, please feel free "
    "to contact us at any time. Thank you."
)
DEFAULT_TERMS = "This quotation is valid for 1 week. Prices and availability may change."


def _draw_page_decorations(watermark, footer):
    """Watermark behind the content and page number + footer on each page."""
    def draw(canvas, doc):
        width, height = A4
        canvas.saveState()

        if watermark:
            canvas.setFont('Helvetica-Bold', 26)
            canvas.setFillColor(colors.HexColor('#EBEBEB'))
            for x in range(0, int(width) + 240, 240):
                for y in range(0, int(height) + 160, 160):
                    canvas.saveState()
                    canvas.translate(x, y)
                    canvas.rotate(40)
                    canvas.drawString(0, 0, watermark.upper())
                    canvas.restoreState()

        canvas.setStrokeColor(colors.HexColor('#969696'))
        canvas.setLineWidth(0.3)
        canvas.line(0.75 * inch, 0.6 * inch, width - 0.75 * inch, 0.6 * inch)
        canvas.setFont('Helvetica', 8)
        canvas.setFillColor(colors.HexColor('#505050'))
        canvas.drawString(0.75 * inch, 0.4 * inch, f"Page {doc.page}")
        if footer:
            canvas.drawRightString(width - 0.75 * inch, 0.4 * inch, footer[:110])
        canvas.restoreState()
    return draw


def render_quotation_pdf(quotation: Dict[str, Any], settings: Dict[str, Any]) -> BytesIO:
    """
    Render a serialized quotation (with items) and serialized settings.

    Returns a rewound buffer ready for ``send_file``.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=0.75*inch,
        leftMargin=0.75*inch,
        topMargin=0.75*inch,
        bottomMargin=0.9*inch,
        title=f"Quotation {quotation['ref_no']}"
    )

    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'QuotationTitle',
        parent=styles['Heading1'],
        fontSize=20,
        textColor=colors.HexColor('#2C3E50'),
        spaceAfter=10,
        alignment=TA_CENTER,
        fontName='Helvetica-Bold'
    )
    header_style = ParagraphStyle(
        'CompanyHeader',
        parent=styles['Normal'],
        fontSize=9,
        textColor=colors.HexColor('#7F8C8D'),
        alignment=TA_CENTER,
        spaceAfter=3
    )
    section_style = ParagraphStyle(
        'Section', parent=styles['Heading3'], fontSize=11, spaceBefore=8, spaceAfter=4
    )
    body_style = ParagraphStyle('Body', parent=styles['Normal'], fontSize=9, leading=12)

    # 1. Company header
    elements.append(Paragraph(f"<b>{escape(settings.get('company_name') or 'Company Name')}</b>", title_style))
    if settings.get('company_address'):
        elements.append(Paragraph(escape(settings['company_address']), header_style))
    contact = [
        f"Phone: {settings.get('company_phone') or '-'}",
        f"Email: {settings.get('company_email') or '-'}",
    ]
    if settings.get('company_website'):
        contact.append(settings['company_website'])
    if settings.get('company_rc'):
        contact.append(f"RC: {settings['company_rc']}")
    elements.append(Paragraph(escape(" | ".join(contact)), header_style))
    elements.append(Spacer(1, 0.2*inch))
    elements.append(Paragraph("QUOTATION", title_style))

    # 2. Quotation metadata
    info_rows = [
        ['Project Title:', quotation.get('project_title') or quotation.get('quote_for') or '-'],
        ['Ref No:', quotation['ref_no']],
        ['Date:', (quotation.get('created_at') or '')[:10] or '-'],
        ['Status:', quotation.get('status') or '-'],
        ['Customer:', quotation.get('customer_name') or '-'],
        ['Phone:', quotation.get('customer_phone') or '-'],
        ['Address:', quotation.get('customer_address') or '-'],
    ]
    info_table = Table(info_rows, colWidths=[1.4*inch, 5.3*inch])
    info_table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (0, -1), 'RIGHT'),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('TEXTCOLOR', (0, 0), (-1, -1), colors.HexColor('#34495E')),
    ]))
    elements.append(info_table)
    elements.append(Spacer(1, 0.2*inch))

    # 3. Items
    table_data = [['#', 'Item', 'Unit', 'Qty', 'Unit Price (N)', 'Total (N)']]
    for index, item in enumerate(quotation.get('items', []), start=1):
        table_data.append([
            str(index),
            Paragraph(escape(item.get('material_name') or '-'), body_style),
            item.get('material_unit') or '-',
            quantity(item.get('quantity')),
            money(item.get('unit_price'), symbol=''),
            money(item.get('total_price'), symbol=''),
        ])

    items_table = Table(table_data, colWidths=[0.35*inch, 2.75*inch, 0.6*inch, 0.6*inch, 1.2*inch, 1.2*inch], repeatRows=1)
    items_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#3498DB')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('ALIGN', (0, 1), (0, -1), 'CENTER'),
        ('ALIGN', (2, 1), (3, -1), 'CENTER'),
        ('ALIGN', (4, 1), (5, -1), 'RIGHT'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#BDC3C7')),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#ECF0F1')]),
    ]))
    elements.append(items_table)
    elements.append(Spacer(1, 0.2*inch))

    # 4. Financial summary
    summary_rows = [
        ['Subtotal:', money(quotation.get('subtotal'))],
        [f"Discount ({quotation.get('discount_percent') or 0}%):", money(quotation.get('discount_amount'))],
        [f"VAT ({quotation.get('vat_percent') or 0}%):", money(quotation.get('vat_amount'))],
        ['Grand Total:', money(quotation.get('total'))],
    ]
    summary_table = Table(summary_rows, colWidths=[5.1*inch, 1.6*inch])
    summary_table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('TEXTCOLOR', (0, -1), (-1, -1), colors.HexColor('#27AE60')),
        ('LINEABOVE', (0, -1), (-1, -1), 1, colors.HexColor('#27AE60')),
    ]))
    elements.append(summary_table)
    elements.append(Spacer(1, 0.15*inch))

    words_table = Table(
        [[Paragraph(f"<b>AMOUNT IN WORDS:</b> {amount_in_words(quotation.get('total')).upper()}", body_style)]],
        colWidths=[6.7*inch]
    )
    words_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, -1), colors.HexColor('#F5F5F5')),
        ('BOX', (0, 0), (-1, -1), 0.5, colors.HexColor('#BDC3C7')),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    elements.append(words_table)

    # 5. Notes, terms, payment and bank details
    if quotation.get('notes'):
        elements.append(Paragraph("Notes", section_style))
        elements.append(Paragraph(escape(quotation['notes']), body_style))

    elements.append(Paragraph("Terms &amp; Conditions", section_style))
    elements.append(Paragraph(escape(settings.get('terms') or DEFAULT_TERMS), body_style))

    if settings.get('payment_terms'):
        elements.append(Paragraph("Payment Terms", section_style))
        elements.append(Paragraph(escape(settings['payment_terms']), body_style))

    if settings.get('bank_name') or settings.get('bank_account_number'):
        elements.append(Paragraph("Bank Details", section_style))
        elements.append(Paragraph(
            f"{escape(settings.get('bank_name') or '-')}<br/>"
            f"Account Name: {escape(settings.get('bank_account_name') or '-')}<br/>"
            f"Account Number: {escape(settings.get('bank_account_number') or '-')}",
            body_style
        ))

    elements.append(Paragraph("Closing Statement", section_style))
    elements.append(Paragraph(CLOSING_STATEMENT, body_style))
    if settings.get('footer_note'):
        elements.append(Spacer(1, 0.1*inch))
        elements.append(Paragraph(f"<i>{escape(settings['footer_note'])}</i>", body_style))

    elements.append(Spacer(1, 0.3*inch))
    elements.append(Paragraph("<b>Signed:</b>", body_style))
    elements.append(Paragraph(
        escape(settings.get('signature_footer_text') or f"For {settings.get('company_name') or 'SFV TECH'}"),
        body_style
    ))

    decorate = _draw_page_decorations(
        settings.get('watermark_text'),
        settings.get('signature_footer_text') or 'Generated by SFV'
    )
    doc.build(elements, onFirstPage=decorate, onLaterPages=decorate)
    buffer.seek(0)
    return buffer


def generate_quotation_pdf(session, actor, quotation_id: int, settings: Dict[str, Any]) -> Tuple[BytesIO, str]:
    """Generate the PDF of a persisted quotation.

    Returns:
        (buffer, download filename)
    """
    quotation = get_quotation(session, actor, quotation_id)
    return render_quotation_pdf(quotation, settings), f"quotation_{quotation['ref_no']}.pdf"
