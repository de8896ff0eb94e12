import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from grocer.domain.ShoppingList import ShoppingList


def generate_pdf_for_shopping_list(shopping_list: ShoppingList, title: str = "Shopping List") -> bytes:
    """Render one table per category: Item / Quantity, then the pantry items that covered demand."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(escape(title), styles["Title"]),
        Spacer(1, 16),
    ]

    if not shopping_list.categories:
        elements.append(Paragraph("Nothing to buy.", styles["Normal"]))

    for category in shopping_list.categories:
        elements.append(Paragraph(escape(category.category), styles["Heading2"]))
        data = [["Item", "Quantity"]]
        for item in category.items:
            data.append([item.name, ", ".join(str(q) for q in item.quantities) or "-"])

        table = Table(data, repeatRows=1, colWidths=[300, 200])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
            ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
            ("ALIGN", (0,0), (-1,-1), "LEFT"),
            ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
            ("FONTSIZE", (0,0), (-1,0), 11),
            ("BOTTOMPADDING", (0,0), (-1,0), 8),
            ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 12))

    if shopping_list.pantry_items:
        elements.append(Paragraph("Already in the pantry", styles["Heading2"]))
        elements.append(Paragraph(escape(", ".join(shopping_list.pantry_items)), styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
