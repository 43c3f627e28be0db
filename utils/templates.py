# -------------------------
# HTML templates for rendered product records
# -------------------------
# Placeholders use {field} and are filled in one pass by utils.renderer,
# so substituted text is never scanned for placeholders again.

DOCUMENT_TEMPLATE = """<html>
<head>
    <meta charset="UTF-8">
    <title>{document_title}</title>
</head>
<body>
    <div class="rich-text-content">
        {products_html}
    </div>
</body>
</html>"""

PRODUCT_TEMPLATE = """        <div class="product-info" style="background: #fff; border: 1px solid #e9ecef; border-radius: 8px; padding: 16px; margin-bottom: 16px;">
            <h4 style="color: #333; margin-bottom: 12px; font-size: 16px;">{product_name}</h4>
            <ul style="list-style: none; padding: 0; margin: 0;">
{attributes_html}
            </ul>
        </div>"""

ATTRIBUTE_TEMPLATE = """                <p style="margin: 6px 0;"> <strong style="color: #666;">{attr_name}:</strong> <span style="color: #333;">{attr_value}</span> </p>"""
