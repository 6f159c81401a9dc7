"""Configuration settings for Field Billing"""

# Company Information
COMPANY_NAME = "Field Services"
COMPANY_PHONE = ""
COMPANY_EMAIL = ""

# Invoice defaults (pre-filled on the invoice form)
DEFAULT_TAX_RATE = 10.0  # percent
DEFAULT_LABOR_HOURS = 1.0
DEFAULT_LABOR_RATE = 50.0
DEFAULT_DISCOUNT = 0.0

# Fallback currency when the API provides none (Bahraini Dinar)
DEFAULT_CURRENCY = {
    'code': 'BHD',
    'symbol': 'BD',
    'symbol_position': 'before',
    'decimal_places': 3,
}

# Payment method codes
PAYMENT_METHODS = {
    'CASH': 'Cash',
    'BENEFIT_PAY': 'BenefitPay',
    'CARD': 'Card',
    'BANK_TRANSFER': 'Bank Transfer',
    'CHEQUE': 'Cheque',
    'ONLINE': 'Online',
}

# Payment methods that must carry a transaction reference number
REFERENCE_REQUIRED_METHODS = ['BENEFIT_PAY']

# Excel styling
EXCEL_STYLES = {
    'header_bg_color': 'D3D3D3',  # Light gray
    'summary_bg_color': '00FFFF',  # Cyan
    'font_name': 'Arial',
    'font_size': 10
}
