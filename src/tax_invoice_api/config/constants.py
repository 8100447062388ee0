"""
Centralized application constants.

Single point of truth for cookie attributes, limits, sensitive fields
and the Thai messages returned to the browser.
"""

# ==============================================================================
# SESSION COOKIE
# ==============================================================================

SESSION_COOKIE_NAME = "order-report-auth"

# Value of an unsigned session cookie
SESSION_SENTINEL = "authenticated"

# 24 hours
SESSION_MAX_AGE_SECONDS = 24 * 60 * 60

SESSION_COOKIE_PATH = "/"
SESSION_COOKIE_SAMESITE = "strict"

# ==============================================================================
# RATE LIMITING
# ==============================================================================

DEFAULT_WINDOW_MS = 60 * 1000

# Bucket for requests without a resolvable client address
UNKNOWN_CLIENT_KEY = "unknown"

# ==============================================================================
# SHOPIFY PROXY
# ==============================================================================

GRAPHQL_QUERY_MAX_LENGTH = 5000

SHOPIFY_ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"

# Order fields never returned to the browser
SENSITIVE_ORDER_FIELDS = frozenset({"id", "name", "createdAt", "customer"})

CORS_ALLOW_METHODS = "POST, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type"

# ==============================================================================
# USER-VISIBLE MESSAGES (Thai)
# ==============================================================================

MSG_LOGIN_SUCCESS = "เข้าสู่ระบบสำเร็จ"
MSG_LOGOUT_SUCCESS = "ออกจากระบบสำเร็จ"
MSG_MISSING_CREDENTIALS = "กรุณากรอกอีเมลและรหัสผ่าน"
MSG_INVALID_CREDENTIALS = "อีเมลหรือรหัสผ่านไม่ถูกต้อง กรุณาลองใหม่อีกครั้ง"
MSG_LOGIN_LOCKED = "พยายามเข้าสู่ระบบหลายครั้งเกินไป กรุณารอสักครู่แล้วลองใหม่อีกครั้ง"
MSG_SERVER_NOT_CONFIGURED = "ระบบยังไม่ได้ตั้งค่า กรุณาติดต่อผู้ดูแลระบบ"
MSG_INVALID_SERVER_CONFIG = "การตั้งค่าระบบไม่ถูกต้อง กรุณาติดต่อผู้ดูแลระบบ"
MSG_INTERNAL_ERROR = "เกิดข้อผิดพลาดในระบบ"
MSG_RATE_LIMITED = "มีการร้องขอมากเกินไป กรุณาลองใหม่ภายหลัง"
MSG_INVALID_REQUEST = "ข้อมูลคำขอไม่ถูกต้อง"
MSG_UPSTREAM_FAILED = "ไม่สามารถดึงข้อมูลจาก Shopify ได้"
MSG_UPSTREAM_TIMEOUT = "Shopify ไม่ตอบสนองภายในเวลาที่กำหนด"
MSG_GRAPHQL_ERRORS = "เกิดข้อผิดพลาดในการค้นหาข้อมูลจาก Shopify"
MSG_METHOD_NOT_ALLOWED = "ไม่อนุญาตให้ใช้เมธอดนี้ กรุณาใช้ POST"
MSG_INVALID_TAX_INVOICE = "ข้อมูลใบกำกับภาษีไม่ถูกต้อง กรุณาตรวจสอบอีกครั้ง"

# ==============================================================================
# TAX INVOICE FORM
# ==============================================================================

TAX_INVOICE_NAME_MAX = 200
TAX_INVOICE_ADDRESS_MAX = 500
