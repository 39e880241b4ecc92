"""
Limits enforced by the order domain.
"""
QUANTITY_MIN_VALUE = 1
AMOUNT_CENTS_MIN_VALUE = 0
CURRENCY_CODE_LENGTH = 3
EMAIL_MAX_LENGTH = 254
PROMO_CODE_MAX_LENGTH = 50
SPECIAL_INSTRUCTIONS_MAX_LENGTH = 500
ADJUSTMENT_DESCRIPTION_MAX_LENGTH = 255
PAYMENT_METHOD_TYPE_MAX_LENGTH = 100
REFERENCE_TRANSACTION_ID_MAX_LENGTH = 100
GATEWAY_AUTH_CODE_MAX_LENGTH = 50
GATEWAY_ERROR_CODE_MAX_LENGTH = 100
FAILURE_REASON_MAX_LENGTH = 1000
