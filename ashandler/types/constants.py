"""
Apple event constants used by the call path.

Every tag is computed at import time, so a malformed code aborts the import
before any event can be built.
"""

from ashandler.helpers.fourcc import four_char_code

# Descriptor types
TYPE_UNICODE_TEXT = four_char_code("utxt")
TYPE_UTF8_TEXT = four_char_code("utf8")
TYPE_CHAR = four_char_code("TEXT")
TYPE_SINT16 = four_char_code("shor")
TYPE_SINT32 = four_char_code("long")
TYPE_SINT64 = four_char_code("comp")
TYPE_UINT32 = four_char_code("magn")
TYPE_IEEE32 = four_char_code("sing")
TYPE_IEEE64 = four_char_code("doub")
TYPE_BOOLEAN = four_char_code("bool")
TYPE_TRUE = four_char_code("true")
TYPE_FALSE = four_char_code("fals")
TYPE_LIST = four_char_code("list")
TYPE_RECORD = four_char_code("reco")
TYPE_NULL = four_char_code("null")
TYPE_PROCESS_SERIAL_NUMBER = four_char_code("psn ")

TEXT_TYPES = frozenset({TYPE_UNICODE_TEXT, TYPE_UTF8_TEXT, TYPE_CHAR})

# Generic subroutine call ("call a handler by name")
APPLESCRIPT_SUITE = four_char_code("ascr")
SUBROUTINE_EVENT = four_char_code("psbr")
KEY_SUBROUTINE_NAME = four_char_code("snam")
KEY_DIRECT_OBJECT = four_char_code("----")
KEY_USER_RECORD_FIELDS = four_char_code("usrf")

K_CURRENT_PROCESS = 2
K_AUTO_GENERATE_RETURN_ID = -1
K_ANY_TRANSACTION_ID = 0

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
