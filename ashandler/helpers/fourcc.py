"""
Four-character codes.

Apple event classes, IDs, keywords and descriptor types are 32-bit integers
spelled as four ASCII characters (``'ascr'``, ``'psbr'``, ``'utxt'`` ...).
"""

import struct


def four_char_code(text: str) -> int:
    """
    Build a four-character code from a 4-byte ASCII string.

    The bytes are read most-significant first, which is the same as
    reversing them and loading a little-endian ``UInt32``.

    Parameters
    ----------
    text : str
        Exactly four ASCII characters.

    Returns
    -------
    int
        Unsigned 32-bit code.

    Raises
    ------
    AssertionError
        If ``text`` is not ASCII or not exactly four bytes long. A malformed
        code is a programming error and is not part of the library's
        exception hierarchy.

    Examples
    --------
    >>> hex(four_char_code("ascr"))
    '0x61736372'
    """
    if not isinstance(text, str) or not text.isascii():
        raise AssertionError(
            f"four_char_code() only accepts ASCII characters, got {text!r}"
        )
    data = text.encode("ascii")
    if len(data) != 4:
        raise AssertionError(
            f"four_char_code() only accepts strings of length 4, got {text!r}"
        )
    return struct.unpack(">I", data)[0]


def four_char_code_to_str(code: int) -> str:
    """Inverse of `four_char_code`, used for messages and logs."""
    data = struct.pack(">I", code & 0xFFFFFFFF)
    try:
        return data.decode("ascii")
    except UnicodeDecodeError:
        return f"0x{code & 0xFFFFFFFF:08x}"
