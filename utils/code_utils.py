# utils/code_utils.py
import base64
import io
import random
import string

import qrcode

CODE_LENGTH = 6
CODE_ALPHABET = string.digits + string.ascii_uppercase  # base 36


def generate_session_code(length: int = CODE_LENGTH) -> str:
    # Not a secret: students copy it off the lecturer's screen
    return "".join(random.choices(CODE_ALPHABET, k=length))


def normalize_code(code) -> str:
    # anything but text (a JSON number, null) can never match a code
    return code.strip().upper() if isinstance(code, str) else ""


def render_code_qr(code: str) -> str:
    """Render a session code as a QR PNG, returned base64-encoded."""
    img = qrcode.make(code)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("utf-8")
