import re
from decimal import Decimal, InvalidOperation
from typing import List, Literal, Optional

CENTS = Decimal("0.01")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_WHITESPACE_RE = re.compile(r"\s+")

MIN_PASSWORD_LENGTH = 4


def generate_markdown_table(
    headers: Optional[List[str]],
    rows: List[List[str]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: List of column headers, or None to use first row as headers.
        rows: List of rows, each a list of strings.
        aligns: List of alignments ('l', 'c', 'r') for each column.
                Defaults to all center ('c').

    Returns:
        str: Markdown formatted table.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = list(map(str, headers))
    rows = [list(map(str, row)) for row in rows]

    num_cols = len(headers)
    if aligns is None:
        aligns = ["c"] * num_cols
    elif len(aligns) != num_cols:
        raise ValueError("Length of aligns must match number of headers.")

    align_map = {
        "l": ":---",
        "c": ":---:",
        "r": "---:",
    }

    header_line = "| " + " | ".join(headers) + " |"
    align_line = "| " + " | ".join(align_map[a] for a in aligns) + " |"
    row_lines = ["| " + " | ".join(row) + " |" for row in rows]

    return "\n".join([header_line, align_line, *row_lines])


def parse_price(price: str) -> Optional[Decimal]:
    """
    Turn a display price like "$1,299.99" into Decimal("1299.99").

    Strips a leading currency symbol and all grouping commas.
    Returns None when what is left is not a number.
    """
    text = (price or "").strip()
    if text and not (text[0].isdigit() or text[0] in "+-."):
        text = text[1:]
    text = text.replace(",", "").strip()
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def format_price(amount: Decimal) -> str:
    """Decimal("1299.5") -> "$1,299.50"."""
    return f"${amount.quantize(CENTS):,}"


def derive_username(source: str) -> str:
    """Lowercase, every whitespace run removed: "Jane  Doe" -> "janedoe"."""
    return _WHITESPACE_RE.sub("", source.lower())


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def check_signup_fields(
    full_name: str,
    email: str,
    mobile_phone: str,
    password: str,
    confirm_password: str,
) -> Optional[str]:
    """
    Form-level checks done before a signup reaches the user directory.
    Returns the message to show, or None when the form is acceptable.
    """
    if not full_name or not email or not mobile_phone or not password:
        return "Please fill in all fields."
    if password != confirm_password:
        return "Passwords do not match!"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
    if not is_valid_email(email):
        return "Please enter a valid email address."
    return None
