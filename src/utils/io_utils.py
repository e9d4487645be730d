"""Small formatting helpers: phone numbers and filenames."""
import re
from typing import Any, Optional

import pandas as pd

_NON_DIGITS = re.compile(r"\D")


def format_phone_number(phone: Any) -> Optional[Any]:
    """Format a principal office telephone number as "(206) 555-0100".

    ADV exports store numbers as text, ints, or floats such as 2065550100.0
    when a column has blanks. A leading US country code is dropped. Values
    that are not 10 digits come back unchanged; missing values become None.
    """
    if phone is None or pd.isna(phone):
        return None

    if isinstance(phone, float) and phone.is_integer():
        text = str(int(phone))
    else:
        text = str(phone).strip()
    if re.fullmatch(r"\d+\.0+", text):
        text = text.split(".", 1)[0]

    digits = _NON_DIGITS.sub("", text)
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) != 10:
        return phone
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def sanitize_filename(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_\-]", "", name.replace(" ", "_"))
