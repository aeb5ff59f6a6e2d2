import re

_UPPERCASE_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def format_field_label(key: str) -> str:
    """
    Turn a compact mixed-case field key into a display label.

    patientName -> "Patient Name", numberOfImplants -> "Number Of Implants".
    Letters other than the first are left as they are.
    """
    if not key:
        return ""
    spaced = _UPPERCASE_BOUNDARY.sub(" ", key)
    return spaced[0].upper() + spaced[1:]
