"""
Case submission email body
Plain HTML fragment; the case data is laid out section by section from the field catalog.
"""

from collections.abc import Mapping, Sequence
from typing import Optional

from .field_catalog import FIELD_CATALOG, Section, iter_present_fields
from .formatting import format_field_label


def render_case_html(
    form: Mapping[str, str],
    catalog: Sequence[Section] = FIELD_CATALOG,
    attachment_names: Optional[Sequence[str]] = None,
) -> str:
    """
    Build the HTML body for a submitted case.

    Section headings are always written; a field line only when the form holds a
    non-empty value for it. Values are inserted as submitted, without escaping.
    """
    parts = ["<h1>New Case Submission</h1>"]

    for section in catalog:
        parts.append(f"<h2>{section.title}</h2>")
        for key, value in iter_present_fields(form, section):
            parts.append(f"<p><strong>{format_field_label(key)}:</strong> {value}</p>")

    if attachment_names is not None:
        listed = ", ".join(attachment_names) if attachment_names else "None"
        parts.append(f"<p><strong>Attachments:</strong> {listed}</p>")

    return "\n".join(parts)
