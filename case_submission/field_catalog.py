"""
Field Catalog
Ordered sections of the case form and the field keys shown under each one.
Both the email body and the PDF summary are laid out from this catalog.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Section:
    title: str
    fields: tuple[str, ...]


FIELD_CATALOG: tuple[Section, ...] = (
    Section(
        "Patient Information",
        ("patientName", "birthDate", "surgeryDate", "dueDate"),
    ),
    Section(
        "Doctor Information",
        ("doctorName", "doctorLicense", "practiceName", "email", "phone", "fax", "address"),
    ),
    Section(
        "Case Details",
        (
            "surgicalGuideType",
            "numberOfImplants",
            "implantSystem",
            "toothNumbers",
            "sleeveSize",
            "boneReduction",
        ),
    ),
    Section(
        "Additional Information",
        ("shippingMethod", "additionalNotes"),
    ),
)


def iter_present_fields(form, section: Section):
    """Yield (key, value) for every field of the section with a non-empty value"""
    for key in section.fields:
        value = form.get(key)
        if value:
            yield key, value
