"""Request and response models for the HTTP API."""

from pydantic import BaseModel, Field

FormValue = str | float | None


class MeasurementForm(BaseModel):
    """Measurement form values as submitted by the client.

    Values are left loose here; the calculation engine validates them so
    the client gets one descriptive message for the first bad field.
    """

    weight: FormValue = None
    height: FormValue = None
    age: FormValue = None
    neck: FormValue = None
    waist: FormValue = None
    hip: FormValue = None
    femininity_percentage: FormValue = None
    unit_system: str | None = None


class EntryForm(MeasurementForm):
    """Measurement form plus the entry metadata captured at save time."""

    date: str = ""
    notes: str = Field(default="", max_length=2000)
