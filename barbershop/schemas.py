# barbershop/schemas.py

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import ServiceName


class WireModel(BaseModel):
    # camelCase on the wire, snake_case in code
    model_config = ConfigDict(populate_by_name=True)


class Name(BaseModel):
    first: str
    last: str


class CallerPublic(BaseModel):
    id: str
    email: Optional[str] = None
    permissions: List[str] = []


# Appointment inputs

class AppointmentCreate(WireModel):
    barber_id: str = Field(alias="barberID")
    name: Optional[Name] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    phone_number: str = Field(alias="phoneNumber")
    duration: float
    service_name: ServiceName = Field(alias="serviceName")
    time: str  # ISO-8601

    @model_validator(mode="after")
    def check_name(self):
        if self.name is None and self.full_name is None:
            raise ValueError("name or fullName is required")
        return self


class AppointmentUpdate(WireModel):
    barber_id: Optional[str] = Field(default=None, alias="barberID")
    name: Optional[Name] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    duration: Optional[float] = None
    service_name: Optional[ServiceName] = Field(default=None, alias="serviceName")
    time: Optional[str] = None


# Barber inputs: unknown fields are dropped, the appointment list is
# only ever appended to by appointment creation

class BarberCreate(WireModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str
    name: Optional[Name] = None
    profile_image_url: Optional[str] = Field(default=None, alias="profileImageURL")


class BarberUpdate(WireModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: Optional[str] = None
    name: Optional[Name] = None
    profile_image_url: Optional[str] = Field(default=None, alias="profileImageURL")


# Operation arguments

class AppointmentsArgs(WireModel):
    barber_id: Optional[str] = Field(default=None, alias="barberID")
    date: Optional[str] = None  # yyyy-mm-dd


class AppointmentArgs(WireModel):
    appointment_id: str = Field(alias="appointmentID")


class BarbersArgs(WireModel):
    date_time: Optional[str] = Field(default=None, alias="dateTime")


class BarberArgs(WireModel):
    barber_id: Optional[str] = Field(default=None, alias="barberID")
    email: Optional[str] = None


class CreateAppointmentArgs(WireModel):
    input: AppointmentCreate


class CreateBarberArgs(WireModel):
    input: BarberCreate


class UpdateAppointmentArgs(WireModel):
    appointment_id: str = Field(alias="appointmentID")
    input: AppointmentUpdate


class UpdateBarberArgs(WireModel):
    barber_id: str = Field(alias="barberID")
    input: BarberUpdate


class BarberAppointmentsArgs(WireModel):
    date: Optional[str] = None


class NoArgs(WireModel):
    pass


# Parsed operation handed to the resolvers

class FieldSelection(BaseModel):
    name: str
    arguments: dict[str, Any] = {}
    selection: List["FieldSelection"] = []


class OperationRequest(BaseModel):
    operation: str
    arguments: dict[str, Any] = {}
    selection: List[FieldSelection] = []
