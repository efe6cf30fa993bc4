# barbershop/resolvers.py

import asyncio
import logging
from urllib.parse import quote

from .context import CallerContext
from .core import day_bounds, to_iso
from .deps import has_permission
from .errors import InvalidInput, NotFound, Unauthorized
from .models import Appointment, Barber
from .schemas import (
    AppointmentArgs,
    AppointmentsArgs,
    BarberAppointmentsArgs,
    BarberArgs,
    BarbersArgs,
    CreateAppointmentArgs,
    CreateBarberArgs,
    OperationRequest,
    UpdateAppointmentArgs,
    UpdateBarberArgs,
)
from .shaping import FieldSpec, attribute, parse_arguments, shape

logger = logging.getLogger(__name__)

READ_APPOINTMENTS_DATA = "read:appointments_data"
READ_BARBER_DATA = "read:barber_data"
UPDATE_BARBER = "update:barber"


# Query

async def appointments(_, args: AppointmentsArgs, ctx: CallerContext) -> list[Appointment]:
    # all appointments, or a barber's appointments for a day
    return await ctx.data.get_appointments(barber_id=args.barber_id, date=args.date)


async def appointment(_, args: AppointmentArgs, ctx: CallerContext):
    return await ctx.data.get_appointment(args.appointment_id)


async def barbers(_, args: BarbersArgs, ctx: CallerContext) -> list[Barber]:
    # all barbers, or only those free at dateTime
    return await ctx.data.get_barbers(date_time=args.date_time)


async def barber(_, args: BarberArgs, ctx: CallerContext) -> Barber:
    return await ctx.data.get_barber(barber_id=args.barber_id, email=args.email)


# Mutation

async def create_appointment(_, args: CreateAppointmentArgs, ctx: CallerContext) -> Appointment:
    return await ctx.data.create_appointment(args.input)


async def create_barber(_, args: CreateBarberArgs, ctx: CallerContext) -> Barber:
    # called by the identity provider's sign-up hook
    return await ctx.data.create_barber(args.input)


async def update_appointment(_, args: UpdateAppointmentArgs, ctx: CallerContext) -> Appointment:
    return await ctx.data.update_appointment(args.appointment_id, args.input)


async def update_barber(_, args: UpdateBarberArgs, ctx: CallerContext) -> Barber:
    # 1) Caller has permission to update barbers (admin only)
    # 2) Management token and provider domain are present
    if not (has_permission(ctx.user, UPDATE_BARBER) and ctx.management_token and ctx.domain):
        raise Unauthorized()

    updated = await ctx.data.update_barber(args.barber_id, args.input)
    await sync_profile(ctx, updated)
    return updated


async def sync_profile(ctx: CallerContext, updated: Barber) -> None:
    domain = ctx.domain.rstrip("/")
    if "://" not in domain:
        domain = f"https://{domain}"
    url = f"{domain}/api/v2/users/{quote(ctx.user.id, safe='')}"

    async with ctx.http_client() as client:
        response = await client.patch(
            url,
            json={"name": updated.full_name, "picture": updated.profile_image_url},
            headers={"Authorization": ctx.management_token.authorization},
        )
        response.raise_for_status()
    logger.info("Synced profile of user %s after updating barber %s", ctx.user.id, updated.id)


# Appointment fields

def protected_appointment_field(name: str):
    async def resolve(parent: Appointment, _, ctx: CallerContext):
        user = ctx.user
        if has_permission(user, READ_APPOINTMENTS_DATA):
            try:
                assigned_barber = await ctx.data.get_barber(email=user.email)
            except NotFound:
                raise Unauthorized()
            if user.email == assigned_barber.email:
                return getattr(parent, name)
        raise Unauthorized()

    return resolve


async def appointment_barber(parent: Appointment, _, ctx: CallerContext) -> Barber:
    return await ctx.data.get_barber(barber_id=parent.barber_id)


def appointment_time(parent: Appointment, _, ctx: CallerContext) -> str:
    return to_iso(parent.time)


# Barber fields

async def barber_appointments(parent: Barber, args: BarberAppointmentsArgs, ctx: CallerContext) -> list[Appointment]:
    found = await asyncio.gather(*(ctx.data.get_appointment(i) for i in parent.appointment_ids))
    found = [a for a in found if a is not None]

    if args.date:
        start, end = day_bounds(args.date)
        # strictly inside the day, an appointment at either midnight is left out
        found = [a for a in found if start < a.time < end]

    return sorted(found, key=lambda a: a.time)


async def barber_email(parent: Barber, _, ctx: CallerContext) -> str:
    user = ctx.user
    if user is not None and user.email == parent.email and has_permission(user, READ_BARBER_DATA):
        return parent.email
    raise Unauthorized()


TYPES = {
    "Appointment": {
        "id": FieldSpec(attribute("id"), default=True),
        "duration": FieldSpec(attribute("duration"), default=True),
        "name": FieldSpec(attribute("name"), default=True),
        "serviceName": FieldSpec(attribute("service_name"), default=True),
        "barberID": FieldSpec(attribute("barber_id"), default=True),
        "time": FieldSpec(appointment_time, default=True),
        "barber": FieldSpec(appointment_barber, type_name="Barber"),
        # protected
        "fullName": FieldSpec(protected_appointment_field("full_name")),
        "email": FieldSpec(protected_appointment_field("email")),
        "phoneNumber": FieldSpec(protected_appointment_field("phone_number")),
    },
    "Barber": {
        "id": FieldSpec(attribute("id"), default=True),
        "name": FieldSpec(attribute("name"), default=True),
        "profileImageURL": FieldSpec(attribute("profile_image_url"), default=True),
        "appointmentIDS": FieldSpec(attribute("appointment_ids"), default=True),
        "appointments": FieldSpec(barber_appointments, BarberAppointmentsArgs, "Appointment"),
        # protected
        "email": FieldSpec(barber_email),
    },
}

QUERIES = {
    "appointments": FieldSpec(appointments, AppointmentsArgs, "Appointment"),
    "appointment": FieldSpec(appointment, AppointmentArgs, "Appointment"),
    "barbers": FieldSpec(barbers, BarbersArgs, "Barber"),
    "barber": FieldSpec(barber, BarberArgs, "Barber"),
}

MUTATIONS = {
    "createAppointment": FieldSpec(create_appointment, CreateAppointmentArgs, "Appointment"),
    "createBarber": FieldSpec(create_barber, CreateBarberArgs, "Barber"),
    "updateAppointment": FieldSpec(update_appointment, UpdateAppointmentArgs, "Appointment"),
    "updateBarber": FieldSpec(update_barber, UpdateBarberArgs, "Barber"),
}


async def run_operation(request: OperationRequest, ctx: CallerContext) -> dict:
    operation = QUERIES.get(request.operation) or MUTATIONS.get(request.operation)
    if operation is None:
        raise InvalidInput(f"Unknown operation: {request.operation}")

    args = parse_arguments(operation.args, request.arguments)
    logger.debug("Running %s", request.operation)
    result = await operation.resolve(None, args, ctx)
    return {request.operation: await shape(ctx, TYPES, operation.type_name, result, request.selection)}
